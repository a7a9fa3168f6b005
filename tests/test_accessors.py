"""Tests for the chain-agnostic accessors on BuildTxArgs."""

import pytest

from swap_tokens.models import (
    AllExtras,
    BtcExtraArgs,
    BuildTxArgs,
    EthExtraArgs,
    RippleExtra,
    TerraExtra,
)


class TestReplaceNum:
    """Test replacement counter access."""

    def test_zero_without_extras(self):
        assert BuildTxArgs().get_replace_num() == 0

    def test_returns_stored_value(self):
        args = BuildTxArgs(extra=AllExtras(replace_num=3))
        assert args.get_replace_num() == 3

    def test_set_without_extras_is_noop(self):
        args = BuildTxArgs()
        args.set_replace_num(5)
        assert args.extra is None
        assert args.get_replace_num() == 0

    def test_set_overwrites(self, btc_args):
        btc_args.set_replace_num(4)
        assert btc_args.get_replace_num() == 4
        btc_args.set_replace_num(0)
        assert btc_args.get_replace_num() == 0


class TestNonce:
    """Test nonce/sequence access per chain family."""

    def test_zero_without_extras(self):
        assert BuildTxArgs().get_tx_nonce() == 0

    def test_zero_when_no_sequencing_field_set(self):
        args = BuildTxArgs(
            extra=AllExtras(
                eth_extra=EthExtraArgs(gas=21000),
                ripple_extra=RippleExtra(fee=12),
                terra_extra=TerraExtra(fees="10uluna"),
            )
        )
        assert args.get_tx_nonce() == 0

    def test_eth_round_trip(self, eth_args):
        assert eth_args.get_tx_nonce() == 7
        eth_args.set_tx_nonce(8)
        assert eth_args.get_tx_nonce() == 8
        assert eth_args.extra.eth_extra.nonce == 8

    def test_ripple_round_trip(self, ripple_args):
        assert ripple_args.get_tx_nonce() == 12
        ripple_args.set_tx_nonce(99)
        assert ripple_args.get_tx_nonce() == 99
        assert ripple_args.extra.ripple_extra.sequence == 99

    def test_ripple_sequence_truncated_to_uint32(self, ripple_args):
        ripple_args.set_tx_nonce(2**32 + 5)
        assert ripple_args.get_tx_nonce() == 5

    def test_terra_round_trip(self, terra_args):
        assert terra_args.get_tx_nonce() == 30
        terra_args.set_tx_nonce(2**40)
        assert terra_args.get_tx_nonce() == 2**40
        assert terra_args.extra.terra_extra.sequence == 2**40

    def test_nonce_assigned_into_empty_variant(self):
        args = BuildTxArgs(extra=AllExtras(terra_extra=TerraExtra()))
        args.set_tx_nonce(0)
        assert args.extra.terra_extra.sequence == 0

    def test_set_without_extras_is_noop(self):
        args = BuildTxArgs()
        args.set_tx_nonce(3)
        assert args.extra is None
        assert args.get_tx_nonce() == 0

    def test_set_on_utxo_args_is_noop(self, btc_args):
        before = btc_args.model_dump()
        btc_args.set_tx_nonce(3)
        assert btc_args.model_dump() == before
        assert btc_args.get_tx_nonce() == 0

    def test_read_priority_when_several_variants_set(self):
        args = BuildTxArgs(
            extra=AllExtras(
                ripple_extra=RippleExtra(sequence=2),
                terra_extra=TerraExtra(sequence=3),
            )
        )
        assert args.get_tx_nonce() == 2

        args.extra.eth_extra = EthExtraArgs(nonce=1)
        assert args.get_tx_nonce() == 1

    def test_only_first_variant_written(self):
        args = BuildTxArgs(
            extra=AllExtras(
                eth_extra=EthExtraArgs(),
                ripple_extra=RippleExtra(sequence=2),
                terra_extra=TerraExtra(sequence=3),
            )
        )

        args.set_tx_nonce(50)

        assert args.extra.eth_extra.nonce == 50
        assert args.extra.ripple_extra.sequence == 2
        assert args.extra.terra_extra.sequence == 3


class TestGasPrice:
    """Test gas price access."""

    def test_get_from_eth_extras(self, eth_args):
        assert eth_args.get_tx_gas_price() == 20_000_000_000

    @pytest.mark.parametrize("fixture_name", ["ripple_args", "terra_args", "btc_args"])
    def test_get_is_none_for_other_families(self, request, fixture_name):
        args = request.getfixturevalue(fixture_name)
        assert args.get_tx_gas_price() is None

    def test_set_replaces_value(self, eth_args):
        eth_args.set_tx_gas_price(10**30)
        assert eth_args.get_tx_gas_price() == 10**30

    def test_set_without_extras_is_noop(self):
        args = BuildTxArgs()
        args.set_tx_gas_price(5)
        assert args.extra is None
        assert args.get_tx_gas_price() is None

    def test_set_without_eth_variant_is_noop(self, ripple_args):
        before = ripple_args.model_dump()
        ripple_args.set_tx_gas_price(5)
        assert ripple_args.model_dump() == before
        assert ripple_args.extra.eth_extra is None


class TestExtraArgs:
    """Test the reduced build context."""

    def test_keeps_identity_and_extras_only(self, eth_args):
        eth_args.origin_from = "0x3333"
        eth_args.origin_tx_to = "0x4444"
        eth_args.origin_value = 2
        eth_args.swap_value = 1
        eth_args.input_data = b"\xa9\x05\x9c\xbb"

        reduced = eth_args.get_extra_args()

        assert reduced.swap_info == eth_args.swap_info
        assert reduced.extra is eth_args.extra
        assert reduced.from_address == ""
        assert reduced.to_address == ""
        assert reduced.origin_from == ""
        assert reduced.origin_tx_to == ""
        assert reduced.value is None
        assert reduced.origin_value is None
        assert reduced.swap_value is None
        assert reduced.memo == ""
        assert reduced.input_data is None

    def test_receiver_unchanged(self, eth_args):
        before = eth_args.model_dump()
        eth_args.get_extra_args()
        assert eth_args.model_dump() == before

    def test_swap_identity_is_copied(self, eth_args):
        reduced = eth_args.get_extra_args()
        reduced.swap_info.reswapping = True
        assert eth_args.reswapping is False

    def test_without_extras(self, swap_info):
        reduced = BuildTxArgs(swap_info=swap_info, memo="x").get_extra_args()
        assert reduced.extra is None
        assert reduced.swap_id == swap_info.swap_id


class TestReplacement:
    """Test replacement attempts."""

    def test_bumps_counter_on_copy(self, eth_args):
        replacement = eth_args.new_replacement()

        assert replacement.get_replace_num() == 2
        assert eth_args.get_replace_num() == 1
        assert replacement.extra is not eth_args.extra
        assert replacement.get_tx_nonce() == eth_args.get_tx_nonce()

    def test_replacement_gas_price_independent(self, eth_args):
        replacement = eth_args.new_replacement()
        replacement.set_tx_gas_price(30_000_000_000)

        assert eth_args.get_tx_gas_price() == 20_000_000_000

    def test_without_extras(self):
        replacement = BuildTxArgs(memo="m").new_replacement()
        assert replacement.get_replace_num() == 0
        assert replacement.memo == "m"

    def test_utxo_selection_preserved(self, btc_args):
        replacement = btc_args.new_replacement()
        hashes = [p.tx_hash for p in replacement.extra.btc_extra.previous_out_points]
        assert hashes == ["aa" * 32, "bb" * 32]
        assert isinstance(replacement.extra.btc_extra, BtcExtraArgs)
