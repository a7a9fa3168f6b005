"""Shared fixtures for the swap_tokens test suite."""

import logging

import bitcoin
import pytest
import structlog

from swap_tokens.models import (
    AllExtras,
    BtcExtraArgs,
    BtcOutPoint,
    BuildTxArgs,
    EthExtraArgs,
    RippleExtra,
    SwapInfo,
    SwapTxType,
    SwapType,
    TerraExtra,
)


@pytest.fixture(autouse=True)
def reset_global_state():
    """Undo logging and bitcoin network changes made by a test."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    bitcoin.SelectParams("mainnet")


@pytest.fixture
def swap_info():
    """Swap identity for a swap-out on an account chain."""
    return SwapInfo(
        pair_id="USDC",
        swap_id="0x6b1f3c2d",
        swap_type=SwapType.SWAPOUT,
        tx_type=SwapTxType.SWAPOUT_TX,
        bind="0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0",
        identifier="bridge-v1",
    )


@pytest.fixture
def eth_args(swap_info):
    """Build args routed to an account chain."""
    return BuildTxArgs(
        swap_info=swap_info,
        from_address="0x1111111111111111111111111111111111111111",
        to_address="0x2222222222222222222222222222222222222222",
        value=1_500_000_000_000_000_000,
        memo="swapout",
        extra=AllExtras(
            replace_num=1,
            eth_extra=EthExtraArgs(gas=90000, gas_price=20_000_000_000, nonce=7),
        ),
    )


@pytest.fixture
def ripple_args(swap_info):
    """Build args routed to an XRP style ledger."""
    return BuildTxArgs(
        swap_info=swap_info,
        extra=AllExtras(ripple_extra=RippleExtra(sequence=12, fee=10)),
    )


@pytest.fixture
def terra_args(swap_info):
    """Build args routed to a Cosmos style chain."""
    return BuildTxArgs(
        swap_info=swap_info,
        extra=AllExtras(terra_extra=TerraExtra(sequence=30, fees="1000uluna", gas=200000)),
    )


@pytest.fixture
def btc_args(swap_info):
    """Build args spending two UTXOs."""
    return BuildTxArgs(
        swap_info=swap_info,
        extra=AllExtras(
            btc_extra=BtcExtraArgs(
                relay_fee_per_kb=2000,
                change_address="bc1qchangeaddressxxxxxxxxxxxxxxxxxxxxxx",
                previous_out_points=[
                    BtcOutPoint(tx_hash="aa" * 32, index=1),
                    BtcOutPoint(tx_hash="bb" * 32, index=0),
                ],
            )
        ),
    )
