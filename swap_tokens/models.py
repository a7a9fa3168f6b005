"""
Data structures shared by the swap detector, builder and signer.

A detected transfer comes in as a TxSwapInfo, the builder turns it into a
BuildTxArgs carrying one chain-family extension (AllExtras), and the signer
reads and bumps nonce/fee values through the accessors on BuildTxArgs so it
never has to care whether the destination is an account chain, a
ledger-sequence chain or a UTXO chain.

JSON keys are fixed by the aliases below and must stay stable, other
services decode partial payloads of these records.
"""

import base64
from enum import IntEnum
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from bitcoin.core import COutPoint, lx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

logger = structlog.get_logger()

UINT32_MASK = 0xFFFFFFFF

ReceiptT = TypeVar("ReceiptT")


def _unknown_member(enum_cls, value):
    """Build a pseudo member so out-of-range ordinals survive decoding."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    member = int.__new__(enum_cls, value)
    member._name_ = f"UNKNOWN_{value}"
    member._value_ = value
    return member


class SwapType(IntEnum):
    """Direction of a swap."""

    NONE = 0
    SWAPIN = 1
    SWAPOUT = 2

    @classmethod
    def _missing_(cls, value):
        return _unknown_member(cls, value)

    def __str__(self) -> str:
        return _SWAP_TYPE_LABELS.get(self.value, f"unknown swap type {self.value}")


class SwapTxType(IntEnum):
    """Strategy used to build the outbound transaction."""

    SWAPIN_TX = 0
    SWAPOUT_TX = 1
    P2SH_SWAPIN_TX = 2  # deposit through a generated P2SH script

    @classmethod
    def _missing_(cls, value):
        return _unknown_member(cls, value)

    def __str__(self) -> str:
        return _SWAP_TX_TYPE_LABELS.get(
            self.value, f"unknown swaptx type {self.value}"
        )


_SWAP_TYPE_LABELS = {
    SwapType.NONE.value: "noswap",
    SwapType.SWAPIN.value: "swapin",
    SwapType.SWAPOUT.value: "swapout",
}

_SWAP_TX_TYPE_LABELS = {
    SwapTxType.SWAPIN_TX.value: "swapintx",
    SwapTxType.SWAPOUT_TX.value: "swapouttx",
    SwapTxType.P2SH_SWAPIN_TX.value: "p2shswapintx",
}


def _is_empty(value: Any, default: Any) -> bool:
    # Optional fields (default None) only count as empty when unset,
    # so an assigned nonce of 0 is still encoded.
    if value is None:
        return True
    if default is None:
        return False
    if isinstance(value, (bool, int, str, bytes, list, tuple, dict)):
        return not value
    return False


class SwapModel(BaseModel):
    """
    Base for every record in this package.

    Fields listed in ``__omitempty__`` are dropped from the dumped mapping
    when they hold their zero value, mirroring the encoding the other
    bridge services expect.
    """

    model_config = ConfigDict(populate_by_name=True)

    __omitempty__: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def drop_empty_fields(self, handler) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        for name in self.__omitempty__:
            field = fields[name]
            if not _is_empty(getattr(self, name), field.default):
                continue
            data.pop(name, None)
            if field.alias:
                data.pop(field.alias, None)
        return data


class TxSwapInfo(SwapModel):
    """One transfer observed on the source chain. Immutable once detected."""

    model_config = ConfigDict(frozen=True)

    pair_id: str = Field("", alias="pairid", description="Token pair identifier")
    tx_hash: str = Field("", alias="hash", description="Source transaction hash")
    height: int = Field(0, description="Block height of the source transaction")
    timestamp: int = Field(0, description="Block timestamp (unix seconds)")
    from_address: str = Field("", alias="from", description="Sender address")
    tx_to: str = Field("", alias="txto", description="Transaction recipient")
    to_address: str = Field("", alias="to", description="Transfer recipient")
    bind: str = Field("", description="Address bound on the other chain")
    value: int | None = Field(None, description="Transferred amount in base units")


class TxStatus(SwapModel, Generic[ReceiptT]):
    """
    Point-in-time inclusion status of a transaction.

    The poller replaces the whole snapshot on every refresh so height and
    hash always come from the same chain query. The receipt shape belongs
    to the chain client; parametrize as ``TxStatus[MyReceipt]`` to have it
    decoded, otherwise it stays whatever the JSON held.
    """

    model_config = ConfigDict(frozen=True)

    __omitempty__ = frozenset({"receipt"})

    receipt: ReceiptT | None = Field(None, description="Chain specific receipt")
    confirmations: int = 0
    block_height: int = 0
    block_hash: str = ""
    block_time: int = 0


class SwapInfo(SwapModel):
    """Identity and classification of a logical swap."""

    __omitempty__ = frozenset(
        {
            "pair_id",
            "swap_id",
            "swap_type",
            "tx_type",
            "bind",
            "identifier",
            "reswapping",
        }
    )

    pair_id: str = Field("", alias="pairid")
    swap_id: str = Field("", alias="swapid")
    swap_type: SwapType = Field(SwapType.NONE, alias="swaptype")
    tx_type: SwapTxType = Field(SwapTxType.SWAPIN_TX, alias="txtype")
    bind: str = ""
    identifier: str = ""
    reswapping: bool = Field(
        False, description="Set when this build retries a failed attempt"
    )

    def is_swapin(self) -> bool:
        return self.swap_type == SwapType.SWAPIN


class EthExtraArgs(SwapModel):
    """Account-chain fields. None means not assigned yet."""

    __omitempty__ = frozenset({"gas", "gas_price", "gas_tip_cap", "gas_fee_cap", "nonce"})

    gas: int | None = None
    gas_price: int | None = Field(None, alias="gasPrice")
    gas_tip_cap: int | None = Field(None, alias="gasTipCap")
    gas_fee_cap: int | None = Field(None, alias="gasFeeCap")
    nonce: int | None = None


class RippleExtra(SwapModel):
    """Ledger-sequence fields for XRP style chains."""

    __omitempty__ = frozenset({"sequence", "fee"})

    sequence: int | None = Field(None, description="Account sequence (uint32)")
    fee: int | None = Field(None, description="Fee in drops")


class TerraExtra(SwapModel):
    """Ledger-sequence fields for Cosmos style chains."""

    __omitempty__ = frozenset({"sequence", "fees", "gas"})

    sequence: int | None = None
    fees: str | None = Field(None, description="Fee coins, e.g. '1000uluna'")
    gas: int | None = None


class BtcOutPoint(SwapModel):
    """Reference to a spent UTXO."""

    model_config = ConfigDict(frozen=True)

    tx_hash: str = Field(alias="hash", description="Funding transaction id (hex)")
    index: int = Field(description="Output index within the funding transaction")

    def to_outpoint(self) -> COutPoint:
        """Convert to a bitcoinlib outpoint (txid is given in display order)."""
        return COutPoint(lx(self.tx_hash), self.index)


class BtcExtraArgs(SwapModel):
    """
    UTXO-chain fields.

    previous_out_points is ordered; its order is the input order of the
    transaction that gets built. change_address is internal to the builder
    and is neither encoded nor read back from encoded payloads.
    """

    __omitempty__ = frozenset({"relay_fee_per_kb", "previous_out_points"})

    relay_fee_per_kb: int | None = Field(None, alias="relayFeePerKb")
    change_address: str | None = Field(None, exclude=True)
    previous_out_points: list[BtcOutPoint] = Field(
        default_factory=list, alias="previousOutPoints"
    )

    @model_validator(mode="before")
    @classmethod
    def ignore_encoded_change_address(cls, data: Any, info: ValidationInfo) -> Any:
        if info.mode == "json" and isinstance(data, dict):
            data = {
                key: value
                for key, value in data.items()
                if key not in ("change_address", "changeAddress")
            }
        return data


class AllExtras(SwapModel):
    """
    Chain-family extension of BuildTxArgs.

    Exactly one of the four variants is expected to be populated. That is
    left to the builder; nothing here enforces it, and the accessors on
    BuildTxArgs pick the first populated variant in a fixed order.
    """

    __omitempty__ = frozenset(
        {"replace_num", "btc_extra", "eth_extra", "ripple_extra", "terra_extra"}
    )

    replace_num: int = Field(0, alias="replaceNum")
    btc_extra: BtcExtraArgs | None = Field(None, alias="btcExtra")
    eth_extra: EthExtraArgs | None = Field(None, alias="ethExtra")
    ripple_extra: RippleExtra | None = Field(None, alias="rippleExtra")
    terra_extra: TerraExtra | None = Field(None, alias="terraExtra")

    def populated_variants(self) -> list[str]:
        """Encoded keys of the variants that are set, in declaration order."""
        fields = type(self).model_fields
        return [
            fields[name].alias
            for name in ("btc_extra", "eth_extra", "ripple_extra", "terra_extra")
            if getattr(self, name) is not None
        ]


class BuildTxArgs(SwapModel):
    """
    Everything needed to build one outbound transaction.

    from/to may have been substituted by the builder; origin_from and
    origin_tx_to keep the addresses as they were observed. One instance is
    one build attempt, replacements go through new_replacement().
    """

    __omitempty__ = frozenset(
        {
            "from_address",
            "to_address",
            "origin_from",
            "origin_tx_to",
            "value",
            "origin_value",
            "swap_value",
            "memo",
            "input_data",
            "extra",
        }
    )

    swap_info: SwapInfo = Field(default_factory=SwapInfo, alias="swapInfo")
    from_address: str = Field("", alias="from")
    to_address: str = Field("", alias="to")
    origin_from: str = Field("", alias="originFrom")
    origin_tx_to: str = Field("", alias="originTxTo")
    value: int | None = Field(None, description="Amount to send")
    origin_value: int | None = Field(
        None, alias="originValue", description="Amount observed on the source chain"
    )
    swap_value: int | None = Field(
        None, alias="swapvalue", description="Amount after swap fees"
    )
    memo: str = ""
    input_data: bytes | None = Field(None, alias="input", description="Raw call data")
    extra: AllExtras | None = None

    @field_validator("input_data", mode="before")
    @classmethod
    def decode_input(cls, value: Any) -> Any:
        if isinstance(value, str):
            return base64.b64decode(value, validate=True)
        return value

    @field_serializer("input_data", when_used="json-unless-none")
    def encode_input(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")

    # Read-through access to the embedded swap identity

    @property
    def pair_id(self) -> str:
        return self.swap_info.pair_id

    @property
    def swap_id(self) -> str:
        return self.swap_info.swap_id

    @property
    def swap_type(self) -> SwapType:
        return self.swap_info.swap_type

    @property
    def tx_type(self) -> SwapTxType:
        return self.swap_info.tx_type

    @property
    def bind(self) -> str:
        return self.swap_info.bind

    @property
    def identifier(self) -> str:
        return self.swap_info.identifier

    @property
    def reswapping(self) -> bool:
        return self.swap_info.reswapping

    def is_swapin(self) -> bool:
        return self.swap_info.is_swapin()

    # Chain-agnostic accessors. None of these raise; missing extras give
    # a zero value or do nothing.

    def get_replace_num(self) -> int:
        """Number of replacement attempts, 0 without extras."""
        if self.extra is not None:
            return self.extra.replace_num
        return 0

    def set_replace_num(self, replace_num: int) -> None:
        if self.extra is None:
            logger.debug("Replace count not set, no extras", swap_id=self.swap_id)
            return
        self.extra.replace_num = replace_num

    def get_extra_args(self) -> "BuildTxArgs":
        """
        Reduced copy holding only the swap identity and the extras.

        The extras object is shared with the receiver, the swap identity
        is copied.
        """
        return BuildTxArgs(swap_info=self.swap_info.model_copy(), extra=self.extra)

    def get_tx_gas_price(self) -> int | None:
        if self.extra is not None and self.extra.eth_extra is not None:
            return self.extra.eth_extra.gas_price
        return None

    def set_tx_gas_price(self, gas_price: int | None) -> None:
        if self.extra is None or self.extra.eth_extra is None:
            logger.debug(
                "Gas price not set, no account-chain extras", swap_id=self.swap_id
            )
            return
        self.extra.eth_extra.gas_price = gas_price

    def get_tx_nonce(self) -> int:
        """
        Sender sequencing value of whichever chain family is populated.

        Checked in order: account nonce, ripple sequence, terra sequence.
        """
        extra = self.extra
        if extra is None:
            return 0
        if extra.eth_extra is not None and extra.eth_extra.nonce is not None:
            return extra.eth_extra.nonce
        if extra.ripple_extra is not None and extra.ripple_extra.sequence is not None:
            return extra.ripple_extra.sequence
        if extra.terra_extra is not None and extra.terra_extra.sequence is not None:
            return extra.terra_extra.sequence
        return 0

    def set_tx_nonce(self, nonce: int) -> None:
        """Write nonce into the first populated variant (eth, ripple, terra)."""
        extra = self.extra
        if extra is None:
            logger.debug("Nonce not set, no extras", swap_id=self.swap_id)
        elif extra.eth_extra is not None:
            extra.eth_extra.nonce = nonce
        elif extra.ripple_extra is not None:
            extra.ripple_extra.sequence = nonce & UINT32_MASK
        elif extra.terra_extra is not None:
            extra.terra_extra.sequence = nonce
        else:
            logger.debug(
                "Nonce not set, no sequenced extras",
                swap_id=self.swap_id,
                variants=extra.populated_variants(),
            )

    def new_replacement(self) -> "BuildTxArgs":
        """Deep copy for a replacement attempt, replace count bumped by one."""
        replacement = self.model_copy(deep=True)
        replacement.set_replace_num(self.get_replace_num() + 1)
        return replacement


class P2shAddressInfo(SwapModel):
    """Deposit script generated for a bound user address."""

    model_config = ConfigDict(frozen=True)

    bind_address: str = Field(alias="BindAddress")
    p2sh_address: str = Field(alias="P2shAddress")
    redeem_script: str = Field(alias="RedeemScript", description="Hex encoded")
    redeem_script_disasm: str = Field(alias="RedeemScriptDisasm")
