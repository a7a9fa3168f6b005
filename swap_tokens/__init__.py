"""Swap Tokens - shared data model for cross-chain swap transactions."""

__version__ = "0.1.0"

from .codec import decode, encode, to_dict
from .errors import ConfigurationError, DecodeError, ScriptError, SwapTokensError
from .models import (
    AllExtras,
    BtcExtraArgs,
    BtcOutPoint,
    BuildTxArgs,
    EthExtraArgs,
    P2shAddressInfo,
    RippleExtra,
    SwapInfo,
    SwapTxType,
    SwapType,
    TerraExtra,
    TxStatus,
    TxSwapInfo,
)

__all__ = [
    "AllExtras",
    "BtcExtraArgs",
    "BtcOutPoint",
    "BuildTxArgs",
    "ConfigurationError",
    "DecodeError",
    "EthExtraArgs",
    "P2shAddressInfo",
    "RippleExtra",
    "ScriptError",
    "SwapInfo",
    "SwapTokensError",
    "SwapTxType",
    "SwapType",
    "TerraExtra",
    "TxStatus",
    "TxSwapInfo",
    "decode",
    "encode",
    "to_dict",
]
