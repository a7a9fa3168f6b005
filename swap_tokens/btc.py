"""Bitcoin helpers for P2SH deposit swaps.

The deposit script itself is generated elsewhere; these only describe an
existing redeem script so it can be stored next to the bound address.
"""

import bitcoin
import structlog
from bitcoin.core.script import CScript, CScriptInvalidError, CScriptOp
from bitcoin.wallet import P2SHBitcoinAddress

from .errors import ConfigurationError, ScriptError
from .models import P2shAddressInfo

logger = structlog.get_logger()


def select_network(name: str) -> None:
    """Select the bitcoinlib chain params used for address encoding."""
    try:
        bitcoin.SelectParams(name)
    except ValueError as e:
        raise ConfigurationError(f"unknown bitcoin network {name!r}") from e
    logger.debug("Selected bitcoin network", network=name)


def disassemble_script(script: bytes) -> str:
    """
    Render a script the way block explorers do.

    Opcodes by name, pushed data as hex, small integers as decimal.
    """
    parts = []
    try:
        for element in CScript(script):
            if isinstance(element, CScriptOp):
                parts.append(repr(element))
            elif isinstance(element, int):
                parts.append(str(element))
            elif not element:
                parts.append("0")  # OP_0 pushes an empty vector
            else:
                parts.append(element.hex())
    except CScriptInvalidError as e:
        raise ScriptError(f"cannot disassemble script: {e}") from e
    return " ".join(parts)


def p2sh_address_info(bind_address: str, redeem_script: bytes) -> P2shAddressInfo:
    """Describe the P2SH deposit address generated for ``bind_address``."""
    disasm = disassemble_script(redeem_script)
    p2sh_address = P2SHBitcoinAddress.from_redeemScript(CScript(redeem_script))
    logger.info(
        "Derived P2SH deposit address",
        bind_address=bind_address,
        p2sh_address=str(p2sh_address),
    )
    return P2shAddressInfo(
        bind_address=bind_address,
        p2sh_address=str(p2sh_address),
        redeem_script=redeem_script.hex(),
        redeem_script_disasm=disasm,
    )
