"""Command-line interface for inspecting and editing encoded build args."""

import logging
import sys

import click
import structlog
from structlog.stdlib import LoggerFactory

from . import __version__
from .btc import p2sh_address_info, select_network
from .codec import decode, encode
from .config import config
from .errors import SwapTokensError
from .models import BuildTxArgs, SwapTxType, SwapType

logger = structlog.get_logger()


def configure_logging(level: str = config.log_level, fmt: str = config.log_format):
    """Route structlog through stdlib logging on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _load_args(stream) -> BuildTxArgs:
    """Decode build args from a file, exiting with status 1 on bad input."""
    try:
        return decode(stream.read(), BuildTxArgs)
    except SwapTokensError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)


def _echo_args(args: BuildTxArgs):
    click.echo(encode(args, indent=config.json_indent or None))


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=config.log_level, help="Logging level")
def cli(log_level: str):
    """Swap Tokens - cross-chain swap transaction arguments."""
    configure_logging(level=log_level)


@cli.command()
@click.argument("source", type=click.File("r"))
def inspect(source):
    """Show swap identity and chain-specific values of encoded build args."""
    args = _load_args(source)
    variants = args.extra.populated_variants() if args.extra else []

    click.echo(f"Swap ID: {args.swap_id or '-'}")
    click.echo(f"  Pair ID: {args.pair_id or '-'}")
    click.echo(f"  Swap type: {str(args.swap_type)}")
    click.echo(f"  Tx type: {str(args.tx_type)}")
    click.echo(f"  Reswapping: {'yes' if args.reswapping else 'no'}")
    click.echo(f"  Chain extras: {', '.join(variants) if variants else 'none'}")
    click.echo(f"  Nonce: {args.get_tx_nonce()}")
    gas_price = args.get_tx_gas_price()
    if gas_price is not None:
        click.echo(f"  Gas price: {gas_price}")
    click.echo(f"  Replace count: {args.get_replace_num()}")


@cli.command("set-nonce")
@click.argument("source", type=click.File("r"))
@click.option("--nonce", required=True, type=click.IntRange(min=0), help="Nonce or sequence to assign")
def set_nonce(source, nonce: int):
    """Assign the nonce/sequence and print the updated build args."""
    args = _load_args(source)
    args.set_tx_nonce(nonce)
    logger.info("Assigned nonce", swap_id=args.swap_id, nonce=args.get_tx_nonce())
    _echo_args(args)


@cli.command("set-gas-price")
@click.argument("source", type=click.File("r"))
@click.option("--gas-price", required=True, type=click.IntRange(min=0), help="Gas price in wei")
def set_gas_price(source, gas_price: int):
    """Assign the gas price (account chains only) and print the build args."""
    args = _load_args(source)
    args.set_tx_gas_price(gas_price)
    _echo_args(args)


@cli.command()
@click.argument("source", type=click.File("r"))
@click.option("--gas-price", type=click.IntRange(min=0), default=None, help="New gas price for the replacement")
def bump(source, gas_price: int | None):
    """Print the build args for the next replacement attempt."""
    args = _load_args(source)
    replacement = args.new_replacement()
    if gas_price is not None:
        replacement.set_tx_gas_price(gas_price)
    logger.info(
        "Prepared replacement",
        swap_id=replacement.swap_id,
        replace_num=replacement.get_replace_num(),
    )
    _echo_args(replacement)


@cli.command()
def types():
    """List swap types and swap transaction types."""
    click.echo("Swap types:")
    for swap_type in SwapType:
        click.echo(f"  {swap_type.value}: {str(swap_type)}")
    click.echo("Swap tx types:")
    for tx_type in SwapTxType:
        click.echo(f"  {tx_type.value}: {str(tx_type)}")


@cli.command()
@click.option("--bind", "bind_address", required=True, help="Bound user address")
@click.option("--script", "script_hex", required=True, help="Redeem script (hex)")
@click.option("--network", default=config.bitcoin_network, help="Bitcoin network")
def p2sh(bind_address: str, script_hex: str, network: str):
    """Describe the P2SH deposit address of a redeem script."""
    try:
        redeem_script = bytes.fromhex(script_hex)
    except ValueError:
        click.echo("✗ Redeem script is not valid hex", err=True)
        sys.exit(1)

    try:
        select_network(network)
        info = p2sh_address_info(bind_address, redeem_script)
    except SwapTokensError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    click.echo(encode(info, indent=config.json_indent or None))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
