"""Command-line interface for the quote oracle."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import load_config
from .errors import QuoteError
from .factory import build_oracle
from .logging_setup import configure_logging


def _amount(text: str) -> int:
    """Parse an integer amount, accepting scientific shorthand like ``1e18``."""
    text = text.strip().replace("_", "")
    if "e" in text.lower():
        mantissa, _, exponent = text.lower().partition("e")
        if not mantissa.isdigit() or not exponent.isdigit():
            raise argparse.ArgumentTypeError(f"invalid amount: {text!r}")
        return int(mantissa) * 10 ** int(exponent)
    if not text.isdigit():
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}")
    return int(text)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="quote-oracle",
        description="Cross-pair bid/ask quote oracle",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("name", help="Print the oracle name")

    for command, help_text in (
        ("quote", "Midpoint output amount"),
        ("quotes", "Bid and ask output amounts"),
    ):
        p = sub.add_parser(command, help=help_text)
        p.add_argument("amount", type=_amount, help="Input amount in base units")
        p.add_argument("base", help="Base asset identifier")
        p.add_argument("quote", help="Quote asset identifier")

    describe_parser = sub.add_parser("describe", help="Show how a pair resolves")
    describe_parser.add_argument("base", help="Base asset identifier")
    describe_parser.add_argument("quote", help="Quote asset identifier")

    return parser


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    oracle = build_oracle(load_config(args.config))

    if args.command == "name":
        print(oracle.name())
    elif args.command == "describe":
        print(oracle.describe(args.base, args.quote))
    elif args.command == "quote":
        print(await oracle.get_quote(args.amount, args.base, args.quote))
    elif args.command == "quotes":
        bid, ask = await oracle.get_quotes(args.amount, args.base, args.quote)
        print(f"bid {bid}")
        print(f"ask {ask}")
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except QuoteError as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(2)
