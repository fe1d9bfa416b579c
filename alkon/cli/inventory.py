"""Command-line entry point for the account inventory.

Usage:
    ```bash
    alkon-inventory
    alkon-inventory --top 10 --stale-days 180
    ```
"""
from __future__ import annotations
from datetime import timedelta
from typing import Optional, Sequence
import argparse
import sys

from dotenv import find_dotenv, load_dotenv

from ..core.errors import AlkonError
from ..core.github import GhCli
from ..core.inventory import STALE_AFTER, TOP_N, summarize_account
from ..core.messages import fail, setup_logging, warn


def non_negative(value: str) -> int:
    """Parse an integer option that must be 0 or greater."""
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for ``--top``, ``--stale-days`` and ``--verbose``."""
    p = argparse.ArgumentParser(
        prog="alkon-inventory",
        description="Summarize the authenticated GitHub account: counts, top stars, stale repos.",
    )
    p.add_argument("--top", type=non_negative, default=TOP_N, help=f"Rows in the top-by-stars table (default: {TOP_N})")
    p.add_argument("--stale-days", type=non_negative, default=STALE_AFTER.days,
                   help=f"Days without updates before a repo is stale (default: {STALE_AFTER.days})")
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    return p


def main(argv: Optional[Sequence[str]] = None, gh: Optional[GhCli] = None) -> None:
    """Entry point for the ``alkon-inventory`` console script."""
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    try:
        code = summarize_account(gh or GhCli(), top=args.top, max_age=timedelta(days=args.stale_days))
    except AlkonError as e:
        fail(str(e))
        for hint in e.hints:
            warn(hint)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
