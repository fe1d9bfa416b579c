"""Command-line interface for alkon.

This module scans the command line, builds the run context and dispatches
to one of the three operations:

    - ``init``: create ``Alkon.toml`` with the detected GitHub user
    - ``--list``: list the configured owner's repositories
    - ``--fzf``: pick a repository with fzf and clone it into the tool chest

Usage:
    ```bash
    alkon init
    alkon --list
    alkon --tool-chest=~/src --fzf
    alkon --config=other.toml --list
    ```

Arguments are scanned permissively: known flags and one command keyword
are picked out, the last command keyword wins, and anything else is
ignored with a warning. ``-h``/``--help`` stops scanning and prints usage.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence
import sys

from dotenv import find_dotenv, load_dotenv

from ..core.commands import init_config, list_repos, select_and_clone
from ..core.config import Context, load_context
from ..core.errors import AlkonError
from ..core.messages import fail, info, setup_logging, warn
from ..core.tools import Toolbox

USAGE = """\
Alkon CLI
Usage: alkon [--config=Alkon.toml] [--tool-chest=PATH] [command]

Commands:
  init          create Alkon.toml with detected GitHub user
  --list        list repos for configured user
  --fzf         fzf-select repo and clone into tool chest

Options:
  --config=PATH      Use alternate config path (default: Alkon.toml, or $ALKON_CONFIG)
  --tool-chest=PATH  Override tool chest path for this run (or $ALKON_TOOL_CHEST)
  -v, --verbose      Show debug messages
  -h, --help         Show this help
"""

Operation = Callable[[Context, Toolbox], int]

COMMANDS: Dict[str, Operation] = {
    "init": init_config,
    "--list": list_repos,
    "--fzf": select_and_clone,
}


@dataclass
class Invocation:
    """Result of scanning the command line.

    Attributes:
        command: Selected command keyword, or None.
        config_path: Value of ``--config=``, if non-empty.
        tool_chest: Value of ``--tool-chest=``, if non-empty.
        verbose: Whether debug output was requested.
        show_help: Whether ``-h``/``--help`` was seen.
        ignored: Tokens that matched nothing, in order.
    """

    command: Optional[str] = None
    config_path: Optional[str] = None
    tool_chest: Optional[str] = None
    verbose: bool = False
    show_help: bool = False
    ignored: List[str] = field(default_factory=list)


def parse_args(argv: Sequence[str]) -> Invocation:
    """Scan `argv` in order into an `Invocation`.

    Never raises: unrecognized tokens are collected in ``ignored``.
    """
    inv = Invocation()
    for arg in argv:
        if arg.startswith("--config="):
            inv.config_path = arg.partition("=")[2] or None
        elif arg.startswith("--tool-chest="):
            inv.tool_chest = arg.partition("=")[2] or None
        elif arg in ("-h", "--help"):
            inv.show_help = True
            break
        elif arg in ("-v", "--verbose"):
            inv.verbose = True
        elif arg in COMMANDS:
            inv.command = arg
        else:
            inv.ignored.append(arg)
    return inv


def report_config_status(ctx: Context) -> None:
    """Log whether the config file exists, with a hint to run init if not."""
    if ctx.config_path.is_file():
        info(f"Found config: {ctx.config_path}")
    else:
        warn(f"Config missing: {ctx.config_path}")
        warn("Run 'alkon init' to create the config.")


def run(inv: Invocation, tools: Optional[Toolbox] = None) -> int:
    """Execute a scanned invocation and return the process exit code."""
    if inv.show_help:
        print(USAGE, end="")
        return 0

    ctx = load_context(inv.config_path, inv.tool_chest, inv.verbose)
    for token in inv.ignored:
        warn(f"Ignoring unrecognized argument: {token}")
    report_config_status(ctx)

    if inv.command is None:
        print(USAGE, end="")
        return 0
    operation = COMMANDS.get(inv.command)
    if operation is None:
        fail(f"Unknown command: {inv.command}")
        return 1

    try:
        return operation(ctx, tools or Toolbox())
    except AlkonError as e:
        fail(str(e))
        for hint in e.hints:
            warn(hint)
        return 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the ``alkon`` console script.

    Loads a ``.env`` file if present, configures tagged logging, runs the
    selected operation and exits with its status.

    Raises:
        SystemExit: Always, carrying the exit code (0 success or no-op, 1 failure).
    """
    load_dotenv(find_dotenv(usecwd=True))
    inv = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(verbose=inv.verbose)
    sys.exit(run(inv))


if __name__ == "__main__":
    main()
