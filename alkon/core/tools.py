"""Wrappers for the local external tools: ``fzf`` and ``git``.

Together with `GhCli` they make up the `Toolbox` handed to every
operation, so command logic never shells out directly.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable
import shutil
import subprocess

from .errors import AlkonError, CloneFailed
from .github import GhCli, Runner, run_cmd
from .messages import debug

FZF_INSTALL_HINTS = (
    "Install macOS: brew install fzf && $(brew --prefix fzf)/install",
    "Debian/Ubuntu: sudo apt update && sudo apt install fzf",
    "Fedora: sudo dnf install fzf",
    "Arch: sudo pacman -S fzf",
)

# fzf exits 1 when nothing matched and 130 when the user aborted.
FZF_NO_SELECTION = (1, 130)


class Fzf:
    """Interactive single-select over tab-separated lines."""

    def __init__(self, binary: str = "fzf", runner: Runner = run_cmd):
        self.binary = binary
        self.runner = runner

    def is_available(self) -> bool:
        """Return True if fzf is on PATH."""
        return shutil.which(self.binary) is not None

    def select(self, lines: Iterable[str], with_nth: str = "1,2,3,4", prompt: str = "Clone repo> ") -> str:
        """Show `lines` in fzf and return the chosen line verbatim, or "".

        Only the fields in `with_nth` are displayed; the full line is
        returned. The picker draws on the terminal, so only stdout is piped.
        """
        cmd = [self.binary, "--delimiter=\t", f"--with-nth={with_nth}", f"--prompt={prompt}"]
        r = self.runner(cmd, input="\n".join(lines) + "\n", stdout=subprocess.PIPE)
        if r.returncode in FZF_NO_SELECTION:
            return ""
        if r.returncode != 0:
            raise AlkonError(f"fzf exited with status {r.returncode}.")
        return (r.stdout or "").rstrip("\n")


class Git:
    """The bits of ``git`` alkon relies on."""

    def __init__(self, binary: str = "git", runner: Runner = run_cmd):
        self.binary = binary
        self.runner = runner

    def is_available(self) -> bool:
        """Return True if git is on PATH."""
        return shutil.which(self.binary) is not None

    def config_get(self, key: str) -> str:
        """Return a global git config value, or "" when unset."""
        r = self.runner([self.binary, "config", "--global", key])
        if r.returncode != 0:
            return ""
        return (r.stdout or "").strip()

    def clone(self, url: str, dest: Path) -> None:
        """Clone `url` into `dest`, streaming git's progress to the terminal.

        Raises:
            CloneFailed: If git exits non-zero.
        """
        r = self.runner([self.binary, "clone", url, str(dest)], stdout=None, stderr=None)
        if r.returncode != 0:
            raise CloneFailed(f"git clone of {url} into {dest} failed (exit {r.returncode}).")


def ask(prompt: str) -> str:
    """Read one line from the terminal; end of input counts as empty."""
    try:
        return input(prompt)
    except EOFError:
        debug("No input available; using default.")
        return ""


@dataclass
class Toolbox:
    """External capabilities used by the CLI operations."""

    gh: GhCli = field(default_factory=GhCli)
    fzf: Fzf = field(default_factory=Fzf)
    git: Git = field(default_factory=Git)
    ask: Callable[[str], str] = ask
