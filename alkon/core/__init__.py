"""Core functionality for alkon.

This module contains the logic behind the CLIs:
- Config file handling and the per-run context
- GitHub CLI, fzf and git wrappers
- Account inventory views
- The init / list / select-and-clone operations
"""

from .config import Config, Context, load_config, load_context, save_config
from .github import GhCli, Repository
from .tools import Fzf, Git, Toolbox
from .inventory import count_repos, stale_repos, summarize_account, top_by_stars
from .commands import init_config, list_repos, select_and_clone

__all__ = [
    "Config",
    "Context",
    "load_config",
    "load_context",
    "save_config",
    "GhCli",
    "Repository",
    "Fzf",
    "Git",
    "Toolbox",
    "count_repos",
    "stale_repos",
    "summarize_account",
    "top_by_stars",
    "init_config",
    "list_repos",
    "select_and_clone",
]
