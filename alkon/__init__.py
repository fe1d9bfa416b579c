"""Alkon: a small GitHub bootstrap toolkit.

Lists your GitHub repositories and clones the one you pick into a local
tool chest directory. GitHub access, fuzzy selection and cloning are
delegated to ``gh``, ``fzf`` and ``git``.

Features:
    - ``alkon init`` writes Alkon.toml with the detected GitHub user
    - ``alkon --list`` prints the configured owner's repositories
    - ``alkon --fzf`` picks a repository with fzf and clones it
    - ``alkon-inventory`` summarizes counts, top stars and stale repos

Quick Start:
    ```python
    import alkon

    ctx = alkon.load_context(config_path="Alkon.toml")
    cfg = alkon.load_config(ctx.config_path)

    repos = alkon.GhCli().list_repos("octocat", ["name", "stargazerCount"])
    best = alkon.top_by_stars(repos)
    ```

CLI Usage:
    ```bash
    alkon init
    alkon --list
    alkon --tool-chest=~/src --fzf
    alkon-inventory --stale-days 180
    ```
"""

__version__ = "0.1.0"

# Re-export main functionality for easy importing
from .core import (
    Config,
    Context,
    load_config,
    load_context,
    save_config,
    GhCli,
    Repository,
    Toolbox,
    top_by_stars,
    stale_repos,
    summarize_account,
)

__all__ = [
    "Config",
    "Context",
    "load_config",
    "load_context",
    "save_config",
    "GhCli",
    "Repository",
    "Toolbox",
    "top_by_stars",
    "stale_repos",
    "summarize_account",
]
