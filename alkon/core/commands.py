"""The operations behind ``alkon init``, ``--list`` and ``--fzf``.

Each operation takes the run `Context` and a `Toolbox`, returns an exit
code for benign outcomes and raises `AlkonError` for failures.
"""
from __future__ import annotations
from pathlib import Path
from typing import Callable, Tuple

from .config import (
    DEFAULT_TOOL_CHEST,
    Context,
    require_owner,
    resolve_tool_chest,
    save_config,
)
from .errors import AlkonError, InputRequired, MalformedSelection, MissingDependency
from .github import Repository
from .messages import debug, info, warn
from .render import format_table
from .tools import FZF_INSTALL_HINTS, Toolbox

LIST_FIELDS = ("name", "visibility", "updatedAt", "stargazerCount")
CLONE_FIELDS = ("name", "visibility", "stargazerCount", "sshUrl", "url", "updatedAt")


def detect_owner(tools: Toolbox) -> str:
    """Guess the GitHub login for a new config.

    Tries the authenticated ``gh`` user, then ``git config github.user``,
    then the first word of ``git config user.name``. Returns "" if nothing
    is found.
    """
    gh = tools.gh
    if gh.is_available() and gh.is_authenticated():
        login = gh.current_login()
        if login:
            return login
    if tools.git.is_available():
        alias = tools.git.config_get("github.user")
        if alias:
            return alias
        words = tools.git.config_get("user.name").split()
        if words:
            return words[0]
    return ""


def init_config(ctx: Context, tools: Toolbox) -> int:
    """Create the config file, prompting for owner and tool chest.

    An existing config is left untouched.
    """
    path = ctx.config_path
    if path.exists():
        warn(f"Config already exists at {path}; skipping init.")
        return 0

    detected = detect_owner(tools)
    if detected:
        info(f"Detected GitHub user: {detected}")
    else:
        warn("Could not detect GitHub user automatically.")

    owner = tools.ask(f"GitHub owner to use [{detected or 'enter username'}]: ").strip() or detected
    if not owner:
        raise InputRequired("Owner is required.")

    default_chest = ctx.tool_chest_override or DEFAULT_TOOL_CHEST
    chest = tools.ask(f"Tool chest path to use [{default_chest}]: ").strip() or default_chest

    save_config(path, owner, chest)
    info(f"Wrote config to {path}")
    return 0


def list_row(repo: Repository) -> list:
    """Return the name, visibility, stars and update date shown by ``--list``."""
    return [repo.name, repo.visibility, repo.stars, repo.updated_date]


def list_repos(ctx: Context, tools: Toolbox, out: Callable[[str], None] = print) -> int:
    """Print the configured owner's repositories as a table."""
    cfg = require_owner(ctx)
    tools.gh.require_ready()
    info(f"Listing repos for {cfg.owner}")
    repos = tools.gh.list_repos(cfg.owner, LIST_FIELDS)
    if not repos:
        warn(f"No repos found for {cfg.owner}")
        return 0
    out(format_table(list_row(r) for r in repos))
    return 0


def selection_line(repo: Repository) -> str:
    """Tab-separated picker line: name, visibility, stars, updated, clone URL."""
    return "\t".join([repo.name, repo.visibility, str(repo.stars), repo.updated_date, repo.clone_url])


def parse_selection(line: str) -> Tuple[str, str]:
    """Split a picker line into ``(name, clone_url)``.

    Raises:
        MalformedSelection: If the name or URL field is missing.
    """
    fields = line.split("\t")
    name = fields[0].strip()
    url = fields[4].strip() if len(fields) > 4 else ""
    if not url:
        raise MalformedSelection("Could not parse repo URL from selection.")
    if not name:
        raise MalformedSelection("Could not parse repo name from selection.")
    return name, url


def select_and_clone(ctx: Context, tools: Toolbox) -> int:
    """Let the user pick a repository with fzf and clone it into the tool chest.

    Cloning is skipped when ``<tool_chest>/<name>/.git`` already exists.
    """
    if not tools.fzf.is_available():
        raise MissingDependency("fzf is required for --fzf.", hints=FZF_INSTALL_HINTS)
    cfg = require_owner(ctx)
    debug(f"owner='{cfg.owner}'")
    chest = resolve_tool_chest(ctx, cfg)
    debug(f"chest_cfg='{cfg.tool_chest}' override='{ctx.tool_chest_override or ''}' resolved='{chest}'")
    tools.gh.require_ready()

    info(f"Fetching repos for {cfg.owner}...")
    repos = tools.gh.list_repos(cfg.owner, CLONE_FIELDS)
    if not repos:
        warn(f"No repos found for {cfg.owner}")
        return 0

    selected = tools.fzf.select(selection_line(r) for r in repos)
    if not selected.strip():
        warn("No repo selected.")
        return 0
    name, url = parse_selection(selected)

    chest_dir = Path(chest).expanduser()
    try:
        chest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise AlkonError(f"Cannot create tool chest {chest_dir}: {e}") from e
    target = chest_dir / name
    if (target / ".git").is_dir():
        warn(f"Repo already cloned at {target}")
        return 0

    if not tools.git.is_available():
        raise MissingDependency("git is required to clone repositories.")
    info(f"Cloning {name} -> {target}")
    tools.git.clone(url, target)
    info("Done.")
    return 0
