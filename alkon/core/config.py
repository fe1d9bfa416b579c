"""Configuration management for alkon.

This module handles the small ``Alkon.toml`` file and the per-run context:

1. Command-line flags (highest priority)
2. Environment variables
3. TOML configuration file
4. Default values (lowest priority)

Example Alkon.toml:
    ```toml
    [github]
    owner = "octocat"
    [paths]
    tool_chest = "AlkonToolChest"
    ```

Environment Variables:
    ALKON_CONFIG: Override the config file path
    ALKON_TOOL_CHEST: Override the tool chest for this run
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import json
import os
import tomllib  # Python 3.11+

from .errors import AlkonError, ConfigIncomplete, ConfigInvalid, ConfigMissing

DEFAULT_CONFIG_PATH = "Alkon.toml"
DEFAULT_TOOL_CHEST = "AlkonToolChest"

CONFIG_TEMPLATE = """\
[github]
owner = {owner}
[paths]
tool_chest = {tool_chest}
"""


@dataclass
class Config:
    """Values stored in the config file.

    Attributes:
        owner: GitHub login whose repositories are listed.
        tool_chest: Directory that selected repositories are cloned into.
            Empty when the file does not set it.
    """

    owner: str = ""
    tool_chest: str = ""


@dataclass
class Context:
    """Per-run settings passed into every operation.

    Attributes:
        config_path: Location of the config file.
        tool_chest_override: Tool chest forced for this run, if any.
        verbose: Whether debug messages are shown.
    """

    config_path: Path = Path(DEFAULT_CONFIG_PATH)
    tool_chest_override: str | None = None
    verbose: bool = False


def load_context(config_path: str | None = None,
                 tool_chest: str | None = None,
                 verbose: bool = False) -> Context:
    """Build a `Context` from CLI values, falling back to the environment.

    Args:
        config_path: Value of ``--config=``, if given.
        tool_chest: Value of ``--tool-chest=``, if given.
        verbose: Whether ``--verbose`` was given.

    Returns:
        Context with CLI > env > default precedence applied.
    """
    path = config_path or os.getenv("ALKON_CONFIG") or DEFAULT_CONFIG_PATH
    override = tool_chest or os.getenv("ALKON_TOOL_CHEST") or None
    return Context(config_path=Path(path), tool_chest_override=override, verbose=verbose)


def _text(section: object, key: str) -> str:
    if not isinstance(section, dict):
        return ""
    value = section.get(key, "")
    return str(value).strip()


def load_config(path: str | Path) -> Config | None:
    """Load the config file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Config with stripped values, or None if the file does not exist.
        Missing keys load as empty strings.

    Raises:
        ConfigInvalid: If the file is not UTF-8 or not valid TOML. A key
            given twice in one table makes the file invalid.
    """
    p = Path(path)
    if not p.is_file():
        return None
    try:
        with p.open("rb") as f:
            data = tomllib.load(f)
    except UnicodeDecodeError as e:
        raise ConfigInvalid(f"Config at {p} is not valid UTF-8: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigInvalid(
            f"Config at {p} is not valid TOML (each key may appear only once per table): {e}"
        ) from e
    return Config(
        owner=_text(data.get("github"), "owner"),
        tool_chest=_text(data.get("paths"), "tool_chest"),
    )


def render_config(owner: str, tool_chest: str) -> str:
    """Return the config file text for the given values."""
    # JSON string escaping is a valid TOML basic string.
    return CONFIG_TEMPLATE.format(
        owner=json.dumps(owner, ensure_ascii=False),
        tool_chest=json.dumps(tool_chest, ensure_ascii=False),
    )


def save_config(path: str | Path, owner: str, tool_chest: str) -> Path:
    """Write a new config file.

    Raises:
        FileExistsError: If a file already exists at `path`. Existing
            configs are never overwritten.
        AlkonError: If the file or its parent directory cannot be created.
    """
    p = Path(path)
    if p.exists():
        raise FileExistsError(f"Config already exists: {p}")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("x", encoding="utf-8") as f:
            f.write(render_config(owner, tool_chest))
    except FileExistsError as e:
        if p.exists():
            raise
        raise AlkonError(f"Cannot write config {p}: {p.parent} is not a directory") from e
    except OSError as e:
        raise AlkonError(f"Cannot write config {p}: {e}") from e
    return p


def require_owner(ctx: Context) -> Config:
    """Load the config and insist on a non-empty owner.

    Raises:
        ConfigMissing: If the file does not exist.
        ConfigIncomplete: If ``github.owner`` is empty.
    """
    cfg = load_config(ctx.config_path)
    if cfg is None:
        raise ConfigMissing(f"Config missing: {ctx.config_path} (run init first)")
    if not cfg.owner:
        raise ConfigIncomplete(f"Owner not set in {ctx.config_path} (run init).")
    return cfg


def resolve_tool_chest(ctx: Context, cfg: Config | None = None) -> str:
    """Pick the tool chest: override > config value > default."""
    if ctx.tool_chest_override:
        return ctx.tool_chest_override
    if cfg is not None and cfg.tool_chest:
        return cfg.tool_chest
    return DEFAULT_TOOL_CHEST
