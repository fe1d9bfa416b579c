"""GitHub CLI wrapper for repository data retrieval.

This module talks to GitHub exclusively through the ``gh`` command-line
tool, which owns authentication and API access. Each call is a single
blocking subprocess; there is no caching and no retry.

Example:
    ```python
    from alkon.core.github import GhCli

    gh = GhCli()
    gh.require_ready()
    repos = gh.list_repos("octocat", ["name", "stargazerCount", "updatedAt"])
    ```
"""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence
import json
import shutil
import subprocess

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import FetchFailed, MissingDependency, Unauthenticated
from .messages import debug

REPO_LIMIT = 200

Runner = Callable[..., subprocess.CompletedProcess]


def run_cmd(cmd: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """Run a command without raising on a non-zero exit.

    Output is captured as text unless the caller passes its own
    ``stdout``/``stderr``/``capture_output`` arguments.
    """
    debug(f"Running: {' '.join(cmd)}")
    if not {"stdout", "stderr", "capture_output"} & kwargs.keys():
        kwargs["capture_output"] = True
    return subprocess.run(list(cmd), text=True, check=False, **kwargs)


class Repository(BaseModel):
    """One row of ``gh repo list --json`` output.

    Field aliases match the JSON keys emitted by ``gh``; only the fields
    that were requested need to be present.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    visibility: str = ""
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    stars: int = Field(default=0, alias="stargazerCount")
    is_private: bool = Field(default=False, alias="isPrivate")
    ssh_url: str = Field(default="", alias="sshUrl")
    url: str = ""

    @field_validator("name")
    @classmethod
    def name_is_path_component(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Repository name must not be empty")
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"Repository name is not a single path component: {v!r}")
        return v

    @field_validator("updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def updated_date(self) -> str:
        """Date part of the last update, ``YYYY-MM-DD`` in UTC."""
        if self.updated_at is None:
            return ""
        return self.updated_at.astimezone(timezone.utc).date().isoformat()

    @property
    def clone_url(self) -> str:
        """SSH clone URL, falling back to the web URL."""
        return self.ssh_url or self.url


class GhCli:
    """Capability wrapper around the ``gh`` binary.

    Attributes:
        binary: Name or path of the executable.
        runner: Callable used to execute commands; swap it out in tests.
    """

    def __init__(self, binary: str = "gh", runner: Runner = run_cmd):
        self.binary = binary
        self.runner = runner

    def is_available(self) -> bool:
        """Return True if the gh binary is on PATH."""
        return shutil.which(self.binary) is not None

    def is_authenticated(self) -> bool:
        """Return True if `gh auth status` succeeds."""
        return self.runner([self.binary, "auth", "status"]).returncode == 0

    def current_login(self) -> str:
        """Return the authenticated login, or "" if it cannot be determined."""
        r = self.runner([self.binary, "api", "user", "--jq", ".login"])
        if r.returncode != 0:
            debug(f"gh api user failed: {(r.stderr or '').strip()}")
            return ""
        return (r.stdout or "").strip()

    def require_ready(self) -> None:
        """Insist that ``gh`` is installed and logged in.

        Raises:
            MissingDependency: If ``gh`` is not on PATH.
            Unauthenticated: If ``gh auth status`` fails.
        """
        if not self.is_available():
            raise MissingDependency("GitHub CLI (gh) is required.")
        if not self.is_authenticated():
            raise Unauthenticated("gh auth status failed; run 'gh auth login'.")

    def list_repos(self, owner: str, fields: Sequence[str], limit: int = REPO_LIMIT) -> List[Repository]:
        """Return up to `limit` repositories owned by `owner`.

        Args:
            owner: GitHub login or organization.
            fields: JSON fields to request from ``gh repo list``.
            limit: Maximum number of repositories, in ``gh``'s own order.

        Raises:
            FetchFailed: If ``gh`` fails or emits unparseable output.
        """
        cmd = [self.binary, "repo", "list", owner, "--limit", str(limit), "--json", ",".join(fields)]
        r = self.runner(cmd)
        if r.returncode != 0:
            debug(f"gh repo list failed: {(r.stderr or '').strip()}")
            raise FetchFailed("Failed to fetch repos.")
        try:
            data = json.loads(r.stdout or "[]")
            return [Repository.model_validate(item) for item in data]
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise FetchFailed(f"Failed to parse repo list from gh: {e}") from e
