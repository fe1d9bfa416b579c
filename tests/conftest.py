"""Shared fixtures for alkon tests."""

import logging
from unittest.mock import MagicMock

import pytest

from alkon.core.github import GhCli, Repository
from alkon.core.tools import Fzf, Git, Toolbox


@pytest.fixture(autouse=True)
def isolated_alkon(monkeypatch, caplog):
    """Keep env overrides and logger state from leaking between tests."""
    monkeypatch.delenv("ALKON_CONFIG", raising=False)
    monkeypatch.delenv("ALKON_TOOL_CHEST", raising=False)
    logger = logging.getLogger("alkon")
    handlers, level = logger.handlers[:], logger.level
    caplog.set_level(logging.DEBUG, logger="alkon")
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def tools():
    """Toolbox whose external tools are all mocks, ready and logged in."""
    gh = MagicMock(spec=GhCli)
    gh.is_available.return_value = True
    gh.is_authenticated.return_value = True
    gh.current_login.return_value = ""
    gh.list_repos.return_value = []

    fzf = MagicMock(spec=Fzf)
    fzf.is_available.return_value = True
    fzf.select.return_value = ""

    git = MagicMock(spec=Git)
    git.is_available.return_value = True
    git.config_get.return_value = ""

    return Toolbox(gh=gh, fzf=fzf, git=git, ask=MagicMock(return_value=""))


@pytest.fixture
def make_repo():
    """Factory building a `Repository` from gh-style JSON keys."""
    def _make(name, stars=0, updated="2024-01-15T10:00:00Z", private=False, **extra):
        data = {
            "name": name,
            "visibility": "PRIVATE" if private else "PUBLIC",
            "updatedAt": updated,
            "stargazerCount": stars,
            "isPrivate": private,
            "sshUrl": f"git@github.com:alice/{name}.git",
            "url": f"https://github.com/alice/{name}",
        }
        data.update(extra)
        return Repository.model_validate(data)
    return _make


@pytest.fixture
def logged(caplog):
    """Return logged alkon messages, optionally filtered by level."""
    def _logged(level=None):
        return [
            r.getMessage() for r in caplog.records
            if r.name == "alkon" and (level is None or r.levelno == level)
        ]
    return _logged
