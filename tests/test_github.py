"""Tests for the repository model and the gh/fzf/git wrappers (with mocking)."""

import json
import subprocess
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from alkon.core.errors import AlkonError, CloneFailed, FetchFailed, MissingDependency, Unauthenticated
from alkon.core.github import GhCli, Repository, run_cmd
from alkon.core.tools import Fzf, Git, ask


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRepositoryModel:
    """Test parsing of gh repo list JSON."""

    def test_parses_gh_keys(self):
        """gh's camelCase keys map onto the model fields."""
        repo = Repository.model_validate({
            "name": "dotfiles",
            "visibility": "PUBLIC",
            "updatedAt": "2024-03-05T23:59:59Z",
            "stargazerCount": 7,
            "isPrivate": False,
            "sshUrl": "git@github.com:alice/dotfiles.git",
        })
        assert repo.stars == 7
        assert repo.updated_at == datetime(2024, 3, 5, 23, 59, 59, tzinfo=timezone.utc)
        assert repo.updated_date == "2024-03-05"
        assert repo.clone_url == "git@github.com:alice/dotfiles.git"

    def test_clone_url_falls_back_to_web_url(self):
        repo = Repository.model_validate({"name": "x", "url": "https://github.com/alice/x"})
        assert repo.clone_url == "https://github.com/alice/x"

    def test_missing_timestamp(self):
        """Only requested fields need to be present."""
        repo = Repository.model_validate({"name": "x"})
        assert repo.updated_at is None
        assert repo.updated_date == ""

    def test_naive_timestamp_is_utc(self):
        repo = Repository.model_validate({"name": "x", "updatedAt": "2024-01-01T00:00:00"})
        assert repo.updated_at.tzinfo == timezone.utc

    @pytest.mark.parametrize("bad", ["", "   ", "..", "a/b"])
    def test_rejects_unsafe_names(self, bad):
        """Names must be usable as a single directory name."""
        with pytest.raises(ValidationError):
            Repository.model_validate({"name": bad})


class TestGhCli:
    """Test the gh wrapper with a fake runner."""

    def test_list_repos_builds_command(self):
        """The owner, limit and fields are passed to gh repo list."""
        payload = [{"name": "a", "stargazerCount": 1}, {"name": "b", "stargazerCount": 2}]
        runner = MagicMock(return_value=completed(stdout=json.dumps(payload)))
        repos = GhCli(runner=runner).list_repos("alice", ["name", "stargazerCount"])

        runner.assert_called_once_with(
            ["gh", "repo", "list", "alice", "--limit", "200", "--json", "name,stargazerCount"]
        )
        assert [r.name for r in repos] == ["a", "b"]

    def test_list_repos_failure(self):
        runner = MagicMock(return_value=completed(returncode=1, stderr="HTTP 502"))
        with pytest.raises(FetchFailed, match="Failed to fetch repos"):
            GhCli(runner=runner).list_repos("alice", ["name"])

    def test_list_repos_bad_json(self):
        runner = MagicMock(return_value=completed(stdout="not json"))
        with pytest.raises(FetchFailed):
            GhCli(runner=runner).list_repos("alice", ["name"])

    def test_current_login(self):
        runner = MagicMock(return_value=completed(stdout="alice\n"))
        assert GhCli(runner=runner).current_login() == "alice"
        runner.assert_called_once_with(["gh", "api", "user", "--jq", ".login"])

    def test_current_login_failure_is_empty(self):
        runner = MagicMock(return_value=completed(returncode=1))
        assert GhCli(runner=runner).current_login() == ""

    def test_is_authenticated(self):
        assert GhCli(runner=MagicMock(return_value=completed(0))).is_authenticated()
        assert not GhCli(runner=MagicMock(return_value=completed(1))).is_authenticated()

    @patch("alkon.core.github.shutil.which", return_value=None)
    def test_require_ready_missing(self, _which):
        """A missing binary is reported before auth is checked."""
        runner = MagicMock()
        with pytest.raises(MissingDependency, match=r"GitHub CLI \(gh\) is required"):
            GhCli(runner=runner).require_ready()
        runner.assert_not_called()

    @patch("alkon.core.github.shutil.which", return_value="/usr/bin/gh")
    def test_require_ready_unauthenticated(self, _which):
        runner = MagicMock(return_value=completed(returncode=1))
        with pytest.raises(Unauthenticated, match="gh auth login"):
            GhCli(runner=runner).require_ready()


class TestFzf:
    """Test the fzf wrapper."""

    def test_select_returns_line(self):
        """The chosen line comes back without its newline."""
        runner = MagicMock(return_value=completed(stdout="b\tPUBLIC\t0\t2024-01-01\turl\n"))
        line = Fzf(runner=runner).select(["a\tx", "b\tPUBLIC\t0\t2024-01-01\turl"])
        assert line == "b\tPUBLIC\t0\t2024-01-01\turl"

        cmd = runner.call_args[0][0]
        assert cmd[0] == "fzf"
        assert "--with-nth=1,2,3,4" in cmd
        assert "--delimiter=\t" in cmd
        assert runner.call_args[1]["input"] == "a\tx\nb\tPUBLIC\t0\t2024-01-01\turl\n"
        assert runner.call_args[1]["stdout"] == subprocess.PIPE

    @pytest.mark.parametrize("code", [1, 130])
    def test_abort_is_empty(self, code):
        """Escape or no match means nothing was selected."""
        runner = MagicMock(return_value=completed(returncode=code))
        assert Fzf(runner=runner).select(["a"]) == ""

    def test_other_failure_raises(self):
        runner = MagicMock(return_value=completed(returncode=2))
        with pytest.raises(AlkonError):
            Fzf(runner=runner).select(["a"])


class TestGit:
    """Test the git wrapper."""

    def test_config_get(self):
        runner = MagicMock(return_value=completed(stdout="Ada Lovelace\n"))
        assert Git(runner=runner).config_get("user.name") == "Ada Lovelace"
        runner.assert_called_once_with(["git", "config", "--global", "user.name"])

    def test_config_get_unset(self):
        runner = MagicMock(return_value=completed(returncode=1))
        assert Git(runner=runner).config_get("github.user") == ""

    def test_clone_streams_output(self, tmp_path):
        """Clone output goes to the terminal rather than being captured."""
        runner = MagicMock(return_value=completed())
        Git(runner=runner).clone("git@github.com:alice/x.git", tmp_path / "x")
        runner.assert_called_once_with(
            ["git", "clone", "git@github.com:alice/x.git", str(tmp_path / "x")], stdout=None, stderr=None
        )

    def test_clone_failure(self, tmp_path):
        runner = MagicMock(return_value=completed(returncode=128))
        with pytest.raises(CloneFailed):
            Git(runner=runner).clone("git@github.com:alice/x.git", tmp_path / "x")


class TestRunCmd:
    """Test the subprocess helper."""

    @patch("alkon.core.github.subprocess.run")
    def test_captures_by_default(self, mock_run):
        run_cmd(["gh", "--version"])
        mock_run.assert_called_once_with(["gh", "--version"], text=True, check=False, capture_output=True)

    @patch("alkon.core.github.subprocess.run")
    def test_respects_explicit_streams(self, mock_run):
        run_cmd(["git", "clone"], stdout=None, stderr=None)
        mock_run.assert_called_once_with(["git", "clone"], text=True, check=False, stdout=None, stderr=None)


class TestAsk:
    """Test the terminal prompt helper."""

    @patch("builtins.input", side_effect=EOFError)
    def test_eof_is_empty(self, _input):
        assert ask("Owner: ") == ""

    @patch("builtins.input", return_value="bob")
    def test_returns_input(self, _input):
        assert ask("Owner: ") == "bob"
