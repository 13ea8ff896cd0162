"""
Unit tests for reading the staged diff and running the commit.

Run with:
    pytest tests/test_git.py -v
"""

import subprocess

import pytest

from aicommit.git import GitError, get_staged_diff, run_commit
from aicommit.git import repo


@pytest.fixture
def fake_run(monkeypatch):
    """Replace subprocess.run; returns the list of recorded calls and a setter."""
    calls = []
    outcome = {}

    def _run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        if "error" in outcome:
            raise outcome["error"]
        return subprocess.CompletedProcess(cmd, outcome.get("returncode", 0), outcome.get("stdout", ""), "")

    monkeypatch.setattr(repo.subprocess, "run", _run)
    return calls, outcome


class TestGetStagedDiff:

    def test_returns_stdout(self, fake_run):
        calls, outcome = fake_run
        outcome["stdout"] = "diff --git a/foo.py b/foo.py\n+hello\n"

        assert get_staged_diff() == "diff --git a/foo.py b/foo.py\n+hello\n"
        assert calls[0][0] == ["git", "diff", "--staged"]
        assert calls[0][1]["capture_output"] is True

    def test_empty_when_nothing_staged(self, fake_run):
        assert get_staged_diff() == ""

    def test_git_missing(self, fake_run):
        _, outcome = fake_run
        outcome["error"] = FileNotFoundError("git")
        with pytest.raises(GitError, match="Git is not installed or not in PATH"):
            get_staged_diff()

    def test_git_failure_carries_stderr(self, fake_run):
        _, outcome = fake_run
        outcome["error"] = subprocess.CalledProcessError(
            128, ["git", "diff", "--staged"], stderr="fatal: not a git repository\n"
        )
        with pytest.raises(GitError) as exc_info:
            get_staged_diff()
        assert "fatal: not a git repository" in str(exc_info.value)
        assert "\n" not in str(exc_info.value)

    def test_git_failure_without_stderr(self, fake_run):
        _, outcome = fake_run
        outcome["error"] = subprocess.CalledProcessError(2, ["git", "diff", "--staged"], stderr="")
        with pytest.raises(GitError, match="exit status 2"):
            get_staged_diff()


class TestRunCommit:

    def test_passes_message_and_inherits_terminal(self, fake_run):
        calls, _ = fake_run
        assert run_commit("feat: add login") == 0
        cmd, kwargs = calls[0]
        assert cmd == ["git", "commit", "-m", "feat: add login"]
        assert "capture_output" not in kwargs

    @pytest.mark.parametrize("status", [1, 128])
    def test_returns_raw_status(self, fake_run, status):
        _, outcome = fake_run
        outcome["returncode"] = status
        assert run_commit("fix: x") == status

    def test_git_missing(self, fake_run):
        _, outcome = fake_run
        outcome["error"] = FileNotFoundError("git")
        with pytest.raises(GitError):
            run_commit("fix: x")
