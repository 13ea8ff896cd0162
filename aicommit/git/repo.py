"""Git Repo - Read the staged diff and run the commit."""

import subprocess


class GitError(Exception):
    """Raised when git operations fail."""
    pass


NOT_INSTALLED = "Git is not installed or not in PATH"


def _run_git(*args: str) -> str:
    """Run a git command and return stdout."""
    try:
        result = subprocess.run(
            ['git', *args],
            capture_output=True,
            text=True,
            check=True,
            encoding='utf-8',
            errors='replace'
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or '').strip() or f"exit status {e.returncode}"
        raise GitError(f"Git command failed: git {' '.join(args)}: {detail}")
    except FileNotFoundError:
        raise GitError(NOT_INSTALLED)


def get_staged_diff() -> str:
    """Diff of staged changes only. Empty string when nothing is staged."""
    return _run_git('diff', '--staged')


def run_commit(message: str) -> int:
    """Commit with the given message and return git's exit status untouched.

    Output is not captured so git's summary and any hook output reach the
    terminal.
    """
    try:
        completed = subprocess.run(['git', 'commit', '-m', message])
    except FileNotFoundError:
        raise GitError(NOT_INSTALLED)
    return completed.returncode
