"""Git Operations Package"""

from aicommit.git.repo import GitError, get_staged_diff, run_commit

__all__ = [
    "GitError",
    "get_staged_diff",
    "run_commit",
]
