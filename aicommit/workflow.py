"""Commit Workflow - diff, generate, ask, commit.

The orchestrator is a small state machine. Every collaborator is injected so
the whole flow can be driven with scripted decisions and no terminal, git or
network:

    FETCH_DIFF -> GENERATE -> AWAIT_DECISION -> COMMIT
                     ^              |
                     +-- regenerate +

All error-to-exit-code translation happens here. A fatal path writes one
line to stderr and returns 1; a finished commit returns git's own status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from aicommit.config import Config
from aicommit.git import GitError
from aicommit.llm import LLMError
from aicommit.output import print_error

NO_STAGED_CHANGES = "No staged changes. Stage files with 'git add' first."


class Decision(str, Enum):
    ACCEPT = "accept"
    EDIT = "edit"
    REGENERATE = "regenerate"


class State(Enum):
    FETCH_DIFF = "fetch_diff"
    GENERATE = "generate"
    AWAIT_DECISION = "await_decision"
    COMMIT = "commit"


@dataclass
class Collaborators:
    get_diff: Callable[[], str]
    generate: Callable[[str, Config], str]
    ask: Callable[[str], Decision]
    edit: Callable[[str], str]
    commit: Callable[[str], int]


class _Fatal(Exception):
    """Internal: stop the flow with a message for stderr."""


def _describe(exc: Exception, fallback: str) -> str:
    """Message for an unexpected exception; its text if it has any."""
    return str(exc) or f"{fallback} ({type(exc).__name__})"


class CommitFlow:
    """One run of the pipeline. Not reusable."""

    def __init__(self, config: Config, collaborators: Collaborators):
        self.config = config
        self.deps = collaborators
        self.state = State.FETCH_DIFF
        self.diff: Optional[str] = None
        self.candidate: Optional[str] = None
        self.generations = 0

    def run(self) -> int:
        """Drive the states until a commit or a fatal error. Returns the exit code."""
        try:
            while self.state is not State.COMMIT:
                self._step()
            return self._commit()
        except _Fatal as e:
            print_error(str(e))
            return 1

    def _step(self) -> None:
        if self.state is State.FETCH_DIFF:
            self.diff = self._fetch_diff()
            self.state = State.GENERATE
        elif self.state is State.GENERATE:
            self.candidate = self._generate()
            self.state = State.AWAIT_DECISION
        elif self.state is State.AWAIT_DECISION:
            self.state = self._await_decision()

    def _fetch_diff(self) -> str:
        try:
            diff = self.deps.get_diff()
        except GitError as e:
            raise _Fatal(str(e))
        except Exception as e:
            raise _Fatal(_describe(e, "Could not read staged changes"))
        if not diff or not diff.strip():
            raise _Fatal(NO_STAGED_CHANGES)
        return diff

    def _generate(self) -> str:
        # Same diff every time; nothing carried over from earlier candidates
        self.generations += 1
        try:
            return self.deps.generate(self.diff, self.config)
        except LLMError as e:
            raise _Fatal(str(e))
        except Exception as e:
            raise _Fatal(_describe(e, "Could not generate a commit message"))

    def _await_decision(self) -> State:
        answer = self.deps.ask(self.candidate)
        try:
            decision = Decision(answer)
        except ValueError:
            raise _Fatal(f"Unknown decision: {answer!r}")
        if decision is Decision.ACCEPT:
            return State.COMMIT
        if decision is Decision.EDIT:
            self.candidate = self.deps.edit(self.candidate)
            return State.COMMIT
        return State.GENERATE

    def _commit(self) -> int:
        try:
            return self.deps.commit(self.candidate)
        except GitError as e:
            raise _Fatal(str(e))
