"""LLM Base Classes and Errors"""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class BackendUnavailable(LLMError):
    """The backend could not be reached (refused, DNS, timeout, dropped)."""


class BackendStatusError(LLMError):
    """The backend answered with a non-success HTTP status."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class UnexpectedResponse(LLMError):
    """The backend answered 2xx but the body was not what we expected."""


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def generate(self, diff: str) -> str:
        """Return a single commit message for the diff, stripped and non-blank."""
        pass
