"""LLM Client Package"""

from aicommit.config import Config
from aicommit.llm.base import (
    LLMClient, LLMError, BackendUnavailable, BackendStatusError, UnexpectedResponse,
)
from aicommit.llm.ollama import OllamaClient


def generate_commit_message(diff: str, config: Config) -> str:
    """One generation round trip for the diff. Raises LLMError on any backend failure."""
    return OllamaClient(config).generate(diff)


__all__ = [
    "LLMClient",
    "LLMError",
    "BackendUnavailable",
    "BackendStatusError",
    "UnexpectedResponse",
    "OllamaClient",
    "generate_commit_message",
]
