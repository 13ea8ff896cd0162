"""
aicommit

AI-generated commit messages from staged git changes, backed by a local
Ollama server or Ollama Cloud.
"""

from importlib.metadata import PackageNotFoundError, version

FALLBACK_VERSION = "0.0.0"


def get_version() -> str:
    """Installed package version, or a placeholder when running from a checkout."""
    try:
        return version("aicommit")
    except PackageNotFoundError:
        return FALLBACK_VERSION


__version__ = get_version()

# Conventional commit types offered to the model in the user prompt
COMMIT_TYPE_NAMES = ("feat", "fix", "refactor", "chore", "docs", "test", "style", "perf", "ci", "build")
