"""Configuration Management Package

Resolves one immutable Config per run from, in order of precedence:

1. CLI flags (--model)
2. Environment variables (OLLAMA_API_KEY, OLLAMA_HOST, DEBUG, AICOMMIT_TIMEOUT)
3. .aicommitrc in the current directory, then in the home directory
4. Built-in defaults
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from aicommit.output import print_warning

DEFAULT_OLLAMA_PORT = 11434
LOCAL_OLLAMA_HOST = "http://localhost:11434"
CLOUD_OLLAMA_URL = "https://ollama.com/api/chat"
CHAT_PATH = "/api/chat"
DEFAULT_LOCAL_MODEL = "llama3.1"
DEFAULT_CLOUD_MODEL = "gpt-oss:120b"
DEFAULT_TIMEOUT = 300  # 5 minutes for CPU inference

API_KEY_ENV = "OLLAMA_API_KEY"
TRUTHY = {"1", "true", "yes"}


@dataclass(frozen=True)
class Config:
    """Everything the pipeline needs, fixed before it starts."""
    url: str
    model: str
    api_key: Optional[str] = None
    debug: bool = False
    timeout: int = DEFAULT_TIMEOUT

    @property
    def is_cloud(self) -> bool:
        return self.api_key is not None


@dataclass
class RcSettings:
    """Optional defaults from an .aicommitrc file."""
    host: str = LOCAL_OLLAMA_HOST
    local_model: str = DEFAULT_LOCAL_MODEL
    cloud_model: str = DEFAULT_CLOUD_MODEL
    timeout: int = DEFAULT_TIMEOUT

    def validate(self) -> list[str]:
        """Validate values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = RcSettings()

        for name in ("host", "local_model", "cloud_model"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                warnings.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        if not isinstance(self.timeout, int) or isinstance(self.timeout, bool) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'RcSettings':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = cls(**filtered)
        for warning in settings.validate():
            print_warning(f"Config warning: {warning}")
        return settings


class RcManager:
    """Locates and loads the rc file."""

    RC_FILENAME = ".aicommitrc"

    def __init__(self):
        self._path: Optional[Path] = None

    def load(self) -> RcSettings:
        for path in (Path.cwd() / self.RC_FILENAME, Path.home() / self.RC_FILENAME):
            if path.exists():
                self._path = path
                return self._load_from_file(path)
        return RcSettings()

    def _load_from_file(self, path: Path) -> RcSettings:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print_warning(f"Warning: Could not load {path}: {e}")
            return RcSettings()
        if not isinstance(data, dict):
            print_warning(f"Warning: Could not load {path}: expected a JSON object")
            return RcSettings()
        return RcSettings.from_dict(data)

    def get_path(self) -> Optional[Path]:
        return self._path


def load_rc() -> RcSettings:
    return RcManager().load()


def _env_timeout(env: Mapping[str, str], fallback: int) -> int:
    raw = env.get("AICOMMIT_TIMEOUT")
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        print_warning(f"Config warning: Invalid AICOMMIT_TIMEOUT '{raw}', using {fallback}")
        return fallback
    return value if value > 0 else fallback


def _local_base(host: str) -> str:
    """Normalise an Ollama host. A bare host gets http and the default port."""
    host = host.strip().rstrip('/')
    if '://' in host:
        return host
    parts = urlsplit(f"http://{host}")
    try:
        port = parts.port
    except ValueError:
        return parts.geturl()
    if port is None:
        parts = parts._replace(netloc=f"{parts.netloc.rstrip(':')}:{DEFAULT_OLLAMA_PORT}")
    return urlunsplit(parts)


def build_config(model: Optional[str], env: Mapping[str, str], rc: Optional[RcSettings] = None) -> Config:
    """Resolve the run's Config. Pure apart from warnings on stderr.

    A non-empty OLLAMA_API_KEY selects Ollama Cloud and its default model,
    otherwise the local server is used. An explicit model always wins.
    """
    rc = rc or RcSettings()
    api_key = env.get(API_KEY_ENV) or None

    if api_key:
        url = CLOUD_OLLAMA_URL
        default_model = rc.cloud_model
    else:
        url = _local_base(env.get("OLLAMA_HOST") or rc.host) + CHAT_PATH
        default_model = rc.local_model

    return Config(
        url=url,
        model=model or default_model,
        api_key=api_key,
        debug=env.get("DEBUG", "").strip().lower() in TRUTHY,
        timeout=_env_timeout(env, rc.timeout),
    )


__all__ = [
    "Config",
    "RcSettings",
    "RcManager",
    "load_rc",
    "build_config",
    "LOCAL_OLLAMA_HOST",
    "CLOUD_OLLAMA_URL",
    "DEFAULT_LOCAL_MODEL",
    "DEFAULT_CLOUD_MODEL",
    "DEFAULT_TIMEOUT",
]
