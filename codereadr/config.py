from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from codereadr.catalog import API_URL
from codereadr.exceptions import ConfigurationError

DEFAULT_TIMEOUT_SEC = 30


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Configuration for one client instance.

    Security notes:
    - api_key is sent with every call and must never be logged.
    - repr hides the key.

    """

    api_key: str
    api_url: str = API_URL
    timeout_sec: int = DEFAULT_TIMEOUT_SEC

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("an API key is required")
        if self.timeout_sec <= 0:
            raise ConfigurationError(f"timeout_sec must be positive: {self.timeout_sec}")

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key='***', api_url={self.api_url!r}, "
            f"timeout_sec={self.timeout_sec!r})"
        )

    @classmethod
    def from_env(cls, *, api_key: Optional[str] = None) -> "ClientConfig":
        """Build a config from CODEREADR_* environment variables.

        An explicit api_key overrides CODEREADR_API_KEY.
        """

        key = api_key or os.environ.get("CODEREADR_API_KEY", "").strip()
        if not key:
            raise ConfigurationError("CODEREADR_API_KEY is not set")
        return cls(
            api_key=key,
            api_url=os.environ.get("CODEREADR_API_URL", "").strip() or API_URL,
            timeout_sec=_env_int("CODEREADR_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC),
        )


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default."""

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def configure_logging(level: Optional[str] = None) -> None:
    """Set the `codereadr` logger level (CODEREADR_LOG_LEVEL, default WARNING).

    Handlers are left to the host application.
    """

    name = (level or os.environ.get("CODEREADR_LOG_LEVEL", "WARNING")).strip().upper()
    log = logging.getLogger("codereadr")
    try:
        log.setLevel(name)
    except ValueError as e:
        raise ConfigurationError(f"unknown log level: {name}") from e
