"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DIRECTORY_URL = "https://servers-frontend.fivem.net"
DEFAULT_USER_AGENT = "cfx-join-resolver/1.0"


@dataclass(frozen=True)
class Settings:
    directory_url: str = DEFAULT_DIRECTORY_URL
    user_agent: str = DEFAULT_USER_AGENT
    lookup_timeout: float | None = 10.0  # None: no bound on the directory call
    probe_timeout: float = 5.0
    log_level: str = "INFO"


def _float_from_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def load_settings() -> Settings:
    """Build `Settings` from CFX_* variables and LOG_LEVEL.

    A lookup timeout of 0 or less disables the bound on the directory call.
    """
    lookup_timeout = _float_from_env("CFX_LOOKUP_TIMEOUT", "10.0")
    probe_timeout = _float_from_env("CFX_PROBE_TIMEOUT", "5.0")
    if probe_timeout <= 0:
        raise ValueError("CFX_PROBE_TIMEOUT must be positive")
    return Settings(
        directory_url=os.getenv("CFX_DIRECTORY_URL", DEFAULT_DIRECTORY_URL).rstrip("/"),
        user_agent=os.getenv("CFX_USER_AGENT", DEFAULT_USER_AGENT),
        lookup_timeout=lookup_timeout if lookup_timeout > 0 else None,
        probe_timeout=probe_timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
