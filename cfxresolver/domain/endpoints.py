from __future__ import annotations

import re
from typing import Any

__all__ = [
    "STATUS_PATH",
    "has_scheme",
    "probe_url",
    "format_players",
    "format_resources",
]

STATUS_PATH = "/info.json"
RESOURCE_PREVIEW = 10

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def has_scheme(endpoint: str) -> bool:
    """Return True if the endpoint already carries a ``scheme://`` prefix."""
    return _SCHEME_RE.match(endpoint) is not None


def probe_url(endpoint: str, path: str = STATUS_PATH) -> str:
    """Build the status-document URL for a connect endpoint.

    Rules:
    - Strip leading/trailing whitespace.
    - Keep an existing scheme; otherwise assume plain ``http://``.
    - Drop a single trailing "/" before appending `path`.

    Raises:
        ValueError: if the endpoint is empty or contains whitespace.
    """
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise ValueError("endpoint must be a non-empty string")

    ep = endpoint.strip()
    if any(ch.isspace() for ch in ep):
        raise ValueError("endpoint contains whitespace")

    base = ep if has_scheme(ep) else f"http://{ep}"
    if base.endswith("/"):
        base = base[:-1]
    return f"{base}{path}"


def format_players(clients: Any, max_clients: Any) -> str:
    """Render a "current/max" player count as received, "?" for missing halves."""
    cur = "?" if clients is None else str(clients)
    cap = "?" if max_clients is None else str(max_clients)
    return f"{cur}/{cap}"


def format_resources(resources: list[Any], limit: int = RESOURCE_PREVIEW) -> str:
    """Join the first `limit` resource names, with "..." when there are more."""
    shown = ", ".join(str(r) for r in resources[:limit])
    return f"{shown}..." if len(resources) > limit else shown
