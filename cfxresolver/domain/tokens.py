from __future__ import annotations

import re

from .errors import UnrecognizedTokenFormat

__all__ = [
    "TOKEN_CHARS",
    "extract_token",
    "is_canonical_token",
]

TOKEN_CHARS = r"[A-Za-z0-9\-_.]+"

# Tried in order; the first marker that matches wins.
_MARKERS = (
    re.compile(r"cfx\.re/join/(" + TOKEN_CHARS + ")", re.IGNORECASE),
    re.compile(r"servers/detail/(" + TOKEN_CHARS + ")", re.IGNORECASE),
)
_PLAIN_RE = re.compile(TOKEN_CHARS)


def is_canonical_token(value: str) -> bool:
    """Return True when `value` is already a bare token."""
    return isinstance(value, str) and _PLAIN_RE.fullmatch(value) is not None


def extract_token(raw: str) -> str:
    """Pull the join token out of a raw token, join link or detail-page URL.

    Accepted shapes, in precedence order:
    - ``cfx.re/join/<token>`` (marker matched case-insensitively)
    - ``servers/detail/<token>`` (same)
    - the whole trimmed input, if it is made only of token characters

    The captured token keeps its original casing. Anything after the token
    that is outside the character class (``/``, ``?``, ``#``) is left behind.

    Raises:
        UnrecognizedTokenFormat: if none of the shapes match.
    """
    if not isinstance(raw, str):
        raise UnrecognizedTokenFormat(f"Could not parse a cfx token from input: {raw!r}")

    s = raw.strip()
    for marker in _MARKERS:
        m = marker.search(s)
        if m:
            return m.group(1)

    if is_canonical_token(s):
        return s

    raise UnrecognizedTokenFormat(f"Could not parse a cfx token from input: {s}")
