from __future__ import annotations

__all__ = [
    "ResolverError",
    "UnrecognizedTokenFormat",
    "ServerNotFound",
    "DirectoryUnavailable",
]


class ResolverError(Exception):
    """Base class for errors that end a resolution run.

    The `code` attribute gives adapters a stable machine code to report.
    """

    code: str = "resolver_error"


class UnrecognizedTokenFormat(ResolverError, ValueError):
    """Raised when no join-token shape can be found in the input."""

    code = "unrecognized_token_format"


class ServerNotFound(ResolverError):
    """Raised when the directory service reports the token as unknown (404)."""

    code = "server_not_found"

    def __init__(self, token: str) -> None:
        super().__init__(f"Server not found in FiveM front-end (404): {token}")
        self.token = token


class DirectoryUnavailable(ResolverError):
    """Raised for any other directory failure: bad status, transport, bad body."""

    code = "directory_unavailable"

    def __init__(self, token: str, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch server info for {token}: {reason}")
        self.token = token
        self.reason = reason
        self.status_code = status_code
