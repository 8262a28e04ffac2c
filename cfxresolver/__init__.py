"""Cfx.re join-token resolver.

Turns a join link or raw token into the directory record, connect endpoints
and (when reachable) the server's own /info.json status document.
"""
from importlib.metadata import PackageNotFoundError, version

try:  # Resolves once installed; source checkouts fall back to a dev version.
    __version__ = version("cfx-join-resolver")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
