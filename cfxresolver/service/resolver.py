from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from ..config import Settings, load_settings
from ..domain.endpoints import probe_url
from ..domain.errors import DirectoryUnavailable, ServerNotFound, UnrecognizedTokenFormat
from ..domain.models import DirectoryRecord, ResolutionResult, StatusDocument
from ..domain.tokens import extract_token, is_canonical_token
from ..logging_conf import get_logger

__all__ = ["LOOKUP_PATH", "ServerResolver", "resolve"]

LOOKUP_PATH = "/api/servers/single/{token}"

logger = get_logger("service.resolver")


class ServerResolver:
    """Looks a token up in the directory service and probes its first endpoint.

    Used directly, every call gets its own short-lived `httpx.AsyncClient`.
    Entered as an async context manager, all calls share one client until
    exit; concurrent calls are safe either way. Pass `transport` to route
    requests somewhere other than the network.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ServerResolver:
        if self._client is None:
            self._client = self._new_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent, "Accept": "application/json"},
        )

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        # A client made here belongs to this call only; never stored on self.
        if self._client is not None:
            yield self._client
            return
        async with self._new_client() as client:
            yield client

    async def lookup(self, token: str) -> DirectoryRecord:
        """Fetch the directory record for `token`.

        - 404 raises `ServerNotFound`
        - any other failure (status, transport, timeout, body) raises
          `DirectoryUnavailable`
        - a single attempt, no retry
        """
        async with self._session() as client:
            return await self._lookup(client, token)

    async def probe(self, endpoint: str) -> StatusDocument | None:
        """Fetch ``/info.json`` from a connect endpoint; None on any failure.

        The endpoint belongs to a third-party host that is often firewalled or
        not serving HTTP at all, so nothing here is allowed to raise.
        """
        async with self._session() as client:
            return await self._probe(client, endpoint)

    async def resolve(self, raw: str) -> ResolutionResult:
        """Run the whole pipeline for one user input.

        Token and directory errors propagate; the probe only runs after a
        successful lookup, only against the first endpoint, and its failure
        leaves `status` as None.
        """
        start = time.perf_counter()
        token = extract_token(raw)
        async with self._session() as client:
            record = await self._lookup(client, token)
            endpoint = record.first_endpoint
            status = await self._probe(client, endpoint) if endpoint is not None else None

        result = ResolutionResult(
            token=token,
            record=record,
            endpoint=endpoint,
            probed=endpoint is not None,
            status=status,
        )
        logger.info(
            "resolve.done",
            extra={
                "event": "resolve_done",
                "token": token,
                "endpoints": len(record.endpoints),
                "status_found": status is not None,
                "elapsed_ms": round((time.perf_counter() - start) * 1000.0, 2),
            },
        )
        return result

    async def _lookup(self, client: httpx.AsyncClient, token: str) -> DirectoryRecord:
        if not is_canonical_token(token):
            raise UnrecognizedTokenFormat(f"Not a canonical cfx token: {token!r}")

        url = self.settings.directory_url + LOOKUP_PATH.format(token=token)
        logger.info("lookup.start", extra={"event": "lookup_start", "token": token})
        try:
            r = await client.get(url, timeout=self.settings.lookup_timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._unavailable(token, type(e).__name__)
            raise DirectoryUnavailable(token, str(e) or type(e).__name__) from e

        if r.status_code == 404:
            logger.info("lookup.not_found", extra={"event": "lookup_not_found", "token": token})
            raise ServerNotFound(token)
        if not r.is_success:
            self._unavailable(token, f"status {r.status_code}")
            raise DirectoryUnavailable(
                token, f"{r.status_code} {r.reason_phrase}", status_code=r.status_code
            )

        try:
            body = r.json()
        except ValueError as e:
            self._unavailable(token, "invalid json")
            raise DirectoryUnavailable(token, "response body is not valid JSON") from e
        if not isinstance(body, dict):
            self._unavailable(token, "not an object")
            raise DirectoryUnavailable(token, "response body is not a JSON object")

        record = DirectoryRecord.from_response(body)
        logger.info(
            "lookup.ok",
            extra={"event": "lookup_ok", "token": token, "endpoints": len(record.endpoints)},
        )
        return record

    async def _probe(self, client: httpx.AsyncClient, endpoint: str) -> StatusDocument | None:
        timeout = self.settings.probe_timeout
        try:
            url = probe_url(endpoint)
            # Per-phase httpx timeouts restart on every redirect and slow read;
            # the deadline bounds the whole exchange.
            async with asyncio.timeout(timeout):
                r = await client.get(url, timeout=timeout)
            r.raise_for_status()
            body = r.json()
            if not isinstance(body, dict):
                raise ValueError("status document is not a JSON object")
        except (TimeoutError, httpx.TimeoutException):
            self._probe_failed(endpoint, "timeout")
            return None
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            self._probe_failed(endpoint, f"{type(e).__name__}: {e}")
            return None

        doc = StatusDocument.model_validate(body)
        logger.info(
            "probe.ok",
            extra={"event": "probe_ok", "endpoint": endpoint, "hostname": doc.hostname},
        )
        return doc

    def _unavailable(self, token: str, reason: str) -> None:
        logger.warning(
            "lookup.unavailable",
            extra={"event": "lookup_unavailable", "token": token, "reason": reason},
        )

    def _probe_failed(self, endpoint: str, reason: str) -> None:
        logger.warning(
            "probe.failed",
            extra={"event": "probe_failed", "endpoint": endpoint, "reason": reason},
        )


async def resolve(
    raw: str,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ResolutionResult:
    """Resolve one input with a fresh `ServerResolver`."""
    async with ServerResolver(settings, transport=transport) as resolver:
        return await resolver.resolve(raw)
