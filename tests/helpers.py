from __future__ import annotations

import json
from collections.abc import Callable

import httpx

DIRECTORY = "https://directory.test"

Handler = Callable[[httpx.Request], httpx.Response]


def directory_body(endpoints: list[str] | None = None, *, field: str = "connectEndPoints") -> dict:
    data: dict = {"hostname": "^1Test ^7Server", "clients": 5}
    if endpoints is not None:
        data[field] = endpoints
    return {"EndPoint": "abc123", "Data": data}


def json_response(body: object, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json"},
    )


def routed(routes: dict[str, Handler | httpx.Response], seen: list[str] | None = None):
    """MockTransport handler keyed on host + path; unknown URLs refuse to connect."""

    def handle(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(str(request.url))
        target = routes.get(f"{request.url.host}{request.url.path}")
        if target is None:
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(target, httpx.Response):
            return target
        return target(request)

    return handle
