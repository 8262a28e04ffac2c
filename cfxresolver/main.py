"""FastAPI app factory: health endpoint plus the resolve routes."""
from __future__ import annotations

import os
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from . import __version__
from .api import router as api_router
from .config import load_settings
from .logging_conf import get_logger, setup_logging
from .service.resolver import ServerResolver

setup_logging()
logger = get_logger("app")


def create_app(resolver: ServerResolver | None = None) -> FastAPI:
    """Build the app around one shared `ServerResolver`.

    While the app runs, the resolver holds a single HTTP client that all
    requests share; it is closed on shutdown.
    """
    resolver = resolver or ServerResolver(load_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with resolver:
            yield

    app = FastAPI(title="Cfx Join Resolver", version=__version__, lifespan=lifespan)
    app.state.resolver = resolver

    @app.middleware("http")
    async def resolve_logger(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """One log line per request, carrying the resolve outcome set by the routes.

        Reuses an incoming X-Request-ID or mints one, and echoes it back.
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        start = time.perf_counter()
        response = await call_next(request)

        state = request.state
        logger.info(
            "request.done",
            extra={
                "event": "request_done",
                "request_id": request_id,
                "path": request.url.path,
                "status_code": response.status_code,
                "token": getattr(state, "token", None),
                "status_found": getattr(state, "status_found", None),
                "error_code": getattr(state, "error_code", None),
                "elapsed_ms": round((time.perf_counter() - start) * 1000.0, 2),
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> JSONResponse:
        return JSONResponse(content={"ok": True})

    app.include_router(api_router)

    return app


def serve() -> None:
    """Run the app under uvicorn (``cfx-resolver-api``).

    uvicorn's own loggers propagate to the root JSON handler.
    """
    import uvicorn

    uvicorn.run(
        "cfxresolver.main:app",
        host=os.getenv("CFX_API_HOST", "127.0.0.1"),
        port=int(os.getenv("CFX_API_PORT", "8000")),
        log_config=None,
    )


# ASGI entrypoint for uvicorn: `uvicorn cfxresolver.main:app --port 8000`
app = create_app()
