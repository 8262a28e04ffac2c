from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, status

from ..domain.errors import (
    DirectoryUnavailable,
    ResolverError,
    ServerNotFound,
    UnrecognizedTokenFormat,
)
from ..report import summarize
from ..service.resolver import ServerResolver
from .models import ErrorDetail, ResolveResponse

router = APIRouter()

_STATUS_BY_ERROR: dict[type[ResolverError], int] = {
    UnrecognizedTokenFormat: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ServerNotFound: status.HTTP_404_NOT_FOUND,
    DirectoryUnavailable: status.HTTP_502_BAD_GATEWAY,
}


def _to_http(e: ResolverError) -> HTTPException:
    detail = ErrorDetail(
        error_code=e.code,
        error_message=str(e),
        status_code=getattr(e, "status_code", None),
    )
    return HTTPException(
        status_code=_STATUS_BY_ERROR.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=detail.model_dump(exclude_none=True),
    )


async def _resolve(request: Request, raw: str) -> ResolveResponse:
    resolver: ServerResolver = request.app.state.resolver
    try:
        result = await resolver.resolve(raw)
    except ResolverError as e:
        request.state.error_code = e.code
        raise _to_http(e) from e
    request.state.token = result.token
    request.state.status_found = result.status is not None
    return ResolveResponse(result=result, summary=summarize(result))


@router.get(
    "/resolve",
    response_model=ResolveResponse,
    summary="Resolve a join link, detail URL or bare token",
)
async def resolve_input(
    request: Request,
    raw: str = Query(
        ..., alias="input", min_length=1, description="Join link, detail URL or bare token"
    ),
) -> ResolveResponse:
    """Extract the token from the `input` query parameter and resolve it."""
    return await _resolve(request, raw)


@router.get(
    "/servers/{token}",
    response_model=ResolveResponse,
    summary="Resolve a bare token",
)
async def resolve_token(request: Request, token: str) -> ResolveResponse:
    """Resolve a token given directly in the path."""
    return await _resolve(request, token)
