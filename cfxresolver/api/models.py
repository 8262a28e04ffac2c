from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from ..domain.models import ResolutionResult


class ResolveResponse(BaseModel):
    """A resolution result plus its display-ready summary."""
    result: ResolutionResult
    summary: dict[str, Any]


class ErrorDetail(BaseModel):
    """Body of the `detail` field on error responses."""
    error_code: str
    error_message: str
    status_code: Optional[int] = None
