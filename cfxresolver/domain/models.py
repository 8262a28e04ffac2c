from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidatorFunctionWrapHandler,
    model_validator,
)

__all__ = [
    "ENDPOINT_FIELDS",
    "DirectoryRecord",
    "StatusDocument",
    "ResolutionResult",
]

# The directory service has shipped both spellings over time.
ENDPOINT_FIELDS = ("connectEndPoints", "ConnectEndPoints")


class DirectoryRecord(BaseModel):
    """A directory-service answer for one token.

    `payload` is the body exactly as received; `endpoints` is the one
    normalized view of the connect endpoints the rest of the code relies on.
    """

    payload: dict[str, Any] = Field(default_factory=dict)
    endpoints: list[str] = Field(default_factory=list)

    @classmethod
    def from_response(cls, body: dict[str, Any]) -> DirectoryRecord:
        """Normalize a raw directory body into a record.

        Reads ``Data.connectEndPoints`` or ``Data.ConnectEndPoints``, first
        non-null spelling wins. A missing ``Data`` object, a missing field or
        a non-list value all give an empty endpoint list.
        """
        data = body.get("Data")
        raw: Any = None
        if isinstance(data, dict):
            for field in ENDPOINT_FIELDS:
                if data.get(field) is not None:
                    raw = data[field]
                    break
        endpoints = [ep for ep in raw if isinstance(ep, str)] if isinstance(raw, list) else []
        return cls(payload=body, endpoints=endpoints)

    @property
    def data(self) -> dict[str, Any]:
        data = self.payload.get("Data")
        return data if isinstance(data, dict) else {}

    @property
    def first_endpoint(self) -> str | None:
        return self.endpoints[0] if self.endpoints else None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# Known /info.json fields and the shape each must have to be trusted.
_STATUS_FIELDS: dict[str, Callable[[Any], bool]] = {
    "hostname": lambda v: isinstance(v, str),
    "clients": _is_int,
    "sv_maxclients": _is_int,
    "resources": lambda v: isinstance(v, list) and all(isinstance(i, str) for i in v),
}


class StatusDocument(BaseModel):
    """The ``/info.json`` document a game server serves about itself.

    `raw` is the body exactly as received. The typed fields are a lenient
    view of it: a known field that is missing or of an unexpected type reads
    as None instead of rejecting the document. Unknown fields are kept.
    """

    model_config = ConfigDict(extra="allow")

    hostname: str | None = None
    clients: int | None = None
    sv_maxclients: int | None = None
    resources: list[str] | None = None

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @model_validator(mode="wrap")
    @classmethod
    def _lenient(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> StatusDocument:
        if not isinstance(data, dict):
            return handler(data)
        cleaned = {
            key: None if key in _STATUS_FIELDS and not _STATUS_FIELDS[key](value) else value
            for key, value in data.items()
        }
        doc = handler(cleaned)
        doc._raw = dict(data)
        return doc

    @property
    def raw(self) -> dict[str, Any]:
        return self._raw


class ResolutionResult(BaseModel):
    """Everything learned about one token in a single run."""

    token: str
    record: DirectoryRecord
    endpoint: str | None = None  # the endpoint that was probed, if any
    probed: bool = False
    status: StatusDocument | None = None  # None: no probe, or the probe failed

    @property
    def endpoints(self) -> list[str]:
        return self.record.endpoints

    @property
    def has_endpoints(self) -> bool:
        return bool(self.record.endpoints)
