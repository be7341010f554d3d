"""ServiceResult: the uniform return type of the service layer.

Every service operation returns a ``ServiceResult`` instead of raising.
``success`` is always present; the remaining keys are populated per
operation (``id``, ``data``, ``count`` + ``pagination``) on success, and
either ``errors`` (field-keyed) or ``error`` (single message) on failure.
``kind`` tells the HTTP layer which category of failure occurred.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    """Failure categories a caller can branch on."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    STORAGE = "storage"


class Pagination(BaseModel):
    """Page window metadata returned alongside a product listing."""

    model_config = ConfigDict(frozen=True)

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> Pagination:
        # ceil(total / limit) without going through floats
        pages = -(-total // limit) if limit > 0 else 0
        return cls(page=page, limit=limit, total=total, pages=pages)


class ServiceResult(BaseModel):
    """Immutable outcome of a service call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    kind: Optional[ErrorKind] = None
    id: Optional[int] = None
    data: Any = None
    count: Optional[int] = None
    pagination: Optional[Pagination] = None
    errors: Optional[Dict[str, str]] = None
    error: Optional[str] = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def ok(cls, **payload: Any) -> ServiceResult:
        return cls(success=True, **payload)

    @classmethod
    def invalid(cls, errors: Dict[str, str]) -> ServiceResult:
        return cls(success=False, kind=ErrorKind.VALIDATION, errors=dict(errors))

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        *,
        error: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
    ) -> ServiceResult:
        return cls(success=False, kind=kind, error=error, errors=errors)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND

    def to_dict(self) -> Dict[str, Any]:
        """Plain ``dict`` with only the populated keys (``kind`` excluded)."""
        out: Dict[str, Any] = {"success": self.success}
        for key in ("id", "data", "count", "pagination", "errors", "error"):
            value = getattr(self, key)
            if value is None:
                continue
            if isinstance(value, BaseModel):
                value = value.model_dump()
            elif isinstance(value, list):
                value = [
                    item.model_dump() if isinstance(item, BaseModel) else item
                    for item in value
                ]
            out[key] = value
        return out
