"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
The service builds them from raw request mappings only after
``ProductValidator`` accepted the payload, so the repository never
sees untyped data.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: normalised input for product creation.
- ``UpdateProductDTO``: partial input; only supplied fields are set.
- ``ProductListQuery``: normalised page/limit/search window.
- ``ProductOutputDTO``: a persisted product record.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from catalog.products.validators import to_decimal

if TYPE_CHECKING:
    from catalog.products.models import Product


def _normalise_price(value: Any) -> Any:
    number = to_decimal(value)
    return value if number is None else number


def _normalise_sku(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation.

    - ``name`` is stripped.
    - ``price`` is a ``Decimal`` (floats are converted through ``str``).
    - blank ``sku`` becomes ``None``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    sku: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> Any:
        return _normalise_price(v)

    @field_validator("sku", mode="before")
    @classmethod
    def blank_sku_is_none(cls, v: Any) -> Any:
        return _normalise_sku(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for partial product updates.

    Construct it with only the fields the caller supplied; the repository
    applies ``model_dump(exclude_unset=True)`` so untouched columns keep
    their stored value.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[Decimal] = None
    sku: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> Any:
        return _normalise_price(v)

    @field_validator("sku", mode="before")
    @classmethod
    def blank_sku_is_none(cls, v: Any) -> Any:
        return _normalise_sku(v)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


class ProductListQuery(BaseModel):
    """Normalised listing window: 1-based page, page size and search term."""

    model_config = ConfigDict(frozen=True)

    page: int = 1
    limit: int = 20
    q: str = ""

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for a stored product."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: Decimal
    sku: Optional[str] = None

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            sku=product.sku,
        )
