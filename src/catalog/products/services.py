"""Product service layer (Use Cases).

Orchestrates ``ProductValidator`` and the injected ``IProductRepository``.
Raw request mappings come in, are validated and normalised into DTOs,
and every outcome leaves as a ``ServiceResult``:

- create:  ``{success, id}``                       | ``{success: False, errors}``
- list:    ``{success, data, count, pagination}``  | ``{success: False, errors}``
- get:     ``{success, data}``                     | ``{success: False, error}``
- update:  ``{success}``                           | ``{success: False, errors}``
- delete:  ``{success}``                           | ``{success: False, error}``

Repository failures are caught at each call site; nothing raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

import structlog

from catalog.core.results import ErrorKind, Pagination, ServiceResult
from catalog.products.dtos import CreateProductDTO, ProductListQuery, UpdateProductDTO
from catalog.products.exceptions import ProductRepositoryError
from catalog.products.validators import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_ID,
    MAX_PAGE,
    MAX_PAGE_LIMIT,
    ProductValidator,
    to_int,
)

if TYPE_CHECKING:
    from catalog.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

INVALID_ID = "Invalid product ID"
NOT_FOUND = "Product not found"

UPDATABLE_FIELDS = ("name", "price", "sku")


def _as_int(value: Any, default: int) -> int:
    """Integer part of a loosely typed value; ``default`` when absent or unparseable."""
    if value is None or value == "":
        return default
    number = to_int(value, MAX_PAGE)
    return default if number is None else number


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    Holds no state besides its collaborators.
    """

    def __init__(
        self,
        repository: IProductRepository,
        validator: Optional[ProductValidator] = None,
    ) -> None:
        self._repo = repository
        self._validator = validator or ProductValidator()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, data: Mapping[str, Any]) -> ServiceResult:
        """Validate ``data`` and store a new product.

        Returns ``id`` on success, field-keyed ``errors`` otherwise.
        """
        validation = self._validator.validate(data)
        if not validation.valid:
            logger.info("product.validation_failed", fields=sorted(validation.errors))
            return ServiceResult.invalid(validation.errors)

        dto = CreateProductDTO(
            name=data["name"],
            price=data["price"],
            sku=data.get("sku"),
        )
        try:
            product_id = self._repo.create(dto)
        except ProductRepositoryError as exc:
            logger.error("product.create_failed", error=str(exc))
            return ServiceResult.fail(
                ErrorKind.STORAGE,
                errors={"general": f"Failed to create product: {exc}"},
            )

        logger.info("product.created", product_id=product_id)
        return ServiceResult.ok(id=product_id)

    def update_product(self, id: Any, data: Mapping[str, Any]) -> ServiceResult:
        """Apply the supplied fields to an existing product.

        Only keys present (and not ``None``) in ``data`` are validated and
        written; the rest of the record is left untouched.
        """
        if not self._validator.validate_id(id).valid:
            return ServiceResult.invalid({"id": INVALID_ID})
        product_id = to_int(id, MAX_ID)

        existing = self.get_product_by_id(product_id)
        if not existing.success:
            if existing.kind is ErrorKind.STORAGE:
                return ServiceResult.fail(
                    ErrorKind.STORAGE, errors={"general": existing.error}
                )
            return ServiceResult.fail(ErrorKind.NOT_FOUND, errors={"id": NOT_FOUND})

        validation = self._validator.validate(data, is_update=True)
        if not validation.valid:
            logger.info(
                "product.validation_failed",
                product_id=product_id,
                fields=sorted(validation.errors),
            )
            return ServiceResult.invalid(validation.errors)

        dto = UpdateProductDTO(
            **{
                field: data[field]
                for field in UPDATABLE_FIELDS
                if data.get(field) is not None
            }
        )
        try:
            self._repo.update(product_id, dto)
        except ProductRepositoryError as exc:
            logger.error("product.update_failed", product_id=product_id, error=str(exc))
            return ServiceResult.fail(
                ErrorKind.STORAGE,
                errors={"general": f"Failed to update product: {exc}"},
            )

        return ServiceResult.ok()

    def delete_product(self, id: Any) -> ServiceResult:
        if not self._validator.validate_id(id).valid:
            return ServiceResult.fail(ErrorKind.VALIDATION, error=INVALID_ID)
        product_id = to_int(id, MAX_ID)

        existing = self.get_product_by_id(product_id)
        if not existing.success:
            if existing.kind is ErrorKind.STORAGE:
                return existing
            return ServiceResult.fail(ErrorKind.NOT_FOUND, error=NOT_FOUND)

        try:
            self._repo.delete(product_id)
        except ProductRepositoryError as exc:
            logger.error("product.delete_failed", product_id=product_id, error=str(exc))
            return ServiceResult.fail(
                ErrorKind.STORAGE, error=f"Failed to delete product: {exc}"
            )

        logger.info("product.removed", product_id=product_id)
        return ServiceResult.ok()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_products(self, params: Optional[Mapping[str, Any]] = None) -> ServiceResult:
        """Return one page of products plus the total match count.

        ``page`` and ``limit`` are clamped into range rather than rejected:
        ``page < 1`` becomes 1 and ``limit`` is held within ``[1, 100]``.
        """
        params = params or {}
        page = max(1, _as_int(params.get("page"), DEFAULT_PAGE))
        limit = max(1, min(MAX_PAGE_LIMIT, _as_int(params.get("limit"), DEFAULT_LIMIT)))

        raw_query = params.get("q")
        search_check = self._validator.validate_search_query(raw_query)
        if not search_check.valid:
            return ServiceResult.invalid(search_check.errors)
        query = ProductListQuery(page=page, limit=limit, q=(raw_query or "").strip())

        try:
            products = self._repo.all(query)
            total = self._repo.count(query.q)
        except ProductRepositoryError as exc:
            logger.error("product.list_failed", error=str(exc))
            return ServiceResult.fail(
                ErrorKind.STORAGE,
                errors={"general": f"Failed to retrieve products: {exc}"},
            )

        return ServiceResult.ok(
            data=products,
            count=total,
            pagination=Pagination.build(page=page, limit=limit, total=total),
        )

    def get_product_by_id(self, id: Any) -> ServiceResult:
        """Fetch a single product record as ``data``."""
        if not self._validator.validate_id(id).valid:
            return ServiceResult.fail(ErrorKind.VALIDATION, error=INVALID_ID)
        product_id = to_int(id, MAX_ID)

        try:
            product = self._repo.find(product_id)
        except ProductRepositoryError as exc:
            logger.error("product.retrieve_failed", product_id=product_id, error=str(exc))
            return ServiceResult.fail(
                ErrorKind.STORAGE, error=f"Failed to retrieve product: {exc}"
            )

        if product is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, error=NOT_FOUND)
        return ServiceResult.ok(data=product)
