"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups return ``None`` (Null Object) for missing rows; any
``DatabaseError`` is re-raised as ``ProductRepositoryError`` so the
Service Layer has a single failure type to translate.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, List, Optional

import structlog
from django.db import DatabaseError, transaction
from django.db.models import Q, QuerySet

from catalog.products.dtos import (
    CreateProductDTO,
    ProductListQuery,
    ProductOutputDTO,
    UpdateProductDTO,
)
from catalog.products.exceptions import ProductRepositoryError
from catalog.products.models import Product
from catalog.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.error("product.storage_error", operation=operation, error=str(exc))
        raise ProductRepositoryError(str(exc)) from exc


def _matching(search: Optional[str]) -> QuerySet:
    queryset = Product.objects.all()
    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(sku__icontains=search))
    return queryset


def _records(queryset: QuerySet) -> List[ProductOutputDTO]:
    return [ProductOutputDTO.from_entity(product) for product in queryset]


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def all(self, query: Optional[ProductListQuery] = None) -> List[ProductOutputDTO]:
        with _storage_errors("all"):
            if query is None:
                return _records(Product.objects.order_by("-id"))
            queryset = _matching(query.q).order_by("-id")
            return _records(queryset[query.offset : query.offset + query.limit])

    def count(self, search: Optional[str] = None) -> int:
        with _storage_errors("count"):
            return _matching(search).count()

    def find(self, id: int) -> Optional[ProductOutputDTO]:
        with _storage_errors("find"):
            product = Product.objects.filter(id=id).first()
        return ProductOutputDTO.from_entity(product) if product else None

    def exists(self, id: int) -> bool:
        with _storage_errors("exists"):
            return Product.objects.filter(id=id).exists()

    def find_by_sku(self, sku: str) -> List[ProductOutputDTO]:
        with _storage_errors("find_by_sku"):
            return _records(Product.objects.filter(sku=sku).order_by("-id"))

    def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[ProductOutputDTO]:
        with _storage_errors("find_by_price_range"):
            queryset = Product.objects.filter(
                price__gte=min_price, price__lte=max_price
            ).order_by("price")
            return _records(queryset)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, data: CreateProductDTO) -> int:
        with _storage_errors("create"), transaction.atomic():
            product = Product.objects.create(
                name=data.name,
                price=data.price,
                sku=data.sku,
            )
        return product.id

    def update(self, id: int, data: UpdateProductDTO) -> bool:
        """Write only the supplied fields; ``False`` when there is nothing to do."""
        changes = data.changes()
        if not changes:
            return False
        with _storage_errors("update"), transaction.atomic():
            affected = Product.objects.filter(id=id).update(**changes)
        logger.info("product.updated", product_id=id, fields=sorted(changes))
        return affected > 0

    def delete(self, id: int) -> bool:
        with _storage_errors("delete"), transaction.atomic():
            affected, _ = Product.objects.filter(id=id).delete()
        if affected:
            logger.info("product.deleted", product_id=id)
        return affected > 0
