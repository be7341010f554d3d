"""Product repository interface.

Extends ``IRepository`` with the listing, counting and look-up queries
the catalog needs.  Search is a case-insensitive substring match on
``name`` OR ``sku``.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from catalog.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from catalog.products.dtos import (
        CreateProductDTO,
        ProductListQuery,
        ProductOutputDTO,
        UpdateProductDTO,
    )


class IProductRepository(
    IRepository["ProductOutputDTO", "CreateProductDTO", "UpdateProductDTO"]
):
    """Repository contract for the Product aggregate.

    Storage failures raise ``ProductRepositoryError``.
    """

    @abstractmethod
    def all(self, query: Optional[ProductListQuery] = None) -> List[ProductOutputDTO]:
        """One page of products matching ``query.q``, newest (highest id) first.

        Without a query every product is returned.
        """

    @abstractmethod
    def count(self, search: Optional[str] = None) -> int:
        """Number of products matching ``search``, ignoring pagination."""

    @abstractmethod
    def find_by_sku(self, sku: str) -> List[ProductOutputDTO]:
        """Products carrying exactly ``sku``, newest first (SKUs may repeat)."""

    @abstractmethod
    def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[ProductOutputDTO]:
        """Products priced within ``[min_price, max_price]``, cheapest first."""
