"""Unit tests for Product DRF serializers.

Covers:
- Rendering a ProductOutputDTO.
- Prices stay numeric in the JSON payload.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from catalog.products.dtos import ProductOutputDTO
from catalog.products.serializers import ProductListSerializer, ProductSerializer

pytestmark = pytest.mark.unit


def _make_product(**overrides) -> ProductOutputDTO:
    defaults = {"id": 1, "name": "Widget", "price": Decimal("19.90"), "sku": "SKU-001"}
    defaults.update(overrides)
    return ProductOutputDTO(**defaults)


class TestProductSerializer:
    def test_fields(self):
        data = ProductSerializer(_make_product()).data
        assert set(data) == {"id", "name", "price", "sku"}

    def test_price_is_not_a_string(self):
        data = ProductSerializer(_make_product()).data
        assert data["price"] == Decimal("19.90")

    def test_null_sku(self):
        assert ProductSerializer(_make_product(sku=None)).data["sku"] is None


def test_list_envelope():
    data = ProductListSerializer(
        {
            "success": True,
            "data": [_make_product(id=2), _make_product(id=1)],
            "count": 2,
            "pagination": {"page": 1, "limit": 20, "total": 2, "pages": 1},
        }
    ).data
    assert [item["id"] for item in data["data"]] == [2, 1]
    assert data["pagination"]["pages"] == 1
