"""Unit tests for ProductDjangoRepository.

Covers:
- CRUD operations (find, all, create, update, delete, exists).
- Search and pagination windows.
- Product-specific queries (find_by_sku, find_by_price_range).
- Storage failures surfacing as ProductRepositoryError.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import OperationalError

from catalog.products.dtos import CreateProductDTO, ProductListQuery, UpdateProductDTO
from catalog.products.exceptions import ProductRepositoryError
from catalog.products.models import Product
from catalog.products.repositories.django_repository import ProductDjangoRepository
from catalog.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Widget",
        "price": Decimal("19.99"),
        "sku": "SKU-001",
    }
    defaults.update(overrides)
    return Product.objects.create(**defaults)


# ===========================================================================
# Instantiation
# ===========================================================================


def test_is_instance_of_interface(repo):
    assert isinstance(repo, IProductRepository)


# ===========================================================================
# Queries
# ===========================================================================


class TestFind:
    def test_returns_output_dto(self, repo):
        product = _make_product()

        found = repo.find(product.id)

        assert found.id == product.id
        assert found.name == "Widget"
        assert found.price == Decimal("19.99")
        assert found.sku == "SKU-001"

    def test_missing_returns_none(self, repo):
        assert repo.find(999999) is None

    def test_exists(self, repo):
        product = _make_product()
        assert repo.exists(product.id) is True
        assert repo.exists(product.id + 1000) is False


class TestAll:
    def test_newest_first(self, repo):
        first = _make_product(name="First")
        second = _make_product(name="Second")

        ids = [p.id for p in repo.all()]

        assert ids == [second.id, first.id]

    def test_page_window(self, repo):
        created = [_make_product(name=f"Item {i}") for i in range(5)]

        page = repo.all(ProductListQuery(page=2, limit=2))

        assert [p.id for p in page] == [created[2].id, created[1].id]

    def test_search_matches_name_or_sku(self, repo):
        _make_product(name="Red Lamp", sku="R-1")
        _make_product(name="Green Chair", sku="LAMPSHADE-9")
        _make_product(name="Oak Desk", sku="D-1")

        names = {p.name for p in repo.all(ProductListQuery(q="lamp"))}

        assert names == {"Red Lamp", "Green Chair"}
        assert repo.count("LAMP") == 2
        assert repo.count() == 3


class TestFindBySku:
    def test_duplicates_are_all_returned(self, repo):
        older = _make_product(sku="DUP-1")
        newer = _make_product(sku="DUP-1")
        _make_product(sku="OTHER")

        assert [p.id for p in repo.find_by_sku("DUP-1")] == [newer.id, older.id]

    def test_unknown_sku(self, repo):
        assert repo.find_by_sku("NOPE") == []


def test_find_by_price_range_orders_by_price(repo):
    _make_product(name="Mid", price=Decimal("50.00"))
    _make_product(name="Low", price=Decimal("10.00"))
    _make_product(name="High", price=Decimal("500.00"))

    found = repo.find_by_price_range(Decimal("5"), Decimal("100"))

    assert [p.name for p in found] == ["Low", "Mid"]


# ===========================================================================
# Commands
# ===========================================================================


class TestCreate:
    def test_returns_new_id(self, repo):
        product_id = repo.create(CreateProductDTO(name="Lamp", price="9.90", sku=""))

        stored = Product.objects.get(id=product_id)
        assert stored.name == "Lamp"
        assert stored.price == Decimal("9.90")
        assert stored.sku is None


class TestUpdate:
    def test_only_supplied_fields_change(self, repo):
        product = _make_product()

        assert repo.update(product.id, UpdateProductDTO(price="25.00")) is True

        product.refresh_from_db()
        assert product.price == Decimal("25.00")
        assert product.name == "Widget"
        assert product.sku == "SKU-001"

    def test_empty_update_is_a_no_op(self, repo):
        product = _make_product()
        assert repo.update(product.id, UpdateProductDTO()) is False

    def test_missing_row(self, repo):
        assert repo.update(424242, UpdateProductDTO(name="Ghost")) is False


class TestDelete:
    def test_removes_row(self, repo):
        product = _make_product()

        assert repo.delete(product.id) is True
        assert not Product.objects.filter(id=product.id).exists()

    def test_missing_row(self, repo):
        assert repo.delete(424242) is False


# ===========================================================================
# Storage failures
# ===========================================================================


def test_database_error_is_wrapped(repo):
    with patch.object(Product.objects, "filter", side_effect=OperationalError("db is gone")):
        with pytest.raises(ProductRepositoryError, match="db is gone"):
            repo.find(1)
