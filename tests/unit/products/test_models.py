from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from catalog.products.models import Product

pytestmark = pytest.mark.unit


class TestProductModel:
    def test_str(self):
        product = Product(name="Red Lamp", price=Decimal("19.90"), sku="LAMP-RED")
        assert str(product) == "LAMP-RED - Red Lamp"

    def test_sku_is_optional(self):
        product = Product.objects.create(name="Lamp", price=Decimal("1.00"))
        assert product.sku is None

    def test_duplicate_skus_allowed(self):
        Product.objects.create(name="A", price=Decimal("1.00"), sku="SAME")
        Product.objects.create(name="B", price=Decimal("2.00"), sku="SAME")
        assert Product.objects.filter(sku="SAME").count() == 2

    def test_negative_price_rejected_by_database(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Broken", price=Decimal("-1.00"))

    def test_default_ordering_is_newest_first(self):
        first = Product.objects.create(name="First", price=Decimal("1.00"))
        second = Product.objects.create(name="Second", price=Decimal("1.00"))
        assert list(Product.objects.all()) == [second, first]
