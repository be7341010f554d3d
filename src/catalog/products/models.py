"""Product model backing the ``products`` table.

Field rules (name charset, price precision, SKU format) are enforced by
``ProductValidator`` before anything reaches the ORM; the table itself only
guarantees a non-negative price.  SKU is nullable and NOT unique.
"""

from __future__ import annotations

import structlog
from django.db import models

logger = structlog.get_logger(__name__)


class Product(models.Model):
    """Catalog product with an optional stock keeping unit."""

    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=8, decimal_places=2)
    sku = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        db_table = "products"
        ordering = ["-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                sku=self.sku,
                name=self.name,
            )

    def __str__(self) -> str:
        if self.sku:
            return f"{self.sku} - {self.name}"
        return self.name
