"""Product URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from catalog.products.views import ProductViewSet


class OptionalSlashRouter(SimpleRouter):
    """Router that matches ``/products`` and ``/products/`` alike."""

    def __init__(self) -> None:
        super().__init__()
        self.trailing_slash = "/?"


router = OptionalSlashRouter()
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
