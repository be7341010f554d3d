from django.conf import settings
from django.db import connections
from django.urls import path

from catalog.core.health import HealthChecker
from catalog.core.views import HealthCheckView

checker = HealthChecker(
    started_at=settings.APP_STARTED_AT,
    connections=connections,
    version=settings.APP_VERSION,
)
health_check = HealthCheckView.as_view(checker=checker)

urlpatterns = [
    path("health", health_check, name="health_check"),
    path("api/health", health_check, name="api_health_check"),
]
