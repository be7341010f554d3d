from typing import Optional

import structlog
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.cache import never_cache

from catalog.core.health import HealthChecker

logger = structlog.get_logger()


@method_decorator(never_cache, name="dispatch")
class HealthCheckView(View):
    """``GET /health``: 200 when every dependency is up, 503 otherwise."""

    http_method_names = ["get", "head", "options"]
    checker: Optional[HealthChecker] = None

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            report = self.checker.report()
        except Exception as exc:
            logger.exception("health_check_failed")
            response = JsonResponse(
                {
                    "status": "error",
                    "timestamp": timezone.now().isoformat(),
                    "error": "Health check failed",
                    "message": str(exc),
                },
                status=503,
            )
        else:
            response = JsonResponse(report, status=200 if report["status"] == "ok" else 503)

        response["Pragma"] = "no-cache"
        return response
