"""Health reporting for the catalog service.

``HealthChecker`` is built once with its collaborators (process start
time, Django's connection handler, version string and a clock) so a
check never reaches for ambient globals.
"""

from __future__ import annotations

import resource
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import structlog
from django.db import DatabaseError

logger = structlog.get_logger(__name__)

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_uptime(seconds: float) -> str:
    """``"<d>d <h>h <m>m <s>s"`` with leading zero units dropped."""
    total = max(0, int(seconds))
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)

    if days:
        return f"{days}d {hours}h {minutes}m {secs}s"
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_bytes(size: float) -> str:
    """Human readable byte count, e.g. ``1.5 KB`` or ``128 MB``."""
    value = float(size)
    index = 0
    while value >= 1024 and index < len(BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[index]}"


def _peak_rss() -> int:
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # kilobytes on Linux, bytes on macOS
    return peak if sys.platform == "darwin" else peak * 1024


def _current_rss() -> Optional[int]:
    try:
        with open("/proc/self/statm") as statm:
            pages = int(statm.read().split()[1])
    except (OSError, ValueError, IndexError):
        return None
    return pages * resource.getpagesize()


def memory_usage() -> Dict[str, str]:
    """Current and peak resident memory plus the address-space limit."""
    peak = _peak_rss()
    current = _current_rss() or peak
    soft_limit, _ = resource.getrlimit(resource.RLIMIT_AS)
    limit = "unlimited" if soft_limit == resource.RLIM_INFINITY else format_bytes(soft_limit)
    return {
        "current": format_bytes(current),
        "peak": format_bytes(max(peak, current)),
        "limit": limit,
    }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthChecker:
    """Builds the ``/health`` report.

    ``connections`` is Django's ``ConnectionHandler`` (or any mapping of
    alias to connection); ``alias`` names the database to check.
    """

    def __init__(
        self,
        started_at: datetime,
        connections: Any,
        alias: str = "default",
        version: str = "1.0.0",
        clock: Callable[[], datetime] = _utcnow,
        memory: Callable[[], Dict[str, str]] = memory_usage,
    ) -> None:
        self.started_at = started_at
        self.connections = connections
        self.alias = alias
        self.version = version
        self.clock = clock
        self.memory = memory

    def check_database(self) -> bool:
        """Run ``SELECT 1`` against the configured database."""
        try:
            with self.connections[self.alias].cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as exc:
            logger.error("health_check_db_failure", alias=self.alias, error=str(exc))
            return False
        return True

    def uptime(self) -> str:
        return format_uptime((self.clock() - self.started_at).total_seconds())

    def report(self) -> Dict[str, Any]:
        database_ok = self.check_database()
        report = {
            "status": "ok" if database_ok else "degraded",
            "timestamp": self.clock().isoformat(),
            "version": self.version,
            "services": {
                "database": "healthy" if database_ok else "unhealthy",
                "api": "healthy",
            },
            "uptime": self.uptime(),
            "memory_usage": self.memory(),
        }
        logger.info("health_check_completed", status=report["status"])
        return report
