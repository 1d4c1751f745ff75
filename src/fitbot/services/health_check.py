"""Liveness, readiness and health reporting."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from fitbot.domain.foods import LocalFoodDataset
from fitbot.services.metrics import MetricsCollector

_logger = logging.getLogger(__name__)


@dataclass
class HealthCheckService:
    """Combine store reachability and local dataset state into a status."""

    store_probe: Callable[[], None]
    dataset: LocalFoodDataset
    metrics: MetricsCollector

    def check_store(self) -> dict[str, str]:
        """Return the persistence store status."""
        try:
            self.store_probe()
        except Exception as exc:
            _logger.warning("Store health check failed: %s", exc)
            return {"status": "unhealthy", "message": str(exc)}
        return {"status": "healthy", "message": "Store reachable"}

    def check_dataset(self) -> dict[str, str]:
        """Return the local food dataset status."""
        if len(self.dataset) == 0:
            return {"status": "degraded", "message": "Local food database is empty"}
        return {
            "status": "healthy",
            "message": f"{len(self.dataset)} local foods loaded",
        }

    def report(self) -> dict[str, object]:
        """Return the overall status with per-check details."""
        checks = {"store": self.check_store(), "localFoods": self.check_dataset()}
        statuses = {check["status"] for check in checks.values()}
        if "unhealthy" in statuses:
            overall = "unhealthy"
        elif "degraded" in statuses:
            overall = "degraded"
        else:
            overall = "healthy"
        uptime = (datetime.now(tz=UTC) - self.metrics.started_at).total_seconds()
        return {
            "status": overall,
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "uptimeSeconds": round(uptime, 1),
            "checks": checks,
        }
