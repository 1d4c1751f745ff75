"""Request and usage counters owned by the application container."""

from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime

RESPONSE_TIME_WINDOW = 1000
HTTP_ERROR_STATUS = 400


@dataclass
class EndpointStats:
    """Counters for one method and route."""

    count: int = 0
    errors: int = 0
    total_time_ms: float = 0.0


@dataclass
class MetricsCollector:
    """Mutable counters; one instance per application."""

    requests_total: int = 0
    requests_success: int = 0
    requests_errors: int = 0
    by_endpoint: dict[str, EndpointStats] = field(default_factory=dict)
    response_times_ms: deque[float] = field(
        default_factory=lambda: deque(maxlen=RESPONSE_TIME_WINDOW)
    )
    signups: int = 0
    logins: int = 0
    food_searches: int = 0
    food_entries: int = 0
    chat_requests: int = 0
    external_replies: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def record_request(
        self, method: str, endpoint: str, status_code: int, elapsed_ms: float
    ) -> None:
        """Record one finished HTTP request."""
        self.requests_total += 1
        if status_code < HTTP_ERROR_STATUS:
            self.requests_success += 1
        else:
            self.requests_errors += 1
        stats = self.by_endpoint.setdefault(f"{method} {endpoint}", EndpointStats())
        stats.count += 1
        stats.total_time_ms += elapsed_ms
        if status_code >= HTTP_ERROR_STATUS:
            stats.errors += 1
        self.response_times_ms.append(elapsed_ms)

    def record_signup(self) -> None:
        self.signups += 1

    def record_login(self) -> None:
        self.logins += 1

    def record_food_search(self) -> None:
        self.food_searches += 1

    def record_food_entry(self) -> None:
        self.food_entries += 1

    def record_chat_request(self) -> None:
        self.chat_requests += 1

    def record_external_reply(self) -> None:
        self.external_replies += 1

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-friendly summary of all counters."""
        times = list(self.response_times_ms)
        average = sum(times) / len(times) if times else 0.0
        uptime = (datetime.now(tz=UTC) - self.started_at).total_seconds()
        return {
            "uptimeSeconds": round(uptime, 1),
            "requests": {
                "total": self.requests_total,
                "success": self.requests_success,
                "errors": self.requests_errors,
                "errorRate": (
                    round(self.requests_errors / self.requests_total, 4)
                    if self.requests_total
                    else 0.0
                ),
                "byEndpoint": {
                    key: {
                        "count": stats.count,
                        "errors": stats.errors,
                        "averageTimeMs": round(stats.total_time_ms / stats.count, 2),
                    }
                    for key, stats in self.by_endpoint.items()
                },
            },
            "response": {"averageTimeMs": round(average, 2)},
            "users": {"signups": self.signups, "logins": self.logins},
            "food": {"searches": self.food_searches, "entries": self.food_entries},
            "ai": {
                "chatRequests": self.chat_requests,
                "externalReplies": self.external_replies,
            },
        }
