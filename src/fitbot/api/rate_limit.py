"""Per-client request limits for the API."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from fastapi import Request
from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from fitbot.config import Settings
from fitbot.domain.errors import RateLimitError

_MESSAGES = {
    "general": "Too many requests, please try again later.",
    "auth": "Too many authentication attempts, please try again later.",
    "chat": "Too many chat requests, please slow down.",
}


@dataclass
class RateLimiter:
    """Fixed-window limits keyed by scope and client address, kept in memory."""

    limits: dict[str, RateLimitItem]
    strategy: FixedWindowRateLimiter = field(
        default_factory=lambda: FixedWindowRateLimiter(MemoryStorage())
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiter":
        """Parse limit strings such as ``20/10 seconds``; bad values raise."""
        return cls(
            limits={
                "general": parse(settings.general_rate_limit),
                "auth": parse(settings.auth_rate_limit),
                "chat": parse(settings.chat_rate_limit),
            }
        )

    def hit(self, scope: str, client: str) -> bool:
        """Count one request; False once the client is over the limit."""
        return self.strategy.hit(self.limits[scope], scope, client)


def rate_limited(scope: str) -> Callable[[Request], Awaitable[None]]:
    """Build a dependency enforcing the named limit."""

    async def check(request: Request) -> None:
        limiter: RateLimiter = request.app.state.rate_limiter
        client = request.client.host if request.client else "unknown"
        if not limiter.hit(scope, client):
            raise RateLimitError(_MESSAGES[scope])

    return check
