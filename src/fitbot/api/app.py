"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitbot.api.auth import current_user
from fitbot.api.auth import router as auth_router
from fitbot.api.chat import router as chat_router
from fitbot.api.foods import router as foods_router
from fitbot.api.nutrition import router as nutrition_router
from fitbot.api.profile import router as profile_router
from fitbot.api.rate_limit import RateLimiter, rate_limited
from fitbot.app_logging import configure_logging
from fitbot.config import parse_cors_origins
from fitbot.containers import AppContainer
from fitbot.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    FitBotError,
    NotFoundError,
    RateLimitError,
    TransportError,
    UpstreamFormatError,
    ValidationError,
)
from fitbot.domain.models import UserRecord

UNMATCHED_ENDPOINT = "<unmatched>"

# First match wins, so subclasses come before their bases.
_ERROR_STATUS: tuple[tuple[type[FitBotError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 400),
    (RateLimitError, 429),
    (UpstreamFormatError, 502),
    (TransportError, 502),
    (ConfigurationError, 503),
)


def error_status(exc: FitBotError) -> int:
    """Return the HTTP status for an application error."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "FitBot API starting (%s, chat mode %s)",
            container.settings.environment,
            container.settings.chat_mode,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(
        title="FitBot",
        version="1.0.0",
        lifespan=lifespan,
        dependencies=[Depends(rate_limited("general"))],
    )
    app.state.container = container
    app.state.rate_limiter = RateLimiter.from_settings(container.settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def record_metrics(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        route = request.scope.get("route")
        endpoint = getattr(route, "path", UNMATCHED_ENDPOINT)
        request.app.state.container.metrics.record_request(
            request.method, endpoint, response.status_code, elapsed_ms
        )
        return response

    @app.exception_handler(FitBotError)
    async def handle_app_error(request: Request, exc: FitBotError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= 500:  # noqa: PLR2004
            logger.warning(
                "%s %s failed: %s", request.method, request.url.path, exc
            )
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request,  # noqa: ARG001
        exc: RequestValidationError,
    ) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"][1:]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": details},
        )

    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(chat_router)
    app.include_router(foods_router)
    app.include_router(nutrition_router)

    @app.get("/")
    async def index() -> dict[str, object]:
        """API index."""
        return {
            "message": "FitBot Backend API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "auth": "/api/auth",
                "chat": "/api/chat",
                "food": "/api/food",
                "nutrition": "/api/nutrition",
                "health": "/health",
            },
        }

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Store and local dataset health."""
        state_container: AppContainer = request.app.state.container
        report = state_container.health_check.report()
        status_code = 503 if report["status"] == "unhealthy" else 200
        return JSONResponse(status_code=status_code, content=report)

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        """Readiness probe; ready once the store answers."""
        state_container: AppContainer = request.app.state.container
        store = state_container.health_check.check_store()
        if store["status"] != "healthy":
            return JSONResponse(
                status_code=503,
                content={"status": "not ready", "error": store["message"]},
            )
        return JSONResponse(
            content={"status": "ready", "timestamp": datetime.now(tz=UTC).isoformat()}
        )

    @app.get("/live")
    async def live(request: Request) -> dict[str, object]:
        """Liveness probe."""
        state_container: AppContainer = request.app.state.container
        uptime = datetime.now(tz=UTC) - state_container.metrics.started_at
        return {
            "status": "alive",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "uptime": round(uptime.total_seconds(), 1),
        }

    @app.get("/metrics")
    async def metrics(
        request: Request, user: UserRecord = Depends(current_user)
    ) -> JSONResponse:
        """Usage counters; production restricts them to the admin account."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        if settings.is_production and user.email != settings.admin_email:
            return JSONResponse(status_code=403, content={"error": "Access denied"})
        return JSONResponse(content=state_container.metrics.snapshot())

    return app
