"""Signup, login and the bearer token dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request

from fitbot.api.models import LoginRequest, SignupRequest  # noqa: TC001
from fitbot.api.rate_limit import rate_limited
from fitbot.domain.errors import AuthenticationError
from fitbot.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from fitbot.containers import AppContainer
    from fitbot.services.users import AuthResult

_BEARER_PREFIX = "Bearer "

router = APIRouter(
    prefix="/api/auth", tags=["auth"], dependencies=[Depends(rate_limited("auth"))]
)


async def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserRecord:
    """Resolve the user from an ``Authorization: Bearer`` header."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise AuthenticationError("No token provided")
    token = authorization.removeprefix(_BEARER_PREFIX).strip()
    if not token:
        raise AuthenticationError("No token provided")
    container: AppContainer = request.app.state.container
    return container.user_service.authenticate(token)


@router.post("/signup")
async def signup(body: SignupRequest, request: Request) -> dict[str, object]:
    """Create an account and return a token."""
    container: AppContainer = request.app.state.container
    result = container.user_service.signup(body.name, body.email, body.password)
    return _auth_payload(result)


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for a token."""
    container: AppContainer = request.app.state.container
    result = container.user_service.login(body.email, body.password)
    payload = _auth_payload(result)
    payload["user"]["profile"] = result.user.profile.to_payload()
    return payload


def _auth_payload(result: AuthResult) -> dict[str, object]:
    return {"token": result.token, "user": result.user.public_payload()}
