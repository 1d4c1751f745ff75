"""Chat endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fitbot.api.auth import current_user
from fitbot.api.models import ChatRequest  # noqa: TC001
from fitbot.api.rate_limit import rate_limited
from fitbot.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from fitbot.containers import AppContainer

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", dependencies=[Depends(rate_limited("chat"))])
async def chat(
    body: ChatRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, str]:
    """Answer a message, preferring client-sent profile data."""
    container: AppContainer = request.app.state.container
    profile = body.user_data.to_profile() if body.user_data else user.profile
    result = await container.chat_service.respond(
        user.id,
        body.message,
        profile,
        use_external=body.use_external_ai is not False,
    )
    return {"reply": result.reply, "source": result.source}


@router.get("/history")
async def chat_history(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the user's chat log."""
    container: AppContainer = request.app.state.container
    messages = container.chat_service.history(user.id)
    return {"messages": [message.to_payload() for message in messages]}
