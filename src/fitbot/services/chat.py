"""Chat orchestration between the rule-based responder and external AI."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal, Protocol
from uuid import UUID

from fitbot.domain.chat import (
    REPLY_SOURCE_EXTERNAL,
    REPLY_SOURCE_LOCAL,
    ChatMessage,
    ChatReply,
)
from fitbot.domain.errors import FitBotError
from fitbot.domain.models import UserProfile
from fitbot.services.external_ai import ExternalAIGateway
from fitbot.services.metrics import MetricsCollector
from fitbot.services.responder import RuleBasedResponder

ChatMode = Literal["fallback", "external_first"]

_logger = logging.getLogger(__name__)


class ChatLogRepository(Protocol):
    """Persistence interface for per-user chat logs."""

    def append_messages(self, user_id: UUID, messages: list[ChatMessage]) -> None:
        """Append messages to the end of the user's log."""

    def list_messages(self, user_id: UUID) -> list[ChatMessage]:
        """Return the user's messages in the order they were appended."""


@dataclass
class ChatService:
    """Produce chat replies and record the conversation."""

    responder: RuleBasedResponder
    gateway: ExternalAIGateway
    repository: ChatLogRepository
    metrics: MetricsCollector
    mode: ChatMode = "external_first"

    async def respond(
        self,
        user_id: UUID,
        message: str,
        profile: UserProfile,
        *,
        use_external: bool = True,
    ) -> ChatReply:
        """Return a reply tagged with its source and log both messages."""
        self.metrics.record_chat_request()
        if self.mode == "fallback":
            result = await self._fallback(message, profile, use_external)
        else:
            result = await self._external_first(message, profile, use_external)
        if result.source == REPLY_SOURCE_EXTERNAL:
            self.metrics.record_external_reply()
        self._append_log(user_id, message, result.reply)
        return result

    def history(self, user_id: UUID) -> list[ChatMessage]:
        """Return the user's chat log."""
        return self.repository.list_messages(user_id)

    async def _fallback(
        self, message: str, profile: UserProfile, use_external: bool
    ) -> ChatReply:
        local = self.responder.reply(message, profile)
        if local.matched or not use_external:
            return ChatReply(local.reply, REPLY_SOURCE_LOCAL)
        try:
            reply = await self.gateway.get_external_reply(message, profile)
        except FitBotError as exc:
            _logger.warning("External AI failed, keeping local reply: %s", exc)
            return ChatReply(local.reply, REPLY_SOURCE_LOCAL)
        return ChatReply(reply, REPLY_SOURCE_EXTERNAL)

    async def _external_first(
        self, message: str, profile: UserProfile, use_external: bool
    ) -> ChatReply:
        if use_external:
            try:
                reply = await self.gateway.get_external_reply(message, profile)
            except FitBotError as exc:
                _logger.warning("External AI failed, falling back to local: %s", exc)
            else:
                return ChatReply(reply, REPLY_SOURCE_EXTERNAL)
        local = self.responder.reply(message, profile)
        return ChatReply(local.reply, REPLY_SOURCE_LOCAL)

    def _append_log(self, user_id: UUID, message: str, reply: str) -> None:
        now = datetime.now(tz=UTC)
        try:
            self.repository.append_messages(
                user_id,
                [
                    ChatMessage(sender="user", content=message, timestamp=now),
                    ChatMessage(sender="bot", content=reply, timestamp=now),
                ],
            )
        except Exception:
            _logger.exception("Failed to save chat log", extra={"user_id": user_id})
