"""Gateway to an external chat-completion model."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from fitbot.domain.errors import (
    ConfigurationError,
    TransportError,
    UpstreamFormatError,
)
from fitbot.domain.models import UserProfile

TEMPERATURE = 0.7
MAX_TOKENS = 512

_logger = logging.getLogger(__name__)


class ChatCompletionClient(Protocol):
    """Interface for a chat-completion API."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Return the first completion's text, or None when there is none."""


@dataclass
class ExternalAIGateway:
    """Builds the fitness system prompt and calls the completion client."""

    client: ChatCompletionClient | None
    model: str
    timeout_seconds: float = 8.0

    async def get_external_reply(self, message: str, profile: UserProfile) -> str:
        """Return the external model's reply or raise a typed error."""
        if self.client is None:
            raise ConfigurationError("Missing AI API key")
        try:
            content = await asyncio.wait_for(
                self.client.complete(
                    model=self.model,
                    system_prompt=build_system_prompt(profile),
                    user_message=message,
                    temperature=TEMPERATURE,
                    max_tokens=MAX_TOKENS,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            _logger.warning(
                "External AI timed out after %ss (model=%s)",
                self.timeout_seconds,
                self.model,
            )
            raise TransportError(
                f"External AI timed out after {self.timeout_seconds}s"
            ) from exc
        text = (content or "").strip()
        if not text:
            raise UpstreamFormatError("No response content from the external AI")
        return text


def build_system_prompt(profile: UserProfile) -> str:
    """Return the system prompt with known profile fields filled in."""
    return (
        "You are Fit Bot, a helpful fitness and nutrition assistant. "
        "Keep answers concise and actionable. When giving advice, prefer safe, "
        "evidence-based guidance. If calculations are requested and user profile "
        "is available, consider: "
        f"weight (kg): {_or_unknown(profile.weight_kg)}, "
        f"height (cm): {_or_unknown(profile.height_cm)}, "
        f"age: {_or_unknown(profile.age)}, "
        f"gender: {_or_unknown(profile.gender)}, "
        f"activityLevel: {_or_unknown(profile.activity_level)}."
    )


def _or_unknown(value: object) -> str:
    if value is None or value == "":
        return "unknown"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
