"""Chat domain models."""

from dataclasses import dataclass
from datetime import datetime

REPLY_SOURCE_LOCAL = "local"
REPLY_SOURCE_EXTERNAL = "external"


@dataclass(frozen=True)
class ChatMessage:
    """One message in a user's append-only chat log."""

    sender: str
    content: str
    timestamp: datetime

    def to_payload(self) -> dict[str, str]:
        return {
            "sender": self.sender,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ResponderResult:
    """Rule-based reply and whether any intent matched."""

    reply: str
    matched: bool


@dataclass(frozen=True)
class ChatReply:
    """Final reply tagged with where it came from."""

    reply: str
    source: str
