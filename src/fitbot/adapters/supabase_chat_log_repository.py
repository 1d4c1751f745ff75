"""Supabase repository for chat logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitbot.domain.chat import ChatMessage
from fitbot.services.chat import ChatLogRepository


@dataclass
class SupabaseChatLogRepository(ChatLogRepository):
    """Supabase implementation storing one row per chat message."""

    client: Client

    def append_messages(self, user_id: UUID, messages: list[ChatMessage]) -> None:
        """Insert messages in order."""
        payload = [
            {
                "user_id": str(user_id),
                "sender": message.sender,
                "content": message.content,
                "created_at": message.timestamp.isoformat(),
            }
            for message in messages
        ]
        if payload:
            self.client.table("chat_messages").insert(payload).execute()

    def list_messages(self, user_id: UUID) -> list[ChatMessage]:
        """Return the user's messages in insertion order."""
        response = (
            self.client.table("chat_messages")
            .select("sender, content, created_at")
            .eq("user_id", str(user_id))
            .order("id", desc=False)
            .execute()
        )
        return [
            ChatMessage(
                sender=str(row.get("sender", "")),
                content=str(row.get("content", "")),
                timestamp=datetime.fromisoformat(str(row["created_at"])),
            )
            for row in response.data or []
        ]
