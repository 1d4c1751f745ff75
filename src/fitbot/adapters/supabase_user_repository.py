"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitbot.domain.models import UserProfile, UserRecord
from fitbot.services.users import UserRepository

_COLUMNS = (
    "id, name, email, password_hash, weight_kg, height_cm, age, gender, "
    "activity_level"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for an email, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert({"name": name, "email": email, "password_hash": password_hash})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_profile(self, user_id: UUID, profile: UserProfile) -> UserRecord | None:
        """Replace the profile columns and return the updated user."""
        response = (
            self.client.table("users")
            .update(
                {
                    "weight_kg": profile.weight_kg,
                    "height_cm": profile.height_cm,
                    "age": profile.age,
                    "gender": profile.gender,
                    "activity_level": profile.activity_level,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def ping(self) -> None:
        """Run a trivial query so readiness checks reach the database."""
        self.client.table("users").select("id").limit(1).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    weight = row.get("weight_kg")
    height = row.get("height_cm")
    age = row.get("age")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        password_hash=str(row.get("password_hash") or ""),
        profile=UserProfile(
            weight_kg=float(weight) if weight is not None else None,
            height_cm=float(height) if height is not None else None,
            age=int(age) if age is not None else None,
            gender=row.get("gender") or None,
            activity_level=row.get("activity_level") or None,
        ),
    )
