"""Domain models for users and their profiles."""

from dataclasses import dataclass, field
from uuid import UUID

GENDERS = ("male", "female")
ACTIVITY_LEVEL_NAMES = (
    "sedentary",
    "lightlyActive",
    "moderatelyActive",
    "veryActive",
    "extremelyActive",
)


@dataclass(frozen=True)
class UserProfile:
    """Body measurements and activity level used for health calculations.

    Every field is optional on the stored record. Derived-calorie calculations
    only run when the profile is complete.
    """

    weight_kg: float | None = None
    height_cm: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: str | None = None

    def has_measurements(self) -> bool:
        """Return True when weight and height are both set."""
        return bool(self.weight_kg) and bool(self.height_cm)

    def is_complete(self) -> bool:
        """Return True when all five profile fields are set."""
        return (
            self.has_measurements()
            and bool(self.age)
            and bool(self.gender)
            and bool(self.activity_level)
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize using the client-facing field names."""
        return {
            "weight": self.weight_kg,
            "height": self.height_cm,
            "age": self.age,
            "gender": self.gender,
            "activityLevel": self.activity_level,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, object] | None) -> "UserProfile":
        """Build a profile from client-facing field names."""
        if not payload:
            return cls()
        weight = payload.get("weight")
        height = payload.get("height")
        age = payload.get("age")
        gender = payload.get("gender")
        activity_level = payload.get("activityLevel")
        return cls(
            weight_kg=float(weight) if weight is not None else None,
            height_cm=float(height) if height is not None else None,
            age=int(age) if age is not None else None,
            gender=str(gender) if gender else None,
            activity_level=str(activity_level) if activity_level else None,
        )


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    profile: UserProfile = field(default_factory=UserProfile)

    def public_payload(self) -> dict[str, object]:
        """Return the user fields safe to send to clients."""
        return {"id": str(self.id), "name": self.name, "email": self.email}
