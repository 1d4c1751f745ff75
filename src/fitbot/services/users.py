"""User accounts and profiles."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitbot.domain.errors import AuthenticationError, ConflictError, NotFoundError
from fitbot.domain.health import bmi, bmr, daily_calories
from fitbot.domain.models import UserProfile, UserRecord
from fitbot.services.auth import PasswordHasher, TokenService
from fitbot.services.metrics import MetricsCollector


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with this id, if present."""

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user record."""

    def update_profile(self, user_id: UUID, profile: UserProfile) -> UserRecord | None:
        """Replace the user's profile and return the updated record."""


@dataclass(frozen=True)
class AuthResult:
    """A signed token and the user it was issued for."""

    token: str
    user: UserRecord


@dataclass(frozen=True)
class ProfileStats:
    """Headline numbers returned after a profile update."""

    bmi: float
    daily_calories: int


@dataclass
class UserService:
    """Application service for signup, login and profile updates."""

    repository: UserRepository
    tokens: TokenService
    hasher: PasswordHasher
    metrics: MetricsCollector

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account and return a token for it."""
        normalized = email.strip().lower()
        if self.repository.get_by_email(normalized):
            raise ConflictError("User already exists")
        user = self.repository.create_user(
            name.strip(), normalized, self.hasher.hash(password)
        )
        self.metrics.record_signup()
        return AuthResult(token=self.tokens.issue(user.id), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return a token."""
        user = self.repository.get_by_email(email.strip().lower())
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        self.metrics.record_login()
        return AuthResult(token=self.tokens.issue(user.id), user=user)

    def authenticate(self, token: str) -> UserRecord:
        """Return the user a bearer token was issued for."""
        user = self.repository.get_by_id(self.tokens.verify(token))
        if user is None:
            raise AuthenticationError("Invalid token")
        return user

    def update_profile(
        self, user_id: UUID, profile: UserProfile
    ) -> tuple[UserRecord, ProfileStats]:
        """Store a complete profile and return derived stats."""
        updated = self.repository.update_profile(user_id, profile)
        if updated is None:
            raise NotFoundError("User not found")
        bmr_value = bmr(
            float(profile.weight_kg or 0),
            float(profile.height_cm or 0),
            int(profile.age or 0),
            profile.gender or "",
        )
        stats = ProfileStats(
            bmi=bmi(float(profile.weight_kg or 0), float(profile.height_cm or 0)),
            daily_calories=daily_calories(bmr_value, profile.activity_level),
        )
        return updated, stats
