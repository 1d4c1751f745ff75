"""Password hashing and bearer token handling."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from passlib.context import CryptContext

from fitbot.domain.errors import AuthenticationError

JWT_ALGORITHM = "HS256"


@dataclass
class PasswordHasher:
    """Hash and verify passwords with passlib."""

    context: CryptContext = field(
        default_factory=lambda: CryptContext(
            schemes=["pbkdf2_sha256"], deprecated="auto"
        )
    )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self.context.verify(password, password_hash)
        except ValueError:
            return False


@dataclass
class TokenService:
    """Issue and verify signed user tokens."""

    secret: str
    expires_days: int = 7

    def issue(self, user_id: UUID) -> str:
        """Return a signed token carrying the user id."""
        now = datetime.now(tz=UTC)
        payload = {
            "userId": str(user_id),
            "iat": now,
            "exp": now + timedelta(days=self.expires_days),
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> UUID:
        """Return the user id from a valid token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc
        try:
            return UUID(str(payload.get("userId")))
        except ValueError as exc:
            raise AuthenticationError("Invalid token") from exc
