"""Tests for accounts, tokens and profiles."""

from uuid import uuid4

import jwt
import pytest

from fitbot.domain.errors import AuthenticationError, ConflictError, NotFoundError
from fitbot.services.auth import JWT_ALGORITHM, PasswordHasher, TokenService
from tests.conftest import complete_profile


def test_signup_normalizes_email_and_issues_token(user_service, metrics) -> None:
    result = user_service.signup("  Asha ", "Asha@Example.com ", "Secret123")

    assert result.user.email == "asha@example.com"
    assert result.user.name == "Asha"
    assert result.user.password_hash != "Secret123"
    assert user_service.authenticate(result.token) == result.user
    assert metrics.signups == 1


def test_signup_rejects_duplicate_email(user_service) -> None:
    user_service.signup("Asha", "asha@example.com", "Secret123")

    with pytest.raises(ConflictError, match="User already exists"):
        user_service.signup("Asha Two", "ASHA@example.com", "Secret456")


def test_login_checks_password(user_service, metrics) -> None:
    created = user_service.signup("Ravi", "ravi@example.com", "Secret123")

    result = user_service.login("RAVI@example.com", "Secret123")

    assert result.user.id == created.user.id
    assert metrics.logins == 1
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        user_service.login("ravi@example.com", "wrong-password")
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        user_service.login("nobody@example.com", "Secret123")


def test_authenticate_rejects_bad_tokens(user_service) -> None:
    with pytest.raises(AuthenticationError, match="Invalid token"):
        user_service.authenticate("not-a-token")

    unknown_user_token = TokenService(secret="test-secret").issue(uuid4())
    with pytest.raises(AuthenticationError, match="Invalid token"):
        user_service.authenticate(unknown_user_token)


def test_expired_token() -> None:
    tokens = TokenService(secret="test-secret", expires_days=-1)

    with pytest.raises(AuthenticationError, match="Token expired"):
        tokens.verify(tokens.issue(uuid4()))


def test_token_carries_user_id_claim() -> None:
    user_id = uuid4()
    token = TokenService(secret="test-secret").issue(user_id)

    payload = jwt.decode(token, "test-secret", algorithms=[JWT_ALGORITHM])

    assert payload["userId"] == str(user_id)
    assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60


def test_token_signed_with_other_secret_is_invalid() -> None:
    token = TokenService(secret="other-secret").issue(uuid4())

    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService(secret="test-secret").verify(token)


def test_password_hasher_handles_garbage_hash() -> None:
    hasher = PasswordHasher()

    assert hasher.verify("Secret123", hasher.hash("Secret123")) is True
    assert hasher.verify("Secret123", "not-a-hash") is False


def test_update_profile_returns_stats(user_service, user_repository) -> None:
    user = user_service.signup("Asha", "asha@example.com", "Secret123").user

    updated, stats = user_service.update_profile(user.id, complete_profile())

    assert updated.profile == complete_profile()
    assert user_repository.get_by_id(user.id).profile.weight_kg == 70
    assert stats.bmi == 22.9
    assert stats.daily_calories == 2556


def test_update_profile_unknown_user(user_service) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        user_service.update_profile(uuid4(), complete_profile())
