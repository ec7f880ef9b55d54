"""Tests for password hashing, tokens and the identity service."""

from datetime import timedelta

import pytest

from src.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    ValidationError,
)
from src.models.user import User
from src.services.identity import IdentityService
from src.services.passwords import get_password_hash, verify_password
from src.services.tokens import create_access_token, decode_access_token

INTERNAL_KEY = "dev-internal-key"


def test_password_hash_roundtrip():
    """Test hashing embeds cost and salt and verifies."""
    hashed = get_password_hash("secret-pass")
    assert hashed.startswith("$2b$10$")
    assert hashed != get_password_hash("secret-pass")
    assert verify_password("secret-pass", hashed)
    assert not verify_password("other-pass", hashed)


@pytest.mark.parametrize("missing_hash", [None, ""])
def test_verify_password_without_hash(missing_hash):
    """Accounts without a hash never match."""
    assert verify_password("anything", missing_hash) is False


def test_token_roundtrip():
    """Test token claims survive issue and verify."""
    token = create_access_token("user-1", "a@example.com", "user")
    claims = decode_access_token(token)
    assert claims.user_id == "user-1"
    assert claims.email == "a@example.com"
    assert claims.role == "user"
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_expired_token():
    """Test expired tokens are rejected."""
    token = create_access_token("user-1", "a@example.com", expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_tampered_token():
    """Test a token signed with another key is rejected."""
    from jose import jwt

    token = jwt.encode({"sub": "user-1"}, "not-the-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)
    with pytest.raises(InvalidTokenError):
        decode_access_token("garbage")


def test_register(db):
    """Test registration stores a normalized, hashed account."""
    service = IdentityService(db)
    user, token = service.register("Ann", "Ann@Example.COM", "password123")

    assert user.email == "ann@example.com"
    assert user.role == "user"
    assert user.provider == "credentials"
    assert user.password_hash != "password123"
    assert decode_access_token(token).user_id == user.id


@pytest.mark.parametrize(
    "name,email,password",
    [
        (None, "a@example.com", "pw"),
        ("A", "", "pw"),
        ("A", "   ", "pw"),
        ("A", "a@example.com", None),
    ],
)
def test_register_requires_fields(db, name, email, password):
    """Test registration rejects missing fields."""
    with pytest.raises(ValidationError):
        IdentityService(db).register(name, email, password)


def test_register_duplicate_is_case_insensitive(db):
    """Test duplicate detection uses the normalized email."""
    service = IdentityService(db)
    service.register("Ann", "ann@example.com", "password123")
    with pytest.raises(DuplicateEmailError):
        service.register("Ann Again", "ANN@example.com", "password456")


def test_login(db):
    """Test login issues a token for the account."""
    service = IdentityService(db)
    registered, _ = service.register("Ann", "ann@example.com", "password123")

    user, token = service.login("ANN@example.com", "password123")
    assert user.id == registered.id
    assert decode_access_token(token).user_id == registered.id


def test_login_failures_match(db):
    """Unknown email and wrong password raise the same error."""
    service = IdentityService(db)
    service.register("Ann", "ann@example.com", "password123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        service.login("ann@example.com", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown:
        service.login("bob@example.com", "password123")
    assert wrong_password.value.message == unknown.value.message


def test_oauth_sync_creates_then_updates(db):
    """Test the upsert keeps id and created_at but refreshes name and provider."""
    service = IdentityService(db)
    first, _ = service.oauth_sync("gina@example.com", "Gina", None, INTERNAL_KEY)
    first_id = first.id
    first_created = first.created_at
    assert first.provider == "google"
    assert first.password_hash is None

    second, token = service.oauth_sync("GINA@example.com", "Gina M.", "github", INTERNAL_KEY)
    assert second.id == first_id
    assert second.name == "Gina M."
    assert second.provider == "github"
    assert second.created_at == first_created
    assert decode_access_token(token).user_id == first_id
    assert db.query(User).count() == 1


def test_oauth_sync_keeps_password(db):
    """Syncing an existing credentials account leaves its password usable."""
    service = IdentityService(db)
    service.register("Ann", "ann@example.com", "password123")
    service.oauth_sync("ann@example.com", "Ann G.", "google", INTERNAL_KEY)

    user, _ = service.login("ann@example.com", "password123")
    assert user.name == "Ann G."


def test_oauth_sync_checks_key_first(db):
    """Test a wrong key is rejected before input validation."""
    service = IdentityService(db)
    with pytest.raises(UnauthorizedError):
        service.oauth_sync(None, None, None, "wrong-key")
    with pytest.raises(UnauthorizedError):
        service.oauth_sync("g@example.com", "G", None, None)
    with pytest.raises(ValidationError):
        service.oauth_sync("g@example.com", None, None, INTERNAL_KEY)
    with pytest.raises(ValidationError):
        service.oauth_sync("  ", "G", None, INTERNAL_KEY)
    with pytest.raises(ValidationError):
        service.login("  ", "password123")
