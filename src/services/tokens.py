"""JWT issuance and verification."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import get_settings
from src.errors import InvalidTokenError

settings = get_settings()


@dataclass(frozen=True)
class TokenClaims:
    """Identity of the caller, as carried by a verified bearer token."""

    user_id: str
    email: str | None
    role: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None


def create_access_token(
    user_id: str,
    email: str,
    role: str = "user",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token."""
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role or "user",
        "iat": now,
        "exp": now + expires_delta,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate a JWT token.

    Raises:
        InvalidTokenError: bad signature, expired, malformed or missing subject.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError() from e

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError()

    return TokenClaims(
        user_id=str(user_id),
        email=payload.get("email"),
        role=payload.get("role") or "user",
        issued_at=_timestamp(payload.get("iat")),
        expires_at=_timestamp(payload.get("exp")),
    )


def _timestamp(value) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, UTC)
