"""Password hashing and verification."""

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def get_password_hash(password: str) -> str:
    """Hash a password. The result embeds its salt and cost factor."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    Accounts created through OAuth have no hash; they never match.
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)
