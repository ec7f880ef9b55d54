"""User model."""

import uuid

from sqlalchemy import Column, String

from src.database import Base
from src.models.enums import AuthProvider, Role
from src.models.mixins import TimestampMixin


def generate_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


class User(Base, TimestampMixin):
    """User model for authentication and item ownership."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    # Always stored lowercase
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Null for OAuth-only accounts
    password_hash = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default=Role.USER.value)
    provider = Column(String(50), nullable=False, default=AuthProvider.CREDENTIALS.value)
