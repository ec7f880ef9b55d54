"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    USER = "user"


class AuthProvider(str, Enum):
    """How an account authenticates."""

    CREDENTIALS = "credentials"
    GOOGLE = "google"


class Priority(str, Enum):
    """Display priority of a menu item."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
