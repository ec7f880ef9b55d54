"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, OAuthSync, UserLogin, UserRegister, UserResponse
from src.schemas.item import (
    ItemCreate,
    ItemUpdate,
    MessageResponse,
    OwnedItemResponse,
    PublicItemResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "OAuthSync",
    "UserResponse",
    "AuthResponse",
    "ItemCreate",
    "ItemUpdate",
    "PublicItemResponse",
    "OwnedItemResponse",
    "MessageResponse",
]
