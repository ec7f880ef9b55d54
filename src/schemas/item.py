"""Food item schemas.

JSON keys are camelCase (``availableDate``, ``ownerId``...) to match the
web client; Python code uses the snake_case field names.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemCreate(CamelModel):
    """Create a new item.

    Price is left untyped: numbers and numeric strings are both accepted
    and checked by the item service.
    """

    name: str | None = None
    summary: str | None = None
    description: str | None = None
    image: str | None = None
    category: str | None = None
    price: Any = None
    priority: str | None = None
    available_date: str | None = None


class ItemUpdate(ItemCreate):
    """Partial update. Only the keys present in the body are applied."""


class PublicItemResponse(CamelModel):
    """Item as shown to anyone browsing the menu."""

    id: str
    name: str
    summary: str
    description: str
    image: str
    category: str
    price: float
    priority: str
    available_date: str
    owner_id: str | None = None
    owner_email: str | None = None
    created_at: datetime


class OwnedItemResponse(PublicItemResponse):
    """Item as shown to its owner."""

    user_id: str | None = None


class MessageResponse(BaseModel):
    message: str
