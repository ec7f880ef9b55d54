"""Food item service: public browsing and owner-scoped management."""

import logging
import math
import uuid
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.errors import (
    ForbiddenError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
    persistence_errors,
)
from src.models.enums import Priority
from src.models.food_item import FoodItem
from src.models.mixins import utcnow
from src.schemas.item import OwnedItemResponse, PublicItemResponse
from src.services.ownership import can_mutate, ownership_filter
from src.services.tokens import TokenClaims

logger = logging.getLogger(__name__)

DEFAULT_ITEM_IMAGE = (
    "https://images.unsplash.com/photo-1504674900247-0877df9cc836"
    "?auto=format&fit=crop&w=800&q=80"
)

REQUIRED_FIELDS = ("name", "summary", "description", "category")
UPDATABLE_FIELDS = (
    "name",
    "summary",
    "description",
    "image",
    "category",
    "priority",
    "available_date",
)

PRICE_ERROR = "Price must be a valid positive number"


def parse_price(value: Any) -> float:
    """Parse a price from a number or numeric string.

    Raises:
        ValidationError: not a finite number, or negative.
    """
    if isinstance(value, bool):
        raise ValidationError(PRICE_ERROR)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError(PRICE_ERROR)
    try:
        parsed = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(PRICE_ERROR) from e
    if not math.isfinite(parsed) or parsed < 0:
        raise ValidationError(PRICE_ERROR)
    return parsed


def parse_priority(value: Any) -> str:
    """Check a priority is one of low, medium or high.

    Raises:
        ValidationError: any other value.
    """
    try:
        return Priority(value).value
    except ValueError as e:
        raise ValidationError("Priority must be one of low, medium, high") from e


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def to_public(item: FoodItem) -> PublicItemResponse:
    """Response shape for anonymous browsing."""
    return PublicItemResponse(
        id=item.id,
        name=item.name,
        summary=item.summary,
        description=item.description,
        image=item.image,
        category=item.category,
        price=item.price,
        priority=item.priority,
        available_date=item.available_date,
        owner_id=item.owner_id,
        owner_email=item.owner_email,
        created_at=item.created_at,
    )


def to_owned(item: FoodItem) -> OwnedItemResponse:
    """Response shape for the owner, including the resolved owner id."""
    return OwnedItemResponse(
        **to_public(item).model_dump(),
        user_id=item.resolved_owner_id,
    )


class ItemService:
    """Service for food item operations.

    ``noun`` only changes the wording of messages, so the /items and
    /products routes can share one engine.
    """

    def __init__(self, db: Session, noun: str = "item"):
        self.db = db
        self.noun = noun

    def list_public(
        self, search: str | None = None, category: str | None = None
    ) -> list[PublicItemResponse]:
        """List all items, optionally filtered by name substring and category."""
        query = self.db.query(FoodItem)
        if search:
            query = query.filter(FoodItem.name.ilike(f"%{escape_like(search)}%", escape="\\"))
        if category:
            query = query.filter(func.lower(FoodItem.category) == category.lower())

        with persistence_errors(self.db, "Unable to fetch items"):
            items = query.order_by(FoodItem.created_at.desc()).all()
        return [to_public(item) for item in items]

    def get_public(self, item_id: str) -> PublicItemResponse:
        """Get a single item by id."""
        return to_public(self._get_item(item_id))

    def list_mine(self, caller: TokenClaims) -> list[OwnedItemResponse]:
        """List the caller's own items, newest first."""
        with persistence_errors(self.db, f"Unable to fetch {self.noun}s"):
            items = (
                self.db.query(FoodItem)
                .filter(ownership_filter(caller.user_id))
                .order_by(FoodItem.created_at.desc())
                .all()
            )
        return [to_owned(item) for item in items]

    def create(self, fields: dict[str, Any], caller: TokenClaims) -> OwnedItemResponse:
        """Create an item owned by the caller.

        Owner fields come from the caller's identity; any owner values in
        ``fields`` are ignored.
        """
        if any(not fields.get(name) for name in REQUIRED_FIELDS) or fields.get("price") is None:
            raise ValidationError("Missing required fields")
        price = parse_price(fields["price"])
        priority = parse_priority(fields.get("priority") or Priority.MEDIUM.value)

        now = utcnow()
        item = FoodItem(
            name=fields["name"],
            summary=fields["summary"],
            description=fields["description"],
            image=fields.get("image") or DEFAULT_ITEM_IMAGE,
            category=fields["category"],
            price=price,
            priority=priority,
            available_date=fields.get("available_date") or now.isoformat(),
            owner_id=caller.user_id,
            user_id=caller.user_id,
            owner_email=caller.email,
            created_at=now,
            updated_at=now,
        )
        with persistence_errors(self.db, f"Unable to create {self.noun}"):
            self.db.add(item)
            self.db.commit()
            self.db.refresh(item)

        logger.info(f"User {caller.user_id} created {self.noun} {item.id}")
        return to_owned(item)

    def update(
        self, item_id: str, caller: TokenClaims, changes: dict[str, Any]
    ) -> OwnedItemResponse:
        """Apply a partial update to one of the caller's items.

        ``changes`` holds only the keys the client actually sent.
        """
        item = self._get_owned_item(item_id, caller, "edit")

        updates = {name: changes[name] for name in UPDATABLE_FIELDS if name in changes}
        nulls = sorted(name for name, value in updates.items() if value is None)
        if nulls:
            raise ValidationError(f"Fields cannot be null: {', '.join(nulls)}")
        if "priority" in updates:
            updates["priority"] = parse_priority(updates["priority"])
        if "price" in changes:
            updates["price"] = parse_price(changes["price"])
        if not updates:
            raise ValidationError("No changes provided")

        for name, value in updates.items():
            setattr(item, name, value)
        item.updated_at = utcnow()

        with persistence_errors(self.db, f"Unable to update {self.noun}"):
            self.db.commit()
            self.db.refresh(item)

        logger.info(f"User {caller.user_id} updated {self.noun} {item.id}: {sorted(updates)}")
        return to_owned(item)

    def delete(self, item_id: str, caller: TokenClaims) -> dict[str, str]:
        """Delete one of the caller's items."""
        item = self._get_owned_item(item_id, caller, "delete")

        with persistence_errors(self.db, f"Unable to delete {self.noun}"):
            self.db.delete(item)
            self.db.commit()

        logger.info(f"User {caller.user_id} deleted {self.noun} {item_id}")
        return {"message": f"{self.noun.capitalize()} deleted"}

    def _get_item(self, item_id: str) -> FoodItem:
        try:
            item_id = str(uuid.UUID(str(item_id)))
        except ValueError as e:
            raise InvalidIdError(f"Invalid {self.noun} id") from e

        with persistence_errors(self.db, f"Unable to fetch {self.noun}"):
            item = self.db.query(FoodItem).filter(FoodItem.id == item_id).first()
        if not item:
            raise NotFoundError(f"{self.noun.capitalize()} not found")
        return item

    def _get_owned_item(self, item_id: str, caller: TokenClaims, action: str) -> FoodItem:
        item = self._get_item(item_id)
        if not can_mutate(item, caller.user_id):
            logger.warning(f"User {caller.user_id} may not {action} {self.noun} {item.id}")
            raise ForbiddenError(f"You can only {action} your own {self.noun}s")
        return item
