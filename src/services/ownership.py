"""Ownership checks for food items."""

from sqlalchemy import or_

from src.models.food_item import FoodItem


def can_mutate(item: FoodItem | None, caller_id: str) -> bool:
    """Check whether the caller owns the item under either owner column."""
    if item is None or not caller_id:
        return False
    return caller_id in (item.user_id, item.owner_id)


def ownership_filter(caller_id: str):
    """Query clause matching items owned by the caller."""
    return or_(FoodItem.user_id == caller_id, FoodItem.owner_id == caller_id)
