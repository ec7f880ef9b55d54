"""Food item (product) model."""

from sqlalchemy import Column, Float, String, Text

from src.database import Base
from src.models.enums import Priority
from src.models.mixins import TimestampMixin
from src.models.user import generate_id


class FoodItem(Base, TimestampMixin):
    """A menu entry owned by the user who created it."""

    __tablename__ = "food_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    summary = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(2048), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    price = Column(Float, nullable=False)
    priority = Column(String(20), nullable=False, default=Priority.MEDIUM.value)
    available_date = Column(String(64), nullable=False)  # ISO-8601 timestamp
    owner_id = Column(String(36), nullable=True, index=True)
    # Legacy owner column; older records carry only this one
    user_id = Column(String(36), nullable=True, index=True)
    owner_email = Column(String(255), nullable=True)

    @property
    def resolved_owner_id(self) -> str | None:
        """Owner id regardless of which column it was written under."""
        return self.user_id or self.owner_id
