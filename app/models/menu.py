"""Menu catalog and dish selection models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Float, Integer, JSON, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


COURSES = ("first_course", "second_course", "dessert")


class MenuCatalogItem(Base):
    """Group menus offered for events"""
    __tablename__ = "menu_catalog"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)  # per person, VAT included
    description = Column(Text)
    drinks = Column(String(255))
    event_types = Column(JSON, default=list)

    # {"first_course": [{"id": "...", "name": "..."}], "second_course": [...], "dessert": [...]}
    choices = Column(JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def requires_selection(self) -> bool:
        """Menus without course choices are served as a fixed set"""
        return any((self.choices or {}).get(course) for course in COURSES)

    def dish_name(self, course: str, dish_id: str) -> str:
        """Resolve a dish id to its display name, falling back to the id"""
        for dish in (self.choices or {}).get(course) or []:
            if dish.get("id") == dish_id:
                return dish.get("name", dish_id)
        return dish_id


class MenuSelection(Base):
    """Dish choices of one guest"""
    __tablename__ = "menu_selections"
    __table_args__ = (
        UniqueConstraint("reservation_id", "guest_number", name="uq_selection_reservation_guest"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reservation_id = Column(UUID(as_uuid=True), ForeignKey("reservations.id"), nullable=False)
    guest_number = Column(Integer, nullable=False)
    guest_name = Column(String(255))
    first_course = Column(String(100))
    second_course = Column(String(100))
    dessert = Column(String(100))
    allergies = Column(Text)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    reservation = relationship("Reservation", back_populates="menu_selections")
