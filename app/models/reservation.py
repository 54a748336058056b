"""Reservation model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, DateTime, Boolean, Float, JSON, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle values. Any value may be set from any other."""
    HOLD_BLOCKED = "hold_blocked"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


ACTIVE_STATUSES = [ReservationStatus.HOLD_BLOCKED.value, ReservationStatus.CONFIRMED.value]

EVENT_TYPES = [
    "RESERVA_NORMAL",
    "INFANTIL_CUMPLE",
    "GRUPO_SENTADO",
    "GRUPO_PICA_PICA",
    "NOCTURNA_EXCLUSIVA",
]


def generate_reservation_number() -> str:
    return f"CO-{uuid.uuid4().hex[:6].upper()}"


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reservation_number = Column(String(20), unique=True, default=generate_reservation_number)

    # Customer information
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(30), nullable=False, index=True)
    customer_email = Column(String(255))

    # Reservation details
    reservation_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5))
    party_size = Column(Integer, nullable=False)
    guests_confirmed = Column(Integer)
    event_type = Column(String(50), default="RESERVA_NORMAL")

    # Menu
    menu_code = Column(String(50))
    menu_payload = Column(JSON, default=dict)
    dishes_status = Column(String(20), default="pending")  # pending, completed

    # Status
    status = Column(String(50), nullable=False, default=ReservationStatus.HOLD_BLOCKED.value)
    canceled_reason = Column(Text)

    # Deposit
    total_amount = Column(Float)
    deposit_amount = Column(Float)
    deposit_paid = Column(Boolean, default=False)

    notes = Column(Text)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    messages = relationship("Message", back_populates="reservation")
    call_logs = relationship("CallLog", back_populates="reservation")
    payments = relationship("Payment", back_populates="reservation")
    menu_selections = relationship("MenuSelection", back_populates="reservation")
