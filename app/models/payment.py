"""Payment model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Float
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


class Payment(Base):
    """Deposit payments recorded against a reservation"""
    __tablename__ = "payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reservation_id = Column(UUID(as_uuid=True), ForeignKey("reservations.id"), nullable=False)

    method = Column(String(20), nullable=False)  # transferencia, efectivo, stripe
    amount = Column(Float, nullable=False)
    status = Column(String(20), default="completed")
    stripe_session_id = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    reservation = relationship("Reservation", back_populates="payments")
