"""Employee and shift models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, Date, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


class Employee(Base):
    """Restaurant staff"""
    __tablename__ = "employees"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    role = Column(String(50), default="camarero")
    phone = Column(String(30))
    email = Column(String(255))
    pin = Column(String(10))
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    shifts = relationship("Shift", back_populates="employee", cascade="all, delete-orphan")


class Shift(Base):
    """Weekly schedule entry, one per employee and day"""
    __tablename__ = "shifts"
    __table_args__ = (
        UniqueConstraint("employee_id", "week_start", "day_of_week", name="uq_shift_employee_week_day"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    employee_id = Column(UUID(as_uuid=True), ForeignKey("employees.id"), nullable=False)
    week_start = Column(Date, nullable=False)  # Monday of the week
    day_of_week = Column(Integer, nullable=False)  # 0 = Monday
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    employee = relationship("Employee", back_populates="shifts")
