"""Reservation schemas"""

import re
from datetime import date, datetime
from typing import Optional, List, Any, Dict
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.reservation import ReservationStatus, EVENT_TYPES
from app.schemas.call import CallLogResponse
from app.schemas.message import MessageResponse
from app.schemas.payment import PaymentResponse

TIME_RE = re.compile(r"^\d{2}:\d{2}$")


class ReservationCreate(BaseModel):
    """Create reservation request"""
    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    customer_email: Optional[str] = None
    reservation_date: date
    start_time: str
    party_size: int = Field(ge=1)
    event_type: str = "RESERVA_NORMAL"
    menu_code: Optional[str] = None
    deposit_amount: Optional[float] = Field(default=None, ge=0)
    total_amount: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("customer_name", "customer_phone")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("start_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        if not TIME_RE.match(value):
            raise ValueError("start_time must use HH:MM format")
        return value

    @field_validator("event_type")
    @classmethod
    def check_event_type(cls, value: str) -> str:
        if value not in EVENT_TYPES:
            raise ValueError(f"event_type must be one of: {', '.join(EVENT_TYPES)}")
        return value


class ReservationUpdate(BaseModel):
    """Partial update; only these fields may be changed"""
    model_config = ConfigDict(extra="forbid")

    guests_confirmed: Optional[int] = Field(default=None, gt=0)
    menu_payload: Optional[Dict[str, Any]] = None
    status: Optional[ReservationStatus] = None
    notes: Optional[str] = None

    @field_validator("guests_confirmed", "menu_payload", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    reservation_number: Optional[str]
    customer_name: str
    customer_phone: str
    customer_email: Optional[str]
    reservation_date: date
    start_time: str
    end_time: Optional[str]
    party_size: int
    guests_confirmed: Optional[int]
    event_type: Optional[str]
    menu_code: Optional[str]
    menu_payload: Optional[Dict[str, Any]] = None
    dishes_status: Optional[str]
    status: str
    canceled_reason: Optional[str]
    total_amount: Optional[float]
    deposit_amount: Optional[float]
    deposit_paid: bool
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReservationDetailResponse(ReservationResponse):
    """Reservation with its conversation, calls and payments"""
    messages: List[MessageResponse] = []
    call_logs: List[CallLogResponse] = []
    payments: List[PaymentResponse] = []


class ReservationCreatedResponse(BaseModel):
    ok: bool = True
    reservation_id: UUID
    reservation_number: str
    message: str = "Reservation created"
