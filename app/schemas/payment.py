"""Payment schemas"""

from datetime import date, datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, Field


class ManualPaymentCreate(BaseModel):
    """Deposit paid outside the checkout flow"""
    reservation_id: UUID
    method: Literal["transferencia", "efectivo"]
    amount: float = Field(gt=0)


class ManualPaymentResponse(BaseModel):
    payment_id: UUID
    status: str


class CheckoutRequest(BaseModel):
    reservation_id: UUID


class CheckoutResponse(BaseModel):
    url: str


class PaymentReservationInfo(BaseModel):
    """Reservation fields shown next to each payment"""
    customer_name: str
    customer_phone: str
    reservation_date: date
    event_type: Optional[str]
    party_size: int

    class Config:
        from_attributes = True


class PaymentResponse(BaseModel):
    """Payment record"""
    id: UUID
    reservation_id: UUID
    method: str
    amount: float
    status: str
    stripe_session_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PaymentWithReservationResponse(PaymentResponse):
    reservation: Optional[PaymentReservationInfo] = None
