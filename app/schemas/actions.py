"""Outbound action schemas"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class CallActionRequest(BaseModel):
    reservation_id: UUID
    phone: str = Field(min_length=1)


class CallActionResponse(BaseModel):
    called: bool = True
    call_id: UUID


class WhatsAppSendRequest(BaseModel):
    """Either `to` or `reservation_id` identifies the recipient"""
    message: str = Field(min_length=1)
    reservation_id: Optional[UUID] = None
    to: Optional[str] = None


class WhatsAppSendResponse(BaseModel):
    sent: bool = True


class AutomationWhatsAppRequest(BaseModel):
    """Payload sent by the automation scenario, which only knows the phone"""
    telefono: str
    mensaje: str


class AutomationWhatsAppResponse(BaseModel):
    ok: bool = True
    message: str = "Message sent"
    reservation_id: Optional[UUID] = None
