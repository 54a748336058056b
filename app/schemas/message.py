"""Message and conversation schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Stored message"""
    id: UUID
    reservation_id: UUID
    direction: str
    channel: Optional[str]
    body: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class MessageListResponse(BaseModel):
    ok: bool = True
    messages: List[MessageResponse]


class SendMessageRequest(BaseModel):
    """Manual message to a phone number"""
    phone: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ConversationSummary(BaseModel):
    """Latest activity for one customer phone"""
    phone: str
    name: str
    last_message: Optional[str]
    last_direction: str
    last_at: datetime
    total_messages: int


class ConversationListResponse(BaseModel):
    ok: bool = True
    conversations: List[ConversationSummary]
