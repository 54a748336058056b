"""Call schemas"""

from datetime import datetime
from typing import Optional, List, Any
from uuid import UUID
from pydantic import BaseModel


class CallLogResponse(BaseModel):
    """Call log entry"""
    id: UUID
    reservation_id: Optional[UUID]
    phone: Optional[str]
    status: Optional[str]
    summary: Optional[str]
    transcript: Optional[str]
    raw_payload: Optional[Any] = None
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class CallListResponse(BaseModel):
    """Recent calls"""
    ok: bool = True
    calls: List[CallLogResponse]
