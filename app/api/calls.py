"""Call history API endpoints"""

from typing import Optional
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.call import CallLog
from app.schemas.call import CallListResponse

router = APIRouter()

MAX_CALLS = 200


@router.get("", response_model=CallListResponse)
async def list_calls(
    limit: int = Query(50, ge=1),
    status: Optional[str] = None,
    from_: Optional[datetime] = Query(None, alias="from"),
    db: AsyncSession = Depends(get_db),
):
    """Most recent calls first, optionally filtered by status and start date"""
    query = select(CallLog)

    if status:
        query = query.where(CallLog.status == status)

    if from_:
        query = query.where(CallLog.created_at >= from_)

    query = query.order_by(CallLog.created_at.desc()).limit(min(limit, MAX_CALLS))

    result = await db.execute(query)
    return CallListResponse(ok=True, calls=result.scalars().all())
