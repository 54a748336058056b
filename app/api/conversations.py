"""Conversation API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.models.message import Message
from app.models.reservation import Reservation
from app.providers import WhatsAppProvider, get_whatsapp_provider
from app.schemas.message import (
    ConversationListResponse,
    ConversationSummary,
    MessageListResponse,
    SendMessageRequest,
)
from app.services.conversations import add_message, find_latest_reservation, phone_variants

router = APIRouter()
logger = structlog.get_logger()

RECENT_MESSAGES = 1000


@router.get("", response_model=ConversationListResponse)
async def list_conversations(db: AsyncSession = Depends(get_db)):
    """Conversations grouped by customer phone, latest activity first"""
    result = await db.execute(
        select(Message, Reservation.customer_phone, Reservation.customer_name)
        .join(Reservation, Message.reservation_id == Reservation.id)
        .order_by(Message.created_at.desc())
        .limit(RECENT_MESSAGES)
    )

    grouped = {}
    for message, phone, name in result.all():
        summary = grouped.get(phone)
        if summary is None:
            # Rows arrive newest first, so the first one seen is the latest
            summary = grouped[phone] = ConversationSummary(
                phone=phone,
                name=name or phone,
                last_message=message.body,
                last_direction=message.direction,
                last_at=message.created_at,
                total_messages=0,
            )
        summary.total_messages += 1

    conversations = sorted(grouped.values(), key=lambda c: c.last_at, reverse=True)
    return ConversationListResponse(ok=True, conversations=conversations)


@router.get("/messages", response_model=MessageListResponse)
async def get_messages(
    phone: str = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """All messages of every reservation held by a phone, oldest first"""
    if not phone:
        raise HTTPException(status_code=400, detail="Query parameter ?phone= is required")

    result = await db.execute(
        select(Message)
        .join(Reservation, Message.reservation_id == Reservation.id)
        .where(Reservation.customer_phone.in_(phone_variants(phone)))
        .order_by(Message.created_at.asc())
    )
    return MessageListResponse(ok=True, messages=result.scalars().all())


@router.post("/messages")
async def send_message(
    request: SendMessageRequest,
    db: AsyncSession = Depends(get_db),
    provider: WhatsAppProvider = Depends(get_whatsapp_provider),
):
    """Send a manual WhatsApp message and keep it in the customer's history"""
    logger.info("Manual message", phone=request.phone, provider=provider.name)

    try:
        await provider.send_message(request.phone, request.message)

        reservation = await find_latest_reservation(db, request.phone)
        if reservation:
            add_message(db, reservation.id, request.message)
            await db.commit()
    except Exception:
        logger.exception("Manual message failed", phone=request.phone)
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"ok": True}
