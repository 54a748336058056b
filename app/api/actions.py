"""Outbound action endpoints: calls and WhatsApp messages"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.models.call import CallLog
from app.models.message import Message
from app.models.reservation import Reservation
from app.providers import CallProvider, WhatsAppProvider, get_call_provider, get_whatsapp_provider
from app.schemas.actions import (
    CallActionRequest,
    CallActionResponse,
    WhatsAppSendRequest,
    WhatsAppSendResponse,
)

router = APIRouter()
logger = structlog.get_logger()


@router.post("/call", response_model=CallActionResponse)
async def trigger_call(
    request: CallActionRequest,
    db: AsyncSession = Depends(get_db),
    provider: CallProvider = Depends(get_call_provider),
):
    """Start an outbound call and record the attempt"""
    logger.info("Action: call", reservation_id=str(request.reservation_id), provider=provider.name)

    try:
        await provider.make_call(request.phone)

        call_log = CallLog(
            reservation_id=request.reservation_id,
            phone=request.phone,
            status="initiated",
            summary="BAPI call initiated",
        )
        db.add(call_log)
        await db.commit()
    except Exception:
        logger.exception("Call action failed", reservation_id=str(request.reservation_id))
        raise HTTPException(status_code=500, detail="Internal server error")

    return CallActionResponse(called=True, call_id=call_log.id)


@router.post("/whatsapp/send", response_model=WhatsAppSendResponse)
async def send_whatsapp(
    request: WhatsAppSendRequest,
    db: AsyncSession = Depends(get_db),
    provider: WhatsAppProvider = Depends(get_whatsapp_provider),
):
    """Send a WhatsApp message to a phone or to the customer of a reservation"""
    phone = request.to

    if request.reservation_id:
        result = await db.execute(
            select(Reservation.id, Reservation.customer_phone).where(Reservation.id == request.reservation_id)
        )
        row = result.one_or_none()

        if row is None or not (phone or row.customer_phone):
            raise HTTPException(status_code=404, detail="Reservation not found or has no phone")

        phone = phone or row.customer_phone

    if not phone:
        raise HTTPException(status_code=400, detail='Either "to" or "reservation_id" is required')

    logger.info("Action: whatsapp send", reservation_id=str(request.reservation_id), provider=provider.name)

    try:
        await provider.send_message(phone, request.message)

        if request.reservation_id:
            db.add(Message(
                reservation_id=request.reservation_id,
                direction="outbound",
                channel="whatsapp",
                body=request.message,
            ))
            await db.commit()
    except Exception:
        logger.exception("WhatsApp send failed", reservation_id=str(request.reservation_id))
        raise HTTPException(status_code=500, detail="Internal server error")

    return WhatsAppSendResponse(sent=True)
