"""Meta WhatsApp Cloud API webhook"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import Settings, get_settings
from app.database import get_db
from app.services.conversations import add_message, find_latest_reservation

router = APIRouter()
logger = structlog.get_logger()


def iter_inbound_messages(payload: dict):
    """Yield the message objects of a Cloud API notification"""
    for entry in payload.get("entry") or []:
        for change in entry.get("changes") or []:
            if change.get("field") != "messages":
                continue
            for message in (change.get("value") or {}).get("messages") or []:
                yield message


@router.get("", response_class=PlainTextResponse)
async def verify_webhook(
    mode: Optional[str] = Query(None, alias="hub.mode"),
    token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
):
    """Subscription handshake: echo the challenge when the token matches"""
    if mode == "subscribe" and settings.whatsapp_verify_token and token == settings.whatsapp_verify_token:
        logger.info("WhatsApp webhook verified")
        return PlainTextResponse(challenge or "")

    logger.warning("WhatsApp webhook verification rejected", mode=mode)
    raise HTTPException(status_code=403, detail="Forbidden")


@router.post("")
async def receive_messages(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Attach inbound messages to the sender's latest active reservation"""
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON")

    stored = 0
    for message in iter_inbound_messages(payload if isinstance(payload, dict) else {}):
        phone = message.get("from")
        if not phone:
            continue

        reservation = await find_latest_reservation(db, phone, active_only=True)
        if not reservation:
            logger.info("Inbound WhatsApp without active reservation", phone=phone)
            continue

        body = (message.get("text") or {}).get("body", "")
        add_message(db, reservation.id, body, direction="inbound", raw_payload=message)
        stored += 1

    if stored:
        await db.commit()
        logger.info("Inbound WhatsApp messages stored", count=stored)

    return {"status": "ok"}
