"""Stripe webhook handler"""

from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import stripe
import structlog

from app.config import Settings, get_settings
from app.database import get_db
from app.models.reservation import Reservation
from app.services.payments import confirm_deposit, record_deposit

router = APIRouter()
logger = structlog.get_logger()


@router.post("")
async def handle_stripe_event(
    request: Request,
    stripe_signature: str = Header(None, alias="Stripe-Signature"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Confirm reservations whose deposit was paid through Checkout"""
    payload = await request.body()

    try:
        event = stripe.Webhook.construct_event(payload, stripe_signature, settings.stripe_webhook_secret)
    except (ValueError, stripe.error.SignatureVerificationError):
        logger.warning("Stripe webhook signature verification failed")
        raise HTTPException(status_code=400, detail="Webhook signature verification failed")

    if event["type"] != "checkout.session.completed":
        logger.info("Stripe event ignored", event_type=event["type"])
        return {"received": True}

    session = event["data"]["object"]
    reservation_id = (session.get("metadata") or {}).get("reservation_id")

    try:
        reservation_id = UUID(reservation_id)
    except (TypeError, ValueError):
        logger.warning("Checkout session without reservation", session_id=session.get("id"))
        return {"received": True}

    result = await db.execute(select(Reservation.id).where(Reservation.id == reservation_id))
    if result.scalar_one_or_none() is None:
        logger.warning("Checkout session for unknown reservation", reservation_id=str(reservation_id))
        return {"received": True}

    await confirm_deposit(db, reservation_id)
    record_deposit(
        db,
        reservation_id,
        method="stripe",
        amount=(session.get("amount_total") or 0) / 100,
        stripe_session_id=session.get("id"),
    )
    await db.commit()

    logger.info("Stripe deposit recorded", reservation_id=str(reservation_id), session_id=session.get("id"))

    return {"received": True}
