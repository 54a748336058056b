"""Helpers for attaching messages to the right reservation"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.message import Message
from app.models.reservation import Reservation, ACTIVE_STATUSES
from app.providers.base import clean_phone


def phone_variants(phone: str) -> list:
    """Forms under which a phone may have been stored (Meta drops the +)"""
    cleaned = clean_phone(phone)
    variants = {phone.strip(), cleaned}
    if cleaned.startswith("+"):
        variants.add(cleaned[1:])
    elif cleaned:
        variants.add(f"+{cleaned}")
    return [v for v in variants if v]


async def find_latest_reservation(
    db: AsyncSession,
    phone: str,
    active_only: bool = False,
) -> Optional[Reservation]:
    """Most recently created reservation for a customer phone"""
    query = select(Reservation).where(Reservation.customer_phone.in_(phone_variants(phone)))
    if active_only:
        query = query.where(Reservation.status.in_(ACTIVE_STATUSES))

    result = await db.execute(query.order_by(Reservation.created_at.desc()).limit(1))
    return result.scalars().first()


def add_message(
    db: AsyncSession,
    reservation_id,
    body: str,
    direction: str = "outbound",
    raw_payload: Optional[dict] = None,
) -> Message:
    """Stage a message row; the caller commits"""
    message = Message(
        reservation_id=reservation_id,
        direction=direction,
        channel="whatsapp",
        body=body,
        raw_payload=raw_payload,
    )
    db.add(message)
    return message
