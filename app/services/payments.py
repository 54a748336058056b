"""Deposit bookkeeping shared by manual and card payments"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.payment import Payment
from app.models.reservation import Reservation, ReservationStatus


def record_deposit(
    db: AsyncSession,
    reservation_id,
    method: str,
    amount: float,
    stripe_session_id: Optional[str] = None,
) -> Payment:
    """Stage a completed payment; the caller commits"""
    payment = Payment(
        reservation_id=reservation_id,
        method=method,
        amount=amount,
        status="completed",
        stripe_session_id=stripe_session_id,
    )
    db.add(payment)
    return payment


async def confirm_deposit(db: AsyncSession, reservation_id) -> None:
    """Mark the deposit as paid and confirm the reservation"""
    await db.execute(
        update(Reservation)
        .where(Reservation.id == reservation_id)
        .values(deposit_paid=True, status=ReservationStatus.CONFIRMED.value)
    )
