"""Payment API endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from app.database import get_db
from app.models.payment import Payment
from app.models.reservation import Reservation
from app.schemas.payment import (
    ManualPaymentCreate,
    ManualPaymentResponse,
    PaymentWithReservationResponse,
)
from app.services.payments import confirm_deposit, record_deposit

router = APIRouter()
logger = structlog.get_logger()

RECENT_PAYMENTS = 200


@router.get("", response_model=List[PaymentWithReservationResponse])
async def list_payments(db: AsyncSession = Depends(get_db)):
    """Latest payments with the reservation they belong to"""
    result = await db.execute(
        select(Payment)
        .options(selectinload(Payment.reservation))
        .order_by(Payment.created_at.desc())
        .limit(RECENT_PAYMENTS)
    )
    return result.scalars().all()


@router.post("/manual", response_model=ManualPaymentResponse)
async def record_manual_payment(
    request: ManualPaymentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a bank transfer or cash deposit and confirm the reservation"""
    result = await db.execute(select(Reservation.id).where(Reservation.id == request.reservation_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Reservation not found")

    payment = record_deposit(db, request.reservation_id, request.method, request.amount)

    # Both manual methods mean the money is already in hand
    await confirm_deposit(db, request.reservation_id)
    await db.commit()

    logger.info(
        "Manual payment recorded",
        reservation_id=str(request.reservation_id),
        method=request.method,
        amount=request.amount,
    )

    return ManualPaymentResponse(payment_id=payment.id, status="completed")
