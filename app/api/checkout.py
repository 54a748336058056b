"""Stripe Checkout endpoints"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
import stripe
import structlog

from app.config import Settings, get_settings
from app.database import get_db
from app.models.reservation import Reservation
from app.schemas.payment import CheckoutRequest, CheckoutResponse

router = APIRouter()
logger = structlog.get_logger()


def deposit_line_item(reservation: Reservation, currency: str) -> dict:
    """Single Checkout line item charging the deposit in cents"""
    return {
        "price_data": {
            "currency": currency,
            "product_data": {"name": f"Señal reserva {reservation.reservation_number}"},
            "unit_amount": round(reservation.deposit_amount * 100),
        },
        "quantity": 1,
    }


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout_session(
    request: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create a Stripe Checkout session for the reservation deposit"""
    result = await db.execute(select(Reservation).where(Reservation.id == request.reservation_id))
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    if not reservation.deposit_amount:
        raise HTTPException(status_code=400, detail="Reservation has no deposit amount")

    try:
        session = await run_in_threadpool(
            stripe.checkout.Session.create,
            api_key=settings.stripe_secret_key,
            payment_method_types=["card"],
            line_items=[deposit_line_item(reservation, settings.stripe_currency)],
            mode="payment",
            success_url=f"{settings.site_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.site_url}/cancel",
            metadata={"reservation_id": str(reservation.id)},
        )
    except stripe.error.StripeError:
        logger.exception("Stripe checkout failed", reservation_id=str(reservation.id))
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info("Checkout session created", reservation_id=str(reservation.id), session_id=session.id)

    return CheckoutResponse(url=session.url)
