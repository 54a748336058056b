"""Periodic reservation maintenance"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.reservation import Reservation, ReservationStatus
from app.providers.base import WhatsAppProvider
from app.services.conversations import add_message

logger = structlog.get_logger()

PAYMENT_DEADLINE_DAYS = 4
REMINDER_DAYS_BEFORE = 5


def cancellation_message(reservation: Reservation) -> str:
    return "\n".join([
        "*Reserva cancelada*",
        "",
        f"Hola {reservation.customer_name}, tu reserva para el "
        f"{reservation.reservation_date.strftime('%d/%m/%Y')} ha sido cancelada porque no "
        "recibimos el pago de la señal dentro del plazo.",
        "",
        "Si deseas hacer una nueva reserva, contacta con nosotros.",
    ])


def reminder_message(reservation: Reservation) -> str:
    return "\n".join([
        "*Recordatorio de tu reserva*",
        "",
        f"Hola {reservation.customer_name}, te esperamos el "
        f"{reservation.reservation_date.strftime('%d/%m/%Y')} a las {reservation.start_time}h "
        f"({reservation.party_size} personas).",
        "",
        "Por favor confirma el número de asistentes, los platos y cualquier alergia.",
    ])


async def expire_unpaid_reservations(
    db: AsyncSession,
    provider: WhatsAppProvider,
    now: Optional[datetime] = None,
) -> dict:
    """Cancel held reservations whose deposit deadline has passed"""
    now = now or datetime.utcnow()
    cutoff = now - timedelta(days=PAYMENT_DEADLINE_DAYS)
    stats = {"expired_cancelled": 0, "errors": []}

    result = await db.execute(
        select(Reservation).where(
            Reservation.status == ReservationStatus.HOLD_BLOCKED.value,
            Reservation.created_at < cutoff,
        )
    )

    for reservation in result.scalars().all():
        reservation.status = ReservationStatus.CANCELED.value
        reservation.canceled_reason = "payment_expired"
        await db.commit()
        stats["expired_cancelled"] += 1

        logger.info("Reservation expired", reservation_id=str(reservation.id))

        body = cancellation_message(reservation)
        try:
            await provider.send_message(reservation.customer_phone, body)
            add_message(db, reservation.id, body)
            await db.commit()
        except Exception as e:
            logger.warning(
                "Cancellation notice failed",
                reservation_id=str(reservation.id),
                error=str(e),
            )
            stats["errors"].append(f"Error notifying {reservation.id}: {e}")

    return stats


async def send_event_reminders(
    db: AsyncSession,
    provider: WhatsAppProvider,
    now: Optional[datetime] = None,
) -> dict:
    """Remind confirmed customers a few days before their event"""
    today = (now or datetime.utcnow()).date()
    target = today + timedelta(days=REMINDER_DAYS_BEFORE)
    stats = {"reminders_sent": 0, "errors": []}

    result = await db.execute(
        select(Reservation).where(
            Reservation.status == ReservationStatus.CONFIRMED.value,
            Reservation.reservation_date == target,
        )
    )

    for reservation in result.scalars().all():
        body = reminder_message(reservation)
        try:
            await provider.send_message(reservation.customer_phone, body)
            add_message(db, reservation.id, body)
            await db.commit()
            stats["reminders_sent"] += 1
        except Exception as e:
            logger.warning(
                "Reminder failed",
                reservation_id=str(reservation.id),
                error=str(e),
            )
            stats["errors"].append(f"Error reminding {reservation.id}: {e}")

    return stats


async def run_all(db: AsyncSession, provider: WhatsAppProvider, now: Optional[datetime] = None) -> dict:
    """Run every maintenance job against the same UTC clock and merge their counters"""
    now = now or datetime.utcnow()
    expired = await expire_unpaid_reservations(db, provider, now=now)
    reminders = await send_event_reminders(db, provider, now=now)

    return {
        "expired_cancelled": expired["expired_cancelled"],
        "reminders_sent": reminders["reminders_sent"],
        "errors": expired["errors"] + reminders["errors"],
    }
