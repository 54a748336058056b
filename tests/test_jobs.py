"""Tests for the reservation maintenance jobs"""

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import select

from app.models.message import Message
from app.models.reservation import Reservation, ReservationStatus
from app.providers import ProviderError
from app.services.reservation_jobs import (
    REMINDER_DAYS_BEFORE,
    expire_unpaid_reservations,
    run_all,
    send_event_reminders,
)


def make_reservation(**overrides) -> Reservation:
    values = dict(
        customer_name="Marta Soler",
        customer_phone="+34611222333",
        reservation_date=date.today() + timedelta(days=20),
        start_time="14:00",
        party_size=10,
        status=ReservationStatus.HOLD_BLOCKED.value,
    )
    values.update(overrides)
    return Reservation(**values)


@pytest.mark.asyncio
async def test_expire_unpaid_reservations(test_db, whatsapp_provider):
    stale = make_reservation(created_at=datetime.utcnow() - timedelta(days=5))
    fresh = make_reservation(created_at=datetime.utcnow() - timedelta(days=1))
    paid = make_reservation(
        status=ReservationStatus.CONFIRMED.value,
        created_at=datetime.utcnow() - timedelta(days=10),
    )
    test_db.add_all([stale, fresh, paid])
    await test_db.commit()

    stats = await expire_unpaid_reservations(test_db, whatsapp_provider)

    assert stats == {"expired_cancelled": 1, "errors": []}
    await test_db.refresh(stale)
    await test_db.refresh(fresh)
    assert stale.status == "canceled"
    assert stale.canceled_reason == "payment_expired"
    assert fresh.status == "hold_blocked"

    assert len(whatsapp_provider.sent) == 1
    assert "cancelada" in whatsapp_provider.sent[0][1]

    result = await test_db.execute(select(Message))
    assert result.scalar_one().reservation_id == stale.id


@pytest.mark.asyncio
async def test_expire_collects_notification_errors(test_db, whatsapp_provider):
    stale = make_reservation(created_at=datetime.utcnow() - timedelta(days=5))
    test_db.add(stale)
    await test_db.commit()
    whatsapp_provider.error = ProviderError("meta_whatsapp", "down")

    stats = await expire_unpaid_reservations(test_db, whatsapp_provider)

    assert stats["expired_cancelled"] == 1
    assert len(stats["errors"]) == 1
    await test_db.refresh(stale)
    assert stale.status == "canceled"


@pytest.mark.asyncio
async def test_send_event_reminders(test_db, whatsapp_provider):
    now = datetime(2026, 5, 1, 23, 30)
    today = now.date()
    due = make_reservation(
        status=ReservationStatus.CONFIRMED.value,
        reservation_date=today + timedelta(days=REMINDER_DAYS_BEFORE),
    )
    later = make_reservation(
        status=ReservationStatus.CONFIRMED.value,
        reservation_date=today + timedelta(days=REMINDER_DAYS_BEFORE + 1),
    )
    held = make_reservation(reservation_date=today + timedelta(days=REMINDER_DAYS_BEFORE))
    test_db.add_all([due, later, held])
    await test_db.commit()

    stats = await send_event_reminders(test_db, whatsapp_provider, now=now)

    assert stats == {"reminders_sent": 1, "errors": []}
    assert whatsapp_provider.sent[0][0] == "+34611222333"
    assert "Recordatorio" in whatsapp_provider.sent[0][1]


@pytest.mark.asyncio
async def test_run_all_merges_results(test_db, whatsapp_provider):
    test_db.add(make_reservation(created_at=datetime.utcnow() - timedelta(days=6)))
    await test_db.commit()

    results = await run_all(test_db, whatsapp_provider)

    assert results == {"expired_cancelled": 1, "reminders_sent": 0, "errors": []}


@pytest.mark.asyncio
async def test_jobs_share_one_clock(test_db, whatsapp_provider):
    now = datetime(2026, 5, 1, 23, 30)
    stale = make_reservation(created_at=now - timedelta(days=5))
    due = make_reservation(
        status=ReservationStatus.CONFIRMED.value,
        reservation_date=date(2026, 5, 1) + timedelta(days=REMINDER_DAYS_BEFORE),
        created_at=now - timedelta(days=30),
    )
    test_db.add_all([stale, due])
    await test_db.commit()

    results = await run_all(test_db, whatsapp_provider, now=now)

    assert results == {"expired_cancelled": 1, "reminders_sent": 1, "errors": []}


@pytest.mark.asyncio
async def test_reminders_default_to_utc_date(test_db, whatsapp_provider):
    due = make_reservation(
        status=ReservationStatus.CONFIRMED.value,
        reservation_date=datetime.utcnow().date() + timedelta(days=REMINDER_DAYS_BEFORE),
    )
    test_db.add(due)
    await test_db.commit()

    stats = await send_event_reminders(test_db, whatsapp_provider)

    assert stats["reminders_sent"] == 1
