"""Tests for outbound call and WhatsApp actions"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from uuid import uuid4

from app.models.call import CallLog
from app.models.message import Message
from app.providers import ProviderError


async def count_rows(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_call_logs_one_row(client: AsyncClient, test_db, test_reservation, call_provider):
    """A successful call is recorded exactly once"""
    response = await client.post(
        "/actions/call",
        json={"reservation_id": str(test_reservation.id), "phone": "+34611222333"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["called"] is True
    assert call_provider.calls == ["+34611222333"]

    result = await test_db.execute(select(CallLog))
    logs = result.scalars().all()
    assert len(logs) == 1
    assert str(logs[0].id) == data["call_id"]
    assert logs[0].status == "initiated"
    assert logs[0].summary == "BAPI call initiated"


@pytest.mark.asyncio
async def test_call_failure_logs_nothing(client: AsyncClient, test_db, test_reservation, call_provider):
    """A failed call returns 500 and leaves no log row"""
    call_provider.error = ProviderError("bapi", "Failed to start call", status_code=502)

    response = await client.post(
        "/actions/call",
        json={"reservation_id": str(test_reservation.id), "phone": "+34611222333"},
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    assert await count_rows(test_db, CallLog) == 0


@pytest.mark.asyncio
async def test_call_missing_phone(client: AsyncClient, test_reservation, call_provider):
    response = await client.post("/actions/call", json={"reservation_id": str(test_reservation.id)})

    assert response.status_code == 400
    assert call_provider.calls == []


@pytest.mark.asyncio
async def test_whatsapp_send_to_reservation(client: AsyncClient, test_db, test_reservation, whatsapp_provider):
    """The reservation phone is used when no recipient is given"""
    response = await client.post(
        "/actions/whatsapp/send",
        json={"reservation_id": str(test_reservation.id), "message": "Hola Marta"},
    )

    assert response.status_code == 200
    assert response.json() == {"sent": True}
    assert whatsapp_provider.sent == [("+34611222333", "Hola Marta")]

    result = await test_db.execute(select(Message))
    messages = result.scalars().all()
    assert len(messages) == 1
    assert messages[0].direction == "outbound"
    assert messages[0].body == "Hola Marta"
    assert messages[0].reservation_id == test_reservation.id


@pytest.mark.asyncio
async def test_whatsapp_send_to_phone_only(client: AsyncClient, test_db, whatsapp_provider):
    """Without a reservation the message is sent but not logged"""
    response = await client.post(
        "/actions/whatsapp/send",
        json={"to": "+34600000000", "message": "Hola"},
    )

    assert response.status_code == 200
    assert whatsapp_provider.sent == [("+34600000000", "Hola")]
    assert await count_rows(test_db, Message) == 0


@pytest.mark.asyncio
async def test_whatsapp_send_requires_recipient(client: AsyncClient, whatsapp_provider):
    response = await client.post("/actions/whatsapp/send", json={"message": "Hola"})

    assert response.status_code == 400
    assert whatsapp_provider.sent == []


@pytest.mark.asyncio
async def test_whatsapp_send_unknown_reservation(client: AsyncClient, whatsapp_provider):
    response = await client.post(
        "/actions/whatsapp/send",
        json={"reservation_id": str(uuid4()), "message": "Hola"},
    )

    assert response.status_code == 404
    assert whatsapp_provider.sent == []


@pytest.mark.asyncio
async def test_whatsapp_send_explicit_phone_unknown_reservation(client: AsyncClient, test_db, whatsapp_provider):
    response = await client.post(
        "/actions/whatsapp/send",
        json={"to": "+34600111222", "reservation_id": str(uuid4()), "message": "Hola"},
    )

    assert response.status_code == 404
    assert whatsapp_provider.sent == []
    assert await count_rows(test_db, Message) == 0


@pytest.mark.asyncio
async def test_whatsapp_send_failure_logs_nothing(client: AsyncClient, test_db, test_reservation, whatsapp_provider):
    whatsapp_provider.error = ProviderError("meta_whatsapp", "Failed to send WhatsApp message", status_code=400)

    response = await client.post(
        "/actions/whatsapp/send",
        json={"reservation_id": str(test_reservation.id), "message": "Hola"},
    )

    assert response.status_code == 500
    assert await count_rows(test_db, Message) == 0
