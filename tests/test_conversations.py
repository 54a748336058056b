"""Tests for conversation endpoints"""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.models.message import Message
from app.models.reservation import Reservation
from app.providers import ProviderError


@pytest.fixture
async def conversation(test_db, test_reservation):
    start = datetime(2026, 3, 1, 10, 0)
    test_db.add_all([
        Message(reservation_id=test_reservation.id, direction="inbound", body="Hola", created_at=start),
        Message(reservation_id=test_reservation.id, direction="outbound", body="Buenos días", created_at=start + timedelta(minutes=2)),
        Message(reservation_id=test_reservation.id, direction="inbound", body="¿Hay menú infantil?", created_at=start + timedelta(minutes=5)),
    ])
    await test_db.commit()


@pytest.mark.asyncio
async def test_get_messages_by_phone(client: AsyncClient, conversation):
    response = await client.get("/conversations/messages", params={"phone": "+34611222333"})

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert [m["body"] for m in data["messages"]] == ["Hola", "Buenos días", "¿Hay menú infantil?"]


@pytest.mark.asyncio
async def test_get_messages_requires_phone(client: AsyncClient):
    response = await client.get("/conversations/messages")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_conversations(client: AsyncClient, conversation):
    response = await client.get("/conversations")

    assert response.status_code == 200
    conversations = response.json()["conversations"]
    assert len(conversations) == 1
    assert conversations[0]["phone"] == "+34611222333"
    assert conversations[0]["name"] == "Marta Soler"
    assert conversations[0]["last_message"] == "¿Hay menú infantil?"
    assert conversations[0]["last_direction"] == "inbound"
    assert conversations[0]["total_messages"] == 3


@pytest.mark.asyncio
async def test_send_message_attaches_to_latest_reservation(client: AsyncClient, test_db, test_reservation, whatsapp_provider):
    newer = Reservation(
        customer_name="Marta Soler",
        customer_phone="+34611222333",
        reservation_date=test_reservation.reservation_date,
        start_time="21:00",
        party_size=4,
        created_at=datetime.utcnow() + timedelta(minutes=1),
    )
    test_db.add(newer)
    await test_db.commit()

    response = await client.post("/conversations/messages", json={"phone": "+34611222333", "message": "Recibido"})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert whatsapp_provider.sent == [("+34611222333", "Recibido")]

    result = await test_db.execute(select(Message))
    message = result.scalar_one()
    assert message.reservation_id == newer.id
    assert message.direction == "outbound"


@pytest.mark.asyncio
async def test_send_message_failure(client: AsyncClient, test_db, test_reservation, whatsapp_provider):
    whatsapp_provider.error = ProviderError("meta_whatsapp", "down")

    response = await client.post("/conversations/messages", json={"phone": "+34611222333", "message": "Hola"})

    assert response.status_code == 500
    result = await test_db.execute(select(Message))
    assert result.scalars().all() == []
