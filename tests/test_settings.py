"""Tests for the settings store"""

import httpx
import pytest
from httpx import AsyncClient

from app.api import settings as settings_api
from app.models.setting import Setting


@pytest.mark.asyncio
async def test_settings_round_trip(client: AsyncClient):
    """Values written with PUT come back unchanged"""
    response = await client.put(
        "/settings",
        json={"settings": {"WHATSAPP_TOKEN": "EAAB-123", "RESTAURANT_NAME": "Canal Olímpico"}},
    )
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    response = await client.get("/settings")

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "settings": {"RESTAURANT_NAME": "Canal Olímpico", "WHATSAPP_TOKEN": "EAAB-123"},
    }


@pytest.mark.asyncio
async def test_settings_upsert_overwrites(client: AsyncClient):
    await client.put("/settings", json={"settings": {"DEPOSIT_PERCENT": 40}})
    await client.put("/settings", json={"settings": {"DEPOSIT_PERCENT": 50, "REMINDERS": True}})

    response = await client.get("/settings", params={"keys": "DEPOSIT_PERCENT,REMINDERS"})

    assert response.json()["settings"] == {"DEPOSIT_PERCENT": "50", "REMINDERS": "true"}


@pytest.mark.asyncio
async def test_settings_filter_by_keys(client: AsyncClient):
    await client.put("/settings", json={"settings": {"A": "1", "B": "2", "C": "3"}})

    response = await client.get("/settings", params={"keys": "A, C"})

    assert response.json()["settings"] == {"A": "1", "C": "3"}


@pytest.mark.asyncio
async def test_settings_rejects_non_object(client: AsyncClient):
    response = await client.put("/settings", json={"settings": ["A", "B"]})
    assert response.status_code == 400

    response = await client.put("/settings", json=["A"])
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_whatsapp_test_without_credentials(client: AsyncClient):
    response = await client.post("/settings/whatsapp-test")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is False
    assert "not configured" in data["error"]


@pytest.mark.asyncio
async def test_whatsapp_test_uses_stored_credentials(client: AsyncClient, test_db, monkeypatch):
    test_db.add_all([
        Setting(key="WHATSAPP_PHONE_NUMBER_ID", value="555"),
        Setting(key="WHATSAPP_TOKEN", value="stored-token"),
    ])
    await test_db.commit()

    seen = {}

    async def fake_probe(token, phone_number_id, base_url=None, transport=None):
        seen.update(token=token, phone_number_id=phone_number_id)
        return {"ok": True, "phone": "+34 930 000 000", "name": "Canal Olimpico", "quality": "GREEN"}

    monkeypatch.setattr(settings_api, "probe_phone_number", fake_probe)

    response = await client.post("/settings/whatsapp-test")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "phone": "+34 930 000 000", "name": "Canal Olimpico", "quality": "GREEN"}
    assert seen == {"token": "stored-token", "phone_number_id": "555"}


@pytest.mark.asyncio
async def test_whatsapp_test_transport_failure(client: AsyncClient, test_settings, monkeypatch):
    test_settings.whatsapp_token = "t"
    test_settings.whatsapp_phone_number_id = "555"

    async def failing_probe(*args, **kwargs):
        raise httpx.ConnectError("unreachable")

    monkeypatch.setattr(settings_api, "probe_phone_number", failing_probe)

    response = await client.post("/settings/whatsapp-test")

    assert response.status_code == 500
