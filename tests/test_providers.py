"""Tests for the direct and relay provider implementations"""

import json

import httpx
import pytest

from app.config import Settings
from app.providers import ProviderError, build_call_provider, build_whatsapp_provider, clean_phone
from app.providers.calls import DirectBAPIProvider
from app.providers.relay import RelayCallProvider, RelayClient, RelayWhatsAppProvider
from app.providers.whatsapp import DirectWhatsAppProvider, probe_phone_number


def recording_transport(status_code=200, body=None):
    """MockTransport that keeps every request it receives"""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {})

    return httpx.MockTransport(handler), requests


def test_clean_phone():
    assert clean_phone("+34 611-222 (333)") == "+34611222333"
    assert clean_phone("") == ""


def test_relay_selected_when_webhook_configured():
    settings = Settings(_env_file=None, make_webhook_url="https://hook.example.com/abc")

    assert isinstance(build_whatsapp_provider(settings), RelayWhatsAppProvider)
    assert isinstance(build_call_provider(settings), RelayCallProvider)


def test_direct_selected_without_webhook():
    settings = Settings(_env_file=None, make_webhook_url="")

    assert isinstance(build_whatsapp_provider(settings), DirectWhatsAppProvider)
    assert isinstance(build_call_provider(settings), DirectBAPIProvider)


@pytest.mark.asyncio
async def test_direct_whatsapp_posts_to_graph_api():
    transport, requests = recording_transport(body={"messages": [{"id": "wamid.1"}]})
    provider = DirectWhatsAppProvider(
        token="token-123",
        phone_number_id="555",
        base_url="https://graph.test/v18.0",
        transport=transport,
    )

    await provider.send_message("+34 611 222 333", "Hola")

    assert len(requests) == 1
    request = requests[0]
    assert str(request.url) == "https://graph.test/v18.0/555/messages"
    assert request.headers["Authorization"] == "Bearer token-123"
    payload = json.loads(request.content)
    assert payload["to"] == "+34611222333"
    assert payload["text"] == {"body": "Hola"}


@pytest.mark.asyncio
async def test_direct_whatsapp_error_status_raises():
    transport, _ = recording_transport(status_code=400, body={"error": {"message": "bad"}})
    provider = DirectWhatsAppProvider(token="t", phone_number_id="555", transport=transport)

    with pytest.raises(ProviderError) as exc_info:
        await provider.send_message("+34611222333", "Hola")

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_direct_whatsapp_without_credentials_raises():
    transport, requests = recording_transport()
    provider = DirectWhatsAppProvider(token="", phone_number_id="", transport=transport)

    with pytest.raises(ProviderError):
        await provider.send_message("+34611222333", "Hola")

    assert requests == []


@pytest.mark.asyncio
async def test_direct_bapi_call():
    transport, requests = recording_transport(body={"id": "call_1"})
    provider = DirectBAPIProvider(base_url="https://bapi.test/", api_key="key", transport=transport)

    await provider.make_call("+34611222333")

    assert str(requests[0].url) == "https://bapi.test/calls"
    assert json.loads(requests[0].content) == {"to": "+34611222333", "from": "restaurant"}


@pytest.mark.asyncio
async def test_direct_bapi_error_raises():
    transport, _ = recording_transport(status_code=503)
    provider = DirectBAPIProvider(base_url="https://bapi.test", api_key="key", transport=transport)

    with pytest.raises(ProviderError):
        await provider.make_call("+34611222333")


@pytest.mark.asyncio
async def test_relay_envelopes():
    transport, requests = recording_transport()
    relay = RelayClient("https://hook.test/abc", transport=transport)

    await RelayWhatsAppProvider(relay).send_message("+34611222333", "Hola")
    await RelayCallProvider(relay).make_call("+34611222333")

    assert [json.loads(r.content) for r in requests] == [
        {"action": "send_whatsapp", "phone": "+34611222333", "message": "Hola"},
        {"action": "make_call", "phone": "+34611222333"},
    ]


@pytest.mark.asyncio
async def test_relay_ignores_error_status():
    """The relay response carries no delivery outcome"""
    transport, requests = recording_transport(status_code=500)
    relay = RelayClient("https://hook.test/abc", transport=transport)

    await RelayWhatsAppProvider(relay).send_message("+34611222333", "Hola")

    assert len(requests) == 1


@pytest.mark.asyncio
async def test_relay_transport_failure_propagates():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    relay = RelayClient("https://hook.test/abc", transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.ConnectError):
        await RelayCallProvider(relay).make_call("+34611222333")


@pytest.mark.asyncio
async def test_probe_phone_number_ok():
    transport, _ = recording_transport(body={
        "display_phone_number": "+34 930 000 000",
        "verified_name": "Canal Olimpico",
        "quality_rating": "GREEN",
    })

    report = await probe_phone_number("t", "555", transport=transport)

    assert report == {
        "ok": True,
        "phone": "+34 930 000 000",
        "name": "Canal Olimpico",
        "quality": "GREEN",
    }


@pytest.mark.asyncio
async def test_probe_phone_number_error():
    transport, _ = recording_transport(status_code=401, body={"error": {"message": "Invalid token", "code": 190}})

    report = await probe_phone_number("t", "555", transport=transport)

    assert report["ok"] is False
    assert report["error"] == "Meta API error: Invalid token"
    assert report["code"] == 190
