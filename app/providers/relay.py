"""Providers that delegate to the automation relay webhook"""

from typing import Optional
import httpx
import structlog

from app.providers.base import WhatsAppProvider, CallProvider

logger = structlog.get_logger()


class RelayClient:
    """Posts tagged action envelopes to the relay webhook.

    The relay runs the action asynchronously, so its response carries no
    delivery outcome and is not inspected.
    """

    def __init__(
        self,
        webhook_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 15.0,
    ):
        self.webhook_url = webhook_url
        self.transport = transport
        self.timeout = timeout

    async def post(self, envelope: dict) -> None:
        logger.debug("Relay request", action=envelope.get("action"))

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.webhook_url, json=envelope)

        logger.info(
            "Relay accepted action",
            action=envelope.get("action"),
            status_code=response.status_code,
        )


class RelayWhatsAppProvider(WhatsAppProvider):
    """WhatsApp delivery through the relay scenario"""

    name = "relay_whatsapp"

    def __init__(self, relay: RelayClient):
        self.relay = relay

    async def send_message(self, phone: str, message: str) -> None:
        await self.relay.post({"action": "send_whatsapp", "phone": phone, "message": message})


class RelayCallProvider(CallProvider):
    """Outbound calls through the relay scenario"""

    name = "relay_call"

    def __init__(self, relay: RelayClient):
        self.relay = relay

    async def make_call(self, phone: str) -> None:
        await self.relay.post({"action": "make_call", "phone": phone})
