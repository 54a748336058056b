"""Meta WhatsApp Business Cloud API provider"""

from typing import Optional
import httpx
import structlog

from app.providers.base import WhatsAppProvider, ProviderError, clean_phone

logger = structlog.get_logger()


class DirectWhatsAppProvider(WhatsAppProvider):
    """Sends text messages straight to the Graph API"""

    name = "meta_whatsapp"

    def __init__(
        self,
        token: str,
        phone_number_id: str,
        base_url: str = "https://graph.facebook.com/v18.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 15.0,
    ):
        self.token = token
        self.phone_number_id = phone_number_id
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def send_message(self, phone: str, message: str) -> None:
        """Send a text message via the Cloud API"""
        if not self.token or not self.phone_number_id:
            raise ProviderError(self.name, "WhatsApp credentials are not configured")

        payload = {
            "messaging_product": "whatsapp",
            "to": clean_phone(phone),
            "type": "text",
            "text": {"body": message},
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                f"{self.base_url}/{self.phone_number_id}/messages",
                headers={"Authorization": f"Bearer {self.token}"},
                json=payload,
            )

        if response.is_error:
            logger.error(
                "WhatsApp API error",
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ProviderError(
                self.name,
                "Failed to send WhatsApp message",
                status_code=response.status_code,
            )

        logger.info("WhatsApp message sent", to=payload["to"])


async def probe_phone_number(
    token: str,
    phone_number_id: str,
    base_url: str = "https://graph.facebook.com/v18.0",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict:
    """
    Look up the phone number behind a set of credentials.
    Returns the connectivity report shown on the settings page.
    """
    async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
        response = await client.get(
            f"{base_url.rstrip('/')}/{phone_number_id}",
            headers={"Authorization": f"Bearer {token}"},
        )

    if response.is_error:
        try:
            error = response.json().get("error", {})
        except ValueError:
            error = {}
        return {
            "ok": False,
            "error": f"Meta API error: {error.get('message') or response.reason_phrase}",
            "code": error.get("code"),
        }

    info = response.json()
    return {
        "ok": True,
        "phone": info.get("display_phone_number") or info.get("verified_name") or phone_number_id,
        "name": info.get("verified_name"),
        "quality": info.get("quality_rating"),
    }
