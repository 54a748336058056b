"""BAPI outbound call provider"""

from typing import Optional
import httpx
import structlog

from app.providers.base import CallProvider, ProviderError

logger = structlog.get_logger()


class DirectBAPIProvider(CallProvider):
    """Starts calls through the BAPI REST API"""

    name = "bapi"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        caller: str = "restaurant",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.caller = caller
        self.transport = transport
        self.timeout = timeout

    async def make_call(self, phone: str) -> None:
        """Request an outbound call to the given phone"""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                f"{self.base_url}/calls",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"to": phone, "from": self.caller},
            )

        if response.is_error:
            logger.error(
                "BAPI call request failed",
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ProviderError(self.name, "Failed to start call", status_code=response.status_code)

        logger.info("BAPI call requested", to=phone)
