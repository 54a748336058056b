"""Outbound provider selection.

The relay webhook setting decides, once per process, whether WhatsApp
messages and calls go straight to Meta/BAPI or through the automation relay.
"""

from functools import lru_cache

import structlog

from app.config import Settings, get_settings
from app.providers.base import CallProvider, ProviderError, WhatsAppProvider, clean_phone
from app.providers.calls import DirectBAPIProvider
from app.providers.relay import RelayCallProvider, RelayClient, RelayWhatsAppProvider
from app.providers.whatsapp import DirectWhatsAppProvider

logger = structlog.get_logger()


def build_whatsapp_provider(settings: Settings) -> WhatsAppProvider:
    if settings.relay_enabled:
        return RelayWhatsAppProvider(RelayClient(settings.make_webhook_url))
    return DirectWhatsAppProvider(
        token=settings.whatsapp_token,
        phone_number_id=settings.whatsapp_phone_number_id,
        base_url=settings.whatsapp_api_base_url,
    )


def build_call_provider(settings: Settings) -> CallProvider:
    if settings.relay_enabled:
        return RelayCallProvider(RelayClient(settings.make_webhook_url))
    return DirectBAPIProvider(base_url=settings.bapi_base_url, api_key=settings.bapi_api_key)


@lru_cache()
def get_whatsapp_provider() -> WhatsAppProvider:
    """Process-wide WhatsApp provider"""
    provider = build_whatsapp_provider(get_settings())
    logger.info("WhatsApp provider selected", provider=provider.name)
    return provider


@lru_cache()
def get_call_provider() -> CallProvider:
    """Process-wide call provider"""
    provider = build_call_provider(get_settings())
    logger.info("Call provider selected", provider=provider.name)
    return provider


__all__ = [
    "CallProvider",
    "WhatsAppProvider",
    "ProviderError",
    "clean_phone",
    "build_whatsapp_provider",
    "build_call_provider",
    "get_whatsapp_provider",
    "get_call_provider",
]
