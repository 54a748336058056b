"""Outbound messaging and calling provider interfaces"""

from abc import ABC, abstractmethod
import re


class ProviderError(Exception):
    """Raised when a provider reports that an outbound action failed"""

    def __init__(self, provider: str, message: str, status_code: int = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


def clean_phone(phone: str) -> str:
    """Strip spaces, dashes and parentheses, keeping a leading +"""
    return re.sub(r"[\s\-()]", "", phone or "")


class WhatsAppProvider(ABC):
    """Sends WhatsApp text messages"""

    name = "whatsapp"

    @abstractmethod
    async def send_message(self, phone: str, message: str) -> None:
        """Send a text message, raising ProviderError on failure"""
        pass


class CallProvider(ABC):
    """Places outbound voice calls"""

    name = "call"

    @abstractmethod
    async def make_call(self, phone: str) -> None:
        """Start a call, raising ProviderError on failure"""
        pass
