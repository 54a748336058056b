"""Settings store schemas"""

from typing import Dict, Optional, Union
from pydantic import BaseModel


class SettingsResponse(BaseModel):
    ok: bool = True
    settings: Dict[str, str]


class SettingsUpdate(BaseModel):
    """Values are stored as strings"""
    settings: Dict[str, Union[str, int, float, bool]]


class WhatsAppTestResponse(BaseModel):
    """Result of probing the stored WhatsApp credentials"""
    ok: bool
    phone: Optional[str] = None
    name: Optional[str] = None
    quality: Optional[str] = None
    error: Optional[str] = None
    code: Optional[int] = None
