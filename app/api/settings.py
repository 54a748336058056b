"""Runtime settings store endpoints"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import Settings, get_settings
from app.database import get_db
from app.models.setting import Setting
from app.providers.whatsapp import probe_phone_number
from app.schemas.setting import SettingsResponse, SettingsUpdate, WhatsAppTestResponse

router = APIRouter()
logger = structlog.get_logger()


def stored_value(value) -> str:
    """Values are kept as text; booleans in lowercase like JSON"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


async def load_settings(db: AsyncSession, keys: Optional[list] = None) -> dict:
    query = select(Setting)
    if keys:
        query = query.where(Setting.key.in_(keys))
    result = await db.execute(query.order_by(Setting.key))
    return {row.key: row.value for row in result.scalars().all()}


@router.get("", response_model=SettingsResponse)
async def get_settings_values(
    keys: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Read stored settings, optionally only the comma separated keys"""
    wanted = [key.strip() for key in keys.split(",") if key.strip()] if keys else None
    return SettingsResponse(settings=await load_settings(db, wanted))


@router.put("")
async def update_settings(
    request: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Upsert settings by key"""
    now = datetime.utcnow()

    result = await db.execute(select(Setting).where(Setting.key.in_(list(request.settings))))
    existing = {row.key: row for row in result.scalars().all()}

    for key, value in request.settings.items():
        row = existing.get(key)
        if row is None:
            db.add(Setting(key=key, value=stored_value(value), updated_at=now))
        else:
            row.value = stored_value(value)
            row.updated_at = now

    await db.commit()

    logger.info("Settings updated", keys=sorted(request.settings))

    return {"ok": True}


@router.post("/whatsapp-test", response_model=WhatsAppTestResponse, response_model_exclude_none=True)
async def test_whatsapp_credentials(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Probe Meta with the stored WhatsApp credentials"""
    stored = await load_settings(db, ["WHATSAPP_PHONE_NUMBER_ID", "WHATSAPP_TOKEN"])
    phone_number_id = stored.get("WHATSAPP_PHONE_NUMBER_ID") or settings.whatsapp_phone_number_id
    token = stored.get("WHATSAPP_TOKEN") or settings.whatsapp_token

    if not phone_number_id or not token:
        return WhatsAppTestResponse(ok=False, error="WhatsApp credentials are not configured")

    try:
        report = await probe_phone_number(token, phone_number_id, base_url=settings.whatsapp_api_base_url)
    except httpx.HTTPError:
        logger.exception("WhatsApp credential probe failed")
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info("WhatsApp credential probe", ok=report["ok"])

    return WhatsAppTestResponse(**report)
