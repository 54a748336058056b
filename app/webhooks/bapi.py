"""BAPI call status webhook"""

import json
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.api.auth import require_bapi_webhook_secret
from app.database import get_db
from app.models.call import CallLog

router = APIRouter(dependencies=[Depends(require_bapi_webhook_secret)])
logger = structlog.get_logger()

# Width of call_logs.status
STATUS_MAX_LENGTH = 50


def parse_call_id(value) -> UUID:
    if not isinstance(value, str):
        raise ValueError("call_id must be a string")
    return UUID(value)


def as_text(value) -> str:
    """Flatten a callback field into something a text column accepts"""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@router.post("")
async def handle_call_update(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Store the status and transcript BAPI reports for a call.
    Deliveries for unknown calls are acknowledged and dropped.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON")

    if not isinstance(payload, dict):
        logger.warning("BAPI webhook without an object body")
        return {"received": True}

    try:
        call_id = parse_call_id(payload.get("call_id"))
    except ValueError:
        logger.warning("BAPI webhook without a valid call_id", call_id=payload.get("call_id"))
        return {"received": True}

    result = await db.execute(select(CallLog).where(CallLog.id == call_id))
    call_log = result.scalar_one_or_none()

    if not call_log:
        logger.warning("BAPI webhook for unknown call", call_id=str(call_id))
        return {"received": True}

    status = payload.get("status")
    call_log.status = as_text(status)[:STATUS_MAX_LENGTH] if status else "updated"
    if payload.get("transcript") is not None:
        call_log.transcript = as_text(payload["transcript"])
    if payload.get("summary") is not None:
        call_log.summary = as_text(payload["summary"])
    call_log.raw_payload = payload

    await db.commit()

    logger.info("Call updated from webhook", call_id=str(call_id), status=call_log.status)

    return {"received": True}
