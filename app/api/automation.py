"""Endpoints called by the automation scenario (Make) and cron"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.api.auth import require_automation_key
from app.database import get_db
from app.providers import WhatsAppProvider, get_whatsapp_provider
from app.schemas.actions import AutomationWhatsAppRequest, AutomationWhatsAppResponse
from app.services.conversations import add_message, find_latest_reservation
from app.services.reservation_jobs import run_all

router = APIRouter(dependencies=[Depends(require_automation_key)])
logger = structlog.get_logger()


@router.post("/make/send-whatsapp", response_model=AutomationWhatsAppResponse)
async def automation_send_whatsapp(
    request: AutomationWhatsAppRequest,
    db: AsyncSession = Depends(get_db),
    provider: WhatsAppProvider = Depends(get_whatsapp_provider),
):
    """Send a WhatsApp message when only the customer phone is known"""
    phone = request.telefono.strip()
    body = request.mensaje.strip()

    if not phone:
        raise HTTPException(status_code=400, detail="telefono is required")
    if not body:
        raise HTTPException(status_code=400, detail="mensaje is required")

    try:
        await provider.send_message(phone, body)

        reservation = await find_latest_reservation(db, phone, active_only=True)
        if reservation:
            add_message(db, reservation.id, body)
            await db.commit()
    except Exception:
        logger.exception("Automation WhatsApp send failed", phone=phone)
        raise HTTPException(status_code=500, detail="Internal server error")

    return AutomationWhatsAppResponse(
        ok=True,
        message="Message sent",
        reservation_id=reservation.id if reservation else None,
    )


@router.post("/jobs/run")
async def run_jobs(
    db: AsyncSession = Depends(get_db),
    provider: WhatsAppProvider = Depends(get_whatsapp_provider),
):
    """Run the reservation maintenance jobs on demand"""
    results = await run_all(db, provider)
    logger.info(
        "Jobs run",
        expired_cancelled=results["expired_cancelled"],
        reminders_sent=results["reminders_sent"],
        errors=len(results["errors"]),
    )

    return {
        "ok": True,
        **results,
        "timestamp": datetime.utcnow().isoformat(),
    }
