"""Background job tasks"""

import asyncio
import structlog

from app.jobs.celery_app import celery_app

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


async def _run_job(job) -> dict:
    from app.database import SessionLocal, engine
    from app.providers import get_whatsapp_provider

    try:
        async with SessionLocal() as db:
            return await job(db, get_whatsapp_provider())
    finally:
        # Pooled connections belong to this event loop
        await engine.dispose()


@celery_app.task(name="expire_unpaid_reservations")
def expire_unpaid_reservations():
    """Cancel held reservations whose deposit never arrived"""
    from app.services import reservation_jobs

    logger.info("Expiring unpaid reservations")
    result = run_async(_run_job(reservation_jobs.expire_unpaid_reservations))
    logger.info("Unpaid reservations expired", **result)
    return result


@celery_app.task(name="send_event_reminders")
def send_event_reminders():
    """Remind customers of upcoming confirmed events"""
    from app.services import reservation_jobs

    logger.info("Sending event reminders")
    result = run_async(_run_job(reservation_jobs.send_event_reminders))
    logger.info("Event reminders sent", **result)
    return result
