"""Reservation management API endpoints"""

import asyncio
from typing import List, Optional
from uuid import UUID
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import structlog

from app.database import get_db, get_session_factory
from app.models.call import CallLog
from app.models.message import Message
from app.models.payment import Payment
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.reservation import (
    ReservationCreate,
    ReservationCreatedResponse,
    ReservationDetailResponse,
    ReservationResponse,
    ReservationUpdate,
)

router = APIRouter()
logger = structlog.get_logger()

# Every booking blocks a two hour slot
SLOT_MINUTES = 120


def compute_end_time(start_time: str, minutes: int = SLOT_MINUTES) -> str:
    """HH:MM end of a slot, wrapping past midnight"""
    hours, mins = (int(part) for part in start_time.split(":"))
    total = (hours * 60 + mins + minutes) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
    status: Optional[ReservationStatus] = None,
    from_date: Optional[date] = None,
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """List reservations, soonest first"""
    query = select(Reservation)

    if status:
        query = query.where(Reservation.status == status.value)

    if from_date:
        query = query.where(Reservation.reservation_date >= from_date)

    query = query.order_by(Reservation.reservation_date.asc(), Reservation.start_time.asc()).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=ReservationCreatedResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a reservation held until the deposit is paid"""
    reservation = Reservation(
        customer_name=reservation_data.customer_name,
        customer_phone=reservation_data.customer_phone,
        customer_email=reservation_data.customer_email,
        reservation_date=reservation_data.reservation_date,
        start_time=reservation_data.start_time,
        end_time=compute_end_time(reservation_data.start_time),
        party_size=reservation_data.party_size,
        event_type=reservation_data.event_type,
        menu_code=reservation_data.menu_code,
        total_amount=reservation_data.total_amount,
        deposit_amount=reservation_data.deposit_amount,
        notes=reservation_data.notes,
        status=ReservationStatus.HOLD_BLOCKED.value,
    )

    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)

    logger.info("Reservation created", reservation_id=str(reservation.id))

    return ReservationCreatedResponse(
        reservation_id=reservation.id,
        reservation_number=reservation.reservation_number,
    )


async def _fetch_children(session_factory: async_sessionmaker, model, reservation_id: UUID):
    async with session_factory() as session:
        result = await session.execute(
            select(model)
            .where(model.reservation_id == reservation_id)
            .order_by(model.created_at.asc())
        )
        return result.scalars().all()


@router.get("/{reservation_id}", response_model=ReservationDetailResponse)
async def get_reservation(
    reservation_id: UUID,
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    """Reservation with its messages, calls and payments"""
    result = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    # Independent lookups, each on its own session
    messages, call_logs, payments = await asyncio.gather(
        _fetch_children(session_factory, Message, reservation_id),
        _fetch_children(session_factory, CallLog, reservation_id),
        _fetch_children(session_factory, Payment, reservation_id),
    )

    detail = ReservationResponse.model_validate(reservation).model_dump()
    return ReservationDetailResponse(
        **detail,
        messages=messages,
        call_logs=call_logs,
        payments=payments,
    )


@router.patch("/{reservation_id}")
async def update_reservation(
    reservation_id: UUID,
    reservation_data: ReservationUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partially update a reservation"""
    changes = reservation_data.model_dump(mode="json", exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    result = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    for field, value in changes.items():
        setattr(reservation, field, value)

    await db.commit()

    logger.info("Reservation updated", reservation_id=str(reservation_id), fields=sorted(changes))

    return {"updated": True}
