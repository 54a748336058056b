"""Weekly shift schedule endpoints"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from app.database import get_db
from app.models.staff import Employee, Shift
from app.schemas.staff import ShiftResponse, ShiftUpsert

router = APIRouter()
logger = structlog.get_logger()


async def get_shift_with_employee(db: AsyncSession, shift_id: UUID) -> Shift:
    result = await db.execute(
        select(Shift)
        .options(selectinload(Shift.employee))
        .where(Shift.id == shift_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.get("", response_model=List[ShiftResponse])
async def list_shifts(
    week: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
):
    """Shifts ordered by day and start time, optionally for one week"""
    query = select(Shift).options(selectinload(Shift.employee))

    if week:
        query = query.where(Shift.week_start == week)

    query = query.order_by(Shift.day_of_week.asc(), Shift.start_time.asc())

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=ShiftResponse, status_code=201)
async def upsert_shift(
    shift_data: ShiftUpsert,
    db: AsyncSession = Depends(get_db),
):
    """Create the shift or replace the one the employee already has that day"""
    result = await db.execute(select(Employee.id).where(Employee.id == shift_data.employee_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Employee not found")

    result = await db.execute(
        select(Shift).where(
            Shift.employee_id == shift_data.employee_id,
            Shift.week_start == shift_data.week_start,
            Shift.day_of_week == shift_data.day_of_week,
        )
    )
    shift = result.scalar_one_or_none()

    if shift is None:
        shift = Shift(**shift_data.model_dump())
        db.add(shift)
    else:
        shift.start_time = shift_data.start_time
        shift.end_time = shift_data.end_time
        shift.notes = shift_data.notes

    await db.commit()

    logger.info(
        "Shift saved",
        shift_id=str(shift.id),
        employee_id=str(shift_data.employee_id),
        day_of_week=shift_data.day_of_week,
    )

    return await get_shift_with_employee(db, shift.id)


@router.delete("")
async def delete_shift(
    id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
):
    """Remove a shift"""
    if id is None:
        raise HTTPException(status_code=400, detail="id is required")

    await db.execute(delete(Shift).where(Shift.id == id))
    await db.commit()

    logger.info("Shift deleted", shift_id=str(id))

    return {"ok": True}
