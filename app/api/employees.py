"""Staff management endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.models.staff import Employee
from app.schemas.staff import EmployeeCreate, EmployeeResponse, EmployeeUpdate

router = APIRouter()
logger = structlog.get_logger()

DEFAULT_ROLE = "camarero"


def clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(db: AsyncSession = Depends(get_db)):
    """All employees by name"""
    result = await db.execute(select(Employee).order_by(Employee.name.asc()))
    return result.scalars().all()


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    employee_data: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add an employee"""
    name = employee_data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="name is required")

    employee = Employee(
        name=name,
        role=clean_optional(employee_data.role) or DEFAULT_ROLE,
        phone=clean_optional(employee_data.phone),
        email=clean_optional(employee_data.email),
        pin=clean_optional(employee_data.pin),
        active=True,
    )

    db.add(employee)
    await db.commit()
    await db.refresh(employee)

    logger.info("Employee created", employee_id=str(employee.id))

    return employee


@router.patch("", response_model=EmployeeResponse)
async def update_employee(
    employee_data: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update the fields present in the body"""
    result = await db.execute(select(Employee).where(Employee.id == employee_data.id))
    employee = result.scalar_one_or_none()

    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    changes = employee_data.model_dump(exclude_unset=True, exclude={"id"})

    for field, value in changes.items():
        if isinstance(value, str):
            value = value.strip()
            if field in ("name", "role") and not value:
                continue
            value = value or None
        setattr(employee, field, value)

    await db.commit()
    await db.refresh(employee)

    logger.info("Employee updated", employee_id=str(employee.id), fields=sorted(changes))

    return employee


@router.delete("")
async def delete_employee(
    id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
):
    """Remove an employee together with their shifts"""
    if id is None:
        raise HTTPException(status_code=400, detail="id is required")

    result = await db.execute(select(Employee).where(Employee.id == id))
    employee = result.scalar_one_or_none()

    if employee:
        # ORM delete so the shift cascade applies
        await db.delete(employee)
        await db.commit()
        logger.info("Employee deleted", employee_id=str(id))

    return {"ok": True}
