"""Employee and shift schemas"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    name: str = Field(min_length=1)
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    pin: Optional[str] = None


class EmployeeUpdate(BaseModel):
    id: UUID
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    pin: Optional[str] = None
    active: Optional[bool] = None


class EmployeeResponse(BaseModel):
    id: UUID
    name: str
    role: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ShiftEmployee(BaseModel):
    name: str
    role: Optional[str]

    class Config:
        from_attributes = True


class ShiftUpsert(BaseModel):
    """Create or replace the shift of an employee on one day of a week"""
    employee_id: UUID
    week_start: date
    day_of_week: int = Field(ge=0, le=6)
    start_time: str = Field(min_length=1)
    end_time: str = Field(min_length=1)
    notes: Optional[str] = None


class ShiftResponse(BaseModel):
    id: UUID
    employee_id: UUID
    week_start: date
    day_of_week: int
    start_time: str
    end_time: str
    notes: Optional[str]
    employee: Optional[ShiftEmployee] = None

    class Config:
        from_attributes = True
