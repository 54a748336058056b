"""Menu catalog and dish selection schemas"""

from datetime import date
from typing import Optional, List, Dict
from uuid import UUID
from pydantic import BaseModel, Field


class MenuCatalogResponse(BaseModel):
    id: UUID
    code: str
    name: str
    price: float
    description: Optional[str]
    drinks: Optional[str]
    event_types: List[str] = []
    choices: Dict[str, List[Dict[str, str]]] = {}

    class Config:
        from_attributes = True


class GuestSelection(BaseModel):
    guest_number: int
    guest_name: Optional[str] = None
    first_course: Optional[str] = None
    second_course: Optional[str] = None
    dessert: Optional[str] = None
    allergies: Optional[str] = None


class GuestSelectionResponse(GuestSelection):
    class Config:
        from_attributes = True


class MenuSelectionSave(BaseModel):
    reservation_id: UUID
    guests: List[GuestSelection]
    finalize: bool = False


class MenuSelectionSaveResponse(BaseModel):
    ok: bool = True
    finalized: bool
    message: str


class SelectionReservationInfo(BaseModel):
    id: UUID
    reservation_number: Optional[str]
    customer_name: str
    reservation_date: date
    start_time: str
    party_size: int
    event_type: Optional[str]
    dishes_status: Optional[str]

    class Config:
        from_attributes = True


class MenuSelectionState(BaseModel):
    reservation: SelectionReservationInfo
    menu: Optional[MenuCatalogResponse]
    selections: List[GuestSelectionResponse] = []


class DishSummary(BaseModel):
    reservation_number: str
    customer_name: str
    reservation_date: date
    party_size: int
    menu_name: Optional[str]
    counts: Dict[str, Dict[str, int]]
    allergies: List[str]
    total_selections: int


class DishSummaryResponse(BaseModel):
    html: str
    summary: DishSummary
