"""Per-guest dish selection endpoints for group menus"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.models.menu import COURSES, MenuCatalogItem, MenuSelection
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.menu import (
    DishSummaryResponse,
    MenuSelectionSave,
    MenuSelectionSaveResponse,
    MenuSelectionState,
)
from app.services.dish_summary import build_dish_summary, load_dish_report
from app.services.pdf_generator import generate_dish_pdf

router = APIRouter()
logger = structlog.get_logger()

COURSE_LABELS = {
    "first_course": "Primer plato",
    "second_course": "Segundo plato",
    "dessert": "Postre",
}


def require_reservation_id(reservation_id: Optional[UUID]) -> UUID:
    if reservation_id is None:
        raise HTTPException(status_code=400, detail="reservation_id is required")
    return reservation_id


async def load_selectable(db: AsyncSession, reservation_id: UUID) -> tuple:
    """Reservation and menu, checked to accept dish selections"""
    result = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    if reservation.status != ReservationStatus.CONFIRMED.value:
        raise HTTPException(status_code=400, detail="Reservation is not confirmed")

    menu = None
    if reservation.menu_code:
        result = await db.execute(select(MenuCatalogItem).where(MenuCatalogItem.code == reservation.menu_code))
        menu = result.scalar_one_or_none()

    if menu is None or not menu.requires_selection:
        raise HTTPException(status_code=400, detail="This menu does not require a dish selection")

    return reservation, menu


@router.get("", response_model=MenuSelectionState)
async def get_menu_selection(
    reservation_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
):
    """Reservation, menu choices and the selections saved so far"""
    reservation, menu = await load_selectable(db, require_reservation_id(reservation_id))

    result = await db.execute(
        select(MenuSelection)
        .where(MenuSelection.reservation_id == reservation.id)
        .order_by(MenuSelection.guest_number.asc())
    )

    return MenuSelectionState(
        reservation=reservation,
        menu=menu,
        selections=result.scalars().all(),
    )


@router.post("", response_model=MenuSelectionSaveResponse)
async def save_menu_selection(
    request: MenuSelectionSave,
    db: AsyncSession = Depends(get_db),
):
    """Save guest selections as a draft, or finalize them"""
    reservation, menu = await load_selectable(db, request.reservation_id)

    if reservation.dishes_status == "completed":
        raise HTTPException(status_code=400, detail="Dish selection is already completed")

    choices = menu.choices or {}

    for guest in request.guests:
        if guest.guest_number < 1 or guest.guest_number > reservation.party_size:
            raise HTTPException(status_code=400, detail=f"Invalid guest number: {guest.guest_number}")

        if request.finalize:
            for course in COURSES:
                options = choices.get(course)
                if options and not any(dish.get("id") == getattr(guest, course) for dish in options):
                    raise HTTPException(
                        status_code=400,
                        detail=f"{COURSE_LABELS[course]} inválido para comensal {guest.guest_number}",
                    )

    result = await db.execute(
        select(MenuSelection).where(MenuSelection.reservation_id == reservation.id)
    )
    existing = {row.guest_number: row for row in result.scalars().all()}
    now = datetime.utcnow()

    for guest in request.guests:
        values = {
            "guest_name": guest.guest_name or None,
            "first_course": guest.first_course or None,
            "second_course": guest.second_course or None,
            "dessert": guest.dessert or None,
            "allergies": guest.allergies or None,
            "updated_at": now,
        }
        row = existing.get(guest.guest_number)
        if row is None:
            row = MenuSelection(reservation_id=reservation.id, guest_number=guest.guest_number)
            db.add(row)
            existing[guest.guest_number] = row
        for field, value in values.items():
            setattr(row, field, value)

    await db.commit()

    logger.info(
        "Dish selection saved",
        reservation_id=str(reservation.id),
        guests=len(request.guests),
        finalize=request.finalize,
    )

    if not request.finalize:
        return MenuSelectionSaveResponse(finalized=False, message="Selección guardada como borrador")

    result = await db.execute(
        select(func.count()).select_from(MenuSelection).where(MenuSelection.reservation_id == reservation.id)
    )
    saved = result.scalar_one()

    if saved != reservation.party_size:
        raise HTTPException(
            status_code=400,
            detail=f"Faltan selecciones. Tienes {saved} de {reservation.party_size} comensales.",
        )

    reservation.dishes_status = "completed"
    await db.commit()

    logger.info("Dish selection completed", reservation_id=str(reservation.id))

    return MenuSelectionSaveResponse(finalized=True, message="Selección de platos completada. ¡Gracias!")


@router.get("/summary", response_model=DishSummaryResponse)
async def get_dish_summary(
    reservation_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
):
    """Dish counts, allergies and per-guest detail as HTML and data"""
    summary = await build_dish_summary(db, require_reservation_id(reservation_id))

    if summary is None:
        raise HTTPException(status_code=404, detail="No dish selections found")

    return summary


@router.get("/pdf")
async def download_dish_pdf(
    reservation_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
):
    """Kitchen sheet as a downloadable PDF"""
    report = await load_dish_report(db, require_reservation_id(reservation_id))

    if report is None:
        raise HTTPException(status_code=404, detail="Reservation or dish selections not found")

    pdf_bytes = generate_dish_pdf(report)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="platos-{report.reference}.pdf"'},
    )
