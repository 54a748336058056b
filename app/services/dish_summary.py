"""
Kitchen summary of the dishes chosen for a reservation.

The same report feeds the JSON/HTML summary endpoint and the PDF export.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from jinja2 import Template
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.menu import COURSES, MenuCatalogItem, MenuSelection
from app.models.reservation import Reservation

MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

COURSE_TITLES = {
    "first_course": "Primer Plato",
    "second_course": "Segundo Plato",
    "dessert": "Postre",
}


def format_spanish_date(value: date) -> str:
    return f"{value.day} de {MONTHS[value.month - 1]} de {value.year}"


def reservation_reference(reservation: Reservation) -> str:
    return reservation.reservation_number or str(reservation.id)[:8]


@dataclass
class DishReport:
    """Everything the kitchen needs to prepare a group menu"""
    reservation: Reservation
    menu: Optional[MenuCatalogItem]
    selections: List[MenuSelection]
    counts: Dict[str, Dict[str, int]] = field(default_factory=dict)
    allergies: List[str] = field(default_factory=list)

    @property
    def reference(self) -> str:
        return reservation_reference(self.reservation)

    @property
    def menu_name(self) -> Optional[str]:
        return self.menu.name if self.menu else self.reservation.menu_code

    @property
    def has_first_course(self) -> bool:
        return bool(self.menu and (self.menu.choices or {}).get("first_course"))

    def dish_name(self, course: str, dish_id: Optional[str]) -> str:
        if not dish_id:
            return "-"
        if self.menu is None:
            return dish_id
        return self.menu.dish_name(course, dish_id)

    def named_counts(self, course: str) -> List[tuple]:
        """(dish name, count) pairs in the order dishes were first chosen"""
        return [(self.dish_name(course, dish_id), n) for dish_id, n in self.counts.get(course, {}).items()]


def tally(selections: List[MenuSelection]) -> tuple:
    counts = {course: OrderedDict() for course in COURSES}
    allergies = []

    for selection in selections:
        for course in COURSES:
            dish_id = getattr(selection, course)
            if dish_id:
                counts[course][dish_id] = counts[course].get(dish_id, 0) + 1

        if selection.allergies and selection.allergies.strip():
            guest = selection.guest_name or f"Comensal {selection.guest_number}"
            allergies.append(f"{guest}: {selection.allergies}")

    return {course: dict(c) for course, c in counts.items()}, allergies


async def load_dish_report(db: AsyncSession, reservation_id) -> Optional[DishReport]:
    """Build the report, or None when the reservation or its selections are missing"""
    result = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    reservation = result.scalar_one_or_none()
    if not reservation:
        return None

    result = await db.execute(
        select(MenuSelection)
        .where(MenuSelection.reservation_id == reservation_id)
        .order_by(MenuSelection.guest_number.asc())
    )
    selections = list(result.scalars().all())
    if not selections:
        return None

    menu = None
    if reservation.menu_code:
        result = await db.execute(select(MenuCatalogItem).where(MenuCatalogItem.code == reservation.menu_code))
        menu = result.scalar_one_or_none()

    counts, allergies = tally(selections)
    return DishReport(
        reservation=reservation,
        menu=menu,
        selections=selections,
        counts=counts,
        allergies=allergies,
    )


SUMMARY_TEMPLATE = Template("""
<h2 style="color:#B08D57;margin:0 0 15px;">Selección de Platos - {{ report.reference }}</h2>
<table width="100%" cellpadding="0" cellspacing="0" style="background:#f5f3ee;border-radius:8px;padding:16px;margin:0 0 20px;border:1px solid #e8e2d6;">
  <tr><td style="padding:8px 16px;">
    <p style="margin:4px 0;color:#1A0F05;"><strong>{{ reservation.customer_name }}</strong></p>
    <p style="margin:4px 0;color:#1A0F05;">{{ date_label }} · {{ reservation.start_time }}h</p>
    <p style="margin:4px 0;color:#1A0F05;">{{ reservation.party_size }} comensales</p>
    <p style="margin:4px 0;color:#1A0F05;">{{ report.menu_name or "" }}</p>
    {% if reservation.customer_phone %}<p style="margin:4px 0;color:#1A0F05;">{{ reservation.customer_phone }}</p>{% endif %}
  </td></tr>
</table>
<h3 style="color:#C4724E;margin:0 0 10px;">Resumen de Cantidades</h3>
<table width="100%" cellpadding="8" cellspacing="0" style="border-collapse:collapse;margin:0 0 20px;">
{% for course, title, color in sections %}{% set rows = report.named_counts(course) %}{% if rows %}
  <tr style="background:{{ color }};color:#fff;"><td colspan="2" style="padding:8px 12px;font-weight:700;">{{ title }}</td></tr>
  {% for name, count in rows %}<tr style="border-bottom:1px solid #e8e2d6;"><td style="padding:8px 12px;color:#1A0F05;">{{ name }}</td><td style="padding:8px 12px;text-align:right;font-weight:700;color:{{ color }};">{{ count }}</td></tr>
  {% endfor %}{% endif %}{% endfor %}
</table>
<h3 style="color:#C4724E;margin:0 0 10px;">Detalle por Comensal</h3>
<table width="100%" cellpadding="6" cellspacing="0" style="border-collapse:collapse;margin:0 0 20px;font-size:13px;">
  <tr style="background:#1A0F05;color:#fff;">
    <th style="padding:8px;text-align:left;">Nº</th>
    <th style="padding:8px;text-align:left;">Nombre</th>
    {% if report.has_first_course %}<th style="padding:8px;text-align:left;">Primero</th>{% endif %}
    <th style="padding:8px;text-align:left;">Segundo</th>
    <th style="padding:8px;text-align:left;">Postre</th>
    <th style="padding:8px;text-align:left;">Alergias</th>
  </tr>
{% for sel in report.selections %}
  <tr style="background:{{ '#f5f3ee' if sel.guest_number % 2 == 0 else '#ffffff' }};border-bottom:1px solid #e8e2d6;">
    <td style="padding:6px 8px;">{{ sel.guest_number }}</td>
    <td style="padding:6px 8px;">{{ sel.guest_name or "-" }}</td>
    {% if report.has_first_course %}<td style="padding:6px 8px;">{{ report.dish_name("first_course", sel.first_course) }}</td>{% endif %}
    <td style="padding:6px 8px;">{{ report.dish_name("second_course", sel.second_course) }}</td>
    <td style="padding:6px 8px;">{{ report.dish_name("dessert", sel.dessert) }}</td>
    <td style="padding:6px 8px;{% if sel.allergies %}color:#c0392b;font-weight:700;{% endif %}">{{ sel.allergies or "-" }}</td>
  </tr>
{% endfor %}
</table>
{% if report.allergies %}
<div style="background:#fef2f2;border:1px solid #fca5a5;border-radius:8px;padding:16px;margin:0 0 20px;">
  <p style="color:#c0392b;font-weight:700;margin:0 0 8px;">ALERGIAS E INTOLERANCIAS</p>
  {% for line in report.allergies %}<p style="color:#991b1b;margin:2px 0;">• {{ line }}</p>
  {% endfor %}
</div>
{% endif %}
""", autoescape=True)

SECTION_COLORS = (
    ("first_course", "#B08D57"),
    ("second_course", "#C4724E"),
    ("dessert", "#6b9080"),
)


def render_summary_html(report: DishReport) -> str:
    sections = [(course, COURSE_TITLES[course], color) for course, color in SECTION_COLORS]
    return SUMMARY_TEMPLATE.render(
        report=report,
        reservation=report.reservation,
        date_label=format_spanish_date(report.reservation.reservation_date),
        sections=sections,
    )


def summary_payload(report: DishReport) -> dict:
    reservation = report.reservation
    return {
        "reservation_number": report.reference,
        "customer_name": reservation.customer_name,
        "reservation_date": reservation.reservation_date,
        "party_size": reservation.party_size,
        "menu_name": report.menu_name,
        "counts": report.counts,
        "allergies": report.allergies,
        "total_selections": len(report.selections),
    }


async def build_dish_summary(db: AsyncSession, reservation_id) -> Optional[dict]:
    """{html, summary} for a reservation, or None when there is nothing to show"""
    report = await load_dish_report(db, reservation_id)
    if report is None:
        return None
    return {"html": render_summary_html(report), "summary": summary_payload(report)}
