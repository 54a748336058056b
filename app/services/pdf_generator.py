"""Printable kitchen sheet with the dishes chosen for a reservation"""

import io
from datetime import datetime
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
import structlog

from app.services.dish_summary import COURSE_TITLES, DishReport, format_spanish_date

logger = structlog.get_logger()

# Brand palette
DORADO = colors.Color(176 / 255, 141 / 255, 87 / 255)
TERRACOTA = colors.Color(196 / 255, 114 / 255, 78 / 255)
VERDE = colors.Color(107 / 255, 144 / 255, 128 / 255)
INK = colors.Color(26 / 255, 15 / 255, 5 / 255)
ROJO = colors.Color(192 / 255, 57 / 255, 43 / 255)
BG_LIGHT = colors.Color(245 / 255, 243 / 255, 238 / 255)
BG_RED = colors.Color(254 / 255, 242 / 255, 242 / 255)
LINE_COLOR = colors.Color(232 / 255, 226 / 255, 214 / 255)

RESTAURANT_NAME = "Canal Olimpico"

COURSE_COLORS = {
    "first_course": DORADO,
    "second_course": TERRACOTA,
    "dessert": VERDE,
}


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("Title", parent=base["Heading1"], fontSize=22, alignment=1, textColor=DORADO),
        "subtitle": ParagraphStyle("Subtitle", parent=base["Normal"], fontSize=10, alignment=1, textColor=colors.grey),
        "section": ParagraphStyle("Section", parent=base["Heading2"], fontSize=14, textColor=TERRACOTA),
        "normal": base["Normal"],
        "allergy": ParagraphStyle("Allergy", parent=base["Normal"], fontSize=9, textColor=ROJO),
        "footer": ParagraphStyle("Footer", parent=base["Normal"], fontSize=8, alignment=1, textColor=colors.grey),
    }


def _info_table(report: DishReport) -> Table:
    reservation = report.reservation
    rows = [
        [f"Reserva: {report.reference}", f"Fecha: {format_spanish_date(reservation.reservation_date)}"],
        [f"Cliente: {reservation.customer_name}", f"Hora: {reservation.start_time}h"],
        [f"Menu: {report.menu_name or '-'}", f"Comensales: {reservation.party_size}"],
    ]
    if reservation.customer_phone:
        rows.append([f"Tel: {reservation.customer_phone}", ""])

    table = Table(rows, colWidths=[8.5 * cm, 8.5 * cm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), BG_LIGHT),
        ("TEXTCOLOR", (0, 0), (-1, -1), INK),
        ("FONTNAME", (0, 0), (0, 0), "Helvetica-Bold"),
        ("FONTNAME", (1, 2), (1, 2), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 11),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return table


def _counts_table(report: DishReport, course: str) -> Table:
    color = COURSE_COLORS[course]
    data = [[COURSE_TITLES[course].upper(), ""]]
    data.extend([name, str(count)] for name, count in report.named_counts(course))

    table = Table(data, colWidths=[15 * cm, 2 * cm])
    table.setStyle(TableStyle([
        ("SPAN", (0, 0), (-1, 0)),
        ("BACKGROUND", (0, 0), (-1, 0), color),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (1, 1), (1, -1), "Helvetica-Bold"),
        ("TEXTCOLOR", (1, 1), (1, -1), color),
        ("ALIGN", (1, 1), (1, -1), "RIGHT"),
        ("LINEBELOW", (0, 1), (-1, -1), 0.5, LINE_COLOR),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
    ]))
    return table


def _guest_table(report: DishReport) -> Table:
    header = ["No", "Nombre"]
    courses = list(COURSE_TITLES) if report.has_first_course else ["second_course", "dessert"]
    header += [{"first_course": "Primero", "second_course": "Segundo", "dessert": "Postre"}[c] for c in courses]
    header.append("Alergias")

    data = [header]
    for selection in report.selections:
        row = [str(selection.guest_number), selection.guest_name or "-"]
        row += [report.dish_name(course, getattr(selection, course)) for course in courses]
        row.append(selection.allergies or "-")
        data.append(row)

    style = [
        ("BACKGROUND", (0, 0), (-1, 0), INK),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("LINEBELOW", (0, 1), (-1, -1), 0.3, LINE_COLOR),
    ]
    for index, selection in enumerate(report.selections, 1):
        if selection.guest_number % 2 == 0:
            style.append(("BACKGROUND", (0, index), (-1, index), BG_LIGHT))
        if selection.allergies:
            style.append(("TEXTCOLOR", (-1, index), (-1, index), ROJO))
            style.append(("FONTNAME", (-1, index), (-1, index), "Helvetica-Bold"))

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(style))
    return table


def allergy_paragraphs(report: DishReport, styles: dict) -> List[Paragraph]:
    """Guest allergy notes as plain text, never as paragraph markup"""
    return [Paragraph(f"- {escape(line)}", styles["allergy"]) for line in report.allergies]


def _allergy_box(report: DishReport, styles: dict) -> Table:
    rows = [[Paragraph("<b>ALERGIAS E INTOLERANCIAS</b>", styles["allergy"])]]
    rows += [[paragraph] for paragraph in allergy_paragraphs(report, styles)]

    table = Table(rows, colWidths=[17 * cm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), BG_RED),
        ("BOX", (0, 0), (-1, -1), 1, ROJO),
    ]))
    return table


def generate_dish_pdf(report: DishReport) -> bytes:
    """Render the report as an A4 PDF and return its bytes"""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=f"Platos - {report.reference}",
        author=RESTAURANT_NAME,
    )
    styles = _styles()

    elements: List = [
        Paragraph(RESTAURANT_NAME, styles["title"]),
        Paragraph("Seleccion de Platos para Cocina", styles["subtitle"]),
        Spacer(1, 0.5 * cm),
        _info_table(report),
        Spacer(1, 0.7 * cm),
        Paragraph("RESUMEN DE CANTIDADES", styles["section"]),
    ]

    for course in COURSE_TITLES:
        if report.counts.get(course):
            elements.append(_counts_table(report, course))
            elements.append(Spacer(1, 0.3 * cm))

    if report.allergies:
        elements.append(Spacer(1, 0.3 * cm))
        elements.append(_allergy_box(report, styles))

    elements += [
        Spacer(1, 0.5 * cm),
        Paragraph("DETALLE POR COMENSAL", styles["section"]),
        _guest_table(report),
        Spacer(1, 1 * cm),
        Paragraph(f"Generado: {datetime.now().strftime('%d/%m/%Y %H:%M')}", styles["footer"]),
        Paragraph(f"{RESTAURANT_NAME} - Sistema de Reservas", styles["footer"]),
    ]

    doc.build(elements)

    pdf_bytes = buffer.getvalue()
    logger.info("Dish PDF generated", reservation=report.reference, size=len(pdf_bytes))
    return pdf_bytes
