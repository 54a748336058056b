#!/usr/bin/env python3
"""
Seed script to create the menu catalog, staff and a demo reservation
"""

import asyncio
from datetime import date, timedelta


def dishes(*names):
    """Choice list with ids derived from the dish names"""
    return [
        {"id": name.lower().replace(" ", "_"), "name": name}
        for name in names
    ]


MENU_CATALOG = [
    {
        "code": "menu_grupo_34",
        "name": "Menú Grupo Premium (34€)",
        "price": 34,
        "description": "\n".join([
            "COMPARTIR: Embutidos ibéricos, pan coca tomate, bravas",
            "ESCOGER: Solomillo pimienta / Bacalao setas / Parrillada verduras",
            "POSTRE: Tarta o Helado",
            "BEBIDA: 1 refresco/cerveza/vino + agua + café/infusión",
        ]),
        "drinks": "1 bebida + agua + café",
        "event_types": ["GRUPO_SENTADO", "NOCTURNA_EXCLUSIVA"],
        "choices": {
            "second_course": dishes("Solomillo pimienta", "Bacalao setas", "Parrillada verduras"),
            "dessert": dishes("Tarta", "Helado"),
        },
    },
    {
        "code": "menu_grupo_29",
        "name": "Menú Grupo (29€)",
        "price": 29,
        "description": "\n".join([
            "PRIMERO: Rigatoni crema tomate / Ensalada cabra frutos rojos",
            "ESCOGER: Solomillo pimienta verde / Lubina horno / Parrillada verduras",
            "POSTRE: Sorbete limón cava / Macedonia frutas",
            "BEBIDA: 1 refresco/cerveza/vino + agua",
        ]),
        "drinks": "1 bebida + agua",
        "event_types": ["GRUPO_SENTADO", "NOCTURNA_EXCLUSIVA"],
        "choices": {
            "first_course": dishes("Rigatoni crema tomate", "Ensalada cabra frutos rojos"),
            "second_course": dishes("Solomillo pimienta verde", "Lubina horno", "Parrillada verduras"),
            "dessert": dishes("Sorbete limon cava", "Macedonia frutas"),
        },
    },
    {
        "code": "menu_infantil",
        "name": "Menú Infantil (14,50€)",
        "price": 14.5,
        "description": "\n".join([
            "ESCOGER: Macarrones tomate / Hamburguesa patatas / Fingers pollo / Canelones",
            "POSTRE: Tarta / Helado / Yogur",
            "BEBIDA: 1 refresco/zumo/agua",
        ]),
        "drinks": "1 bebida",
        "event_types": ["INFANTIL_CUMPLE"],
        "choices": {
            "second_course": dishes("Macarrones tomate", "Hamburguesa patatas", "Fingers pollo", "Canelones"),
            "dessert": dishes("Tarta", "Helado", "Yogur"),
        },
    },
    {
        "code": "menu_pica_34",
        "name": "Pica-Pica Premium (34€)",
        "price": 34,
        "description": "\n".join([
            "Embutidos ibéricos, pan coca, bravas, brocheta sepia y gambas,",
            "alcachofas jamón pato, ensaladitas cabra, saquitos carrillera,",
            "croquetas, minihamburguesas brioxe",
            "BEBIDA: 2 refrescos/vino/cerveza",
        ]),
        "drinks": "2 bebidas",
        "event_types": ["GRUPO_PICA_PICA", "NOCTURNA_EXCLUSIVA"],
        "choices": {},
    },
    {
        "code": "menu_pica_30",
        "name": "Pica-Pica (30€)",
        "price": 30,
        "description": "\n".join([
            "Tortilla patatas, croquetas, minihamburguesas brioxe,",
            "calamarcitos andaluza, fingers pollo, nachos guacamole",
            "BEBIDA: 2 refrescos/vino/cerveza",
        ]),
        "drinks": "2 bebidas",
        "event_types": ["GRUPO_PICA_PICA", "NOCTURNA_EXCLUSIVA"],
        "choices": {},
    },
]

EMPLOYEES = [
    {"name": "Laura Martín", "role": "encargada", "phone": "+34600111222"},
    {"name": "Jordi Puig", "role": "camarero", "phone": "+34600333444"},
    {"name": "Ana Gómez", "role": "cocina", "phone": "+34600555666"},
]


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from app.database import SessionLocal, engine, Base
    from app.models import Employee, MenuCatalogItem, Reservation, ReservationStatus

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        result = await db.execute(select(MenuCatalogItem).limit(1))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating menu catalog...")
        for menu_data in MENU_CATALOG:
            db.add(MenuCatalogItem(**menu_data))

        print("Creating staff...")
        for employee_data in EMPLOYEES:
            db.add(Employee(**employee_data))

        reservation = Reservation(
            customer_name="Marta Soler",
            customer_phone="+34611222333",
            customer_email="marta@example.com",
            reservation_date=date.today() + timedelta(days=12),
            start_time="14:00",
            end_time="16:00",
            party_size=12,
            event_type="GRUPO_SENTADO",
            menu_code="menu_grupo_29",
            total_amount=348.0,
            deposit_amount=139.2,
            status=ReservationStatus.CONFIRMED.value,
            deposit_paid=True,
        )
        db.add(reservation)

        await db.commit()

        print(f"""
Demo data created successfully!

Menus: {len(MENU_CATALOG)} items created
Employees: {len(EMPLOYEES)} created

Reservation: {reservation.reservation_number}
  ID: {reservation.id}
  Customer: {reservation.customer_name} ({reservation.customer_phone})
  Dish selection: /menu-selection?reservation_id={reservation.id}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
