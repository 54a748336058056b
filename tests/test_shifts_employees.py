"""Tests for staff and weekly shift endpoints"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.models.staff import Shift

WEEK = "2026-02-16"


@pytest.mark.asyncio
async def test_employee_crud(client: AsyncClient):
    response = await client.post("/employees", json={"name": "  Ana Gómez ", "phone": " ", "pin": "1234"})
    assert response.status_code == 201
    employee = response.json()
    assert employee["name"] == "Ana Gómez"
    assert employee["role"] == "camarero"
    assert employee["phone"] is None
    assert employee["active"] is True

    response = await client.patch("/employees", json={"id": employee["id"], "role": "cocina", "active": False})
    assert response.status_code == 200
    assert response.json()["role"] == "cocina"
    assert response.json()["active"] is False

    response = await client.get("/employees")
    assert [e["name"] for e in response.json()] == ["Ana Gómez"]

    response = await client.delete("/employees", params={"id": employee["id"]})
    assert response.json() == {"ok": True}

    response = await client.get("/employees")
    assert response.json() == []


@pytest.mark.asyncio
async def test_employee_requires_name(client: AsyncClient):
    response = await client.post("/employees", json={"name": "   "})
    assert response.status_code == 400

    response = await client.delete("/employees")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_shift_upsert_replaces_same_day(client: AsyncClient, test_db, test_employee):
    shift = {
        "employee_id": str(test_employee.id),
        "week_start": WEEK,
        "day_of_week": 4,
        "start_time": "12:00",
        "end_time": "16:00",
    }

    first = await client.post("/shifts", json=shift)
    assert first.status_code == 201
    assert first.json()["employee"] == {"name": "Jordi Puig", "role": "camarero"}

    second = await client.post("/shifts", json={**shift, "start_time": "18:00", "end_time": "23:30"})
    assert second.status_code == 201
    assert second.json()["id"] == first.json()["id"]

    result = await test_db.execute(select(Shift))
    shifts = result.scalars().all()
    assert len(shifts) == 1
    assert shifts[0].start_time == "18:00"


@pytest.mark.asyncio
async def test_shift_missing_fields(client: AsyncClient, test_employee):
    response = await client.post(
        "/shifts",
        json={"employee_id": str(test_employee.id), "week_start": WEEK, "day_of_week": 1},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_shifts_for_week(client: AsyncClient, test_employee):
    for day, start in [(3, "18:00"), (1, "12:00"), (1, "08:00")]:
        await client.post("/shifts", json={
            "employee_id": str(test_employee.id),
            "week_start": WEEK,
            "day_of_week": day,
            "start_time": start,
            "end_time": "23:00",
        })
    await client.post("/shifts", json={
        "employee_id": str(test_employee.id),
        "week_start": "2026-02-23",
        "day_of_week": 0,
        "start_time": "09:00",
        "end_time": "13:00",
    })

    response = await client.get("/shifts", params={"week": WEEK})

    assert response.status_code == 200
    shifts = response.json()
    # same day replaces, so day 1 keeps the last start time
    assert [(s["day_of_week"], s["start_time"]) for s in shifts] == [(1, "08:00"), (3, "18:00")]
    assert all(s["employee"]["name"] == "Jordi Puig" for s in shifts)


@pytest.mark.asyncio
async def test_delete_shift(client: AsyncClient, test_employee):
    created = await client.post("/shifts", json={
        "employee_id": str(test_employee.id),
        "week_start": WEEK,
        "day_of_week": 2,
        "start_time": "12:00",
        "end_time": "16:00",
    })

    response = await client.delete("/shifts")
    assert response.status_code == 400

    response = await client.delete("/shifts", params={"id": created.json()["id"]})
    assert response.json() == {"ok": True}

    response = await client.get("/shifts", params={"week": WEEK})
    assert response.json() == []
