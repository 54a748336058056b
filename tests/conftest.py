"""Test configuration and fixtures"""

from datetime import date, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.main import app
from app.config import Settings, get_settings
from app.database import Base, get_db, get_session_factory
from app.models import Employee, MenuCatalogItem, Reservation, ReservationStatus
from app.providers import CallProvider, WhatsAppProvider, get_call_provider, get_whatsapp_provider


class FakeWhatsAppProvider(WhatsAppProvider):
    """Records outgoing messages instead of sending them"""

    name = "fake_whatsapp"

    def __init__(self):
        self.sent = []
        self.error = None

    async def send_message(self, phone: str, message: str) -> None:
        if self.error:
            raise self.error
        self.sent.append((phone, message))


class FakeCallProvider(CallProvider):
    """Records requested calls instead of placing them"""

    name = "fake_call"

    def __init__(self):
        self.calls = []
        self.error = None

    async def make_call(self, phone: str) -> None:
        if self.error:
            raise self.error
        self.calls.append(phone)


@pytest.fixture
async def db_engine(tmp_path):
    """File backed SQLite so concurrent sessions see the same data"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    """Session used by tests to arrange and inspect data"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        make_api_key="",
        bapi_webhook_secret="",
        whatsapp_token="",
        whatsapp_phone_number_id="",
        whatsapp_verify_token="verify-me",
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret="whsec_test",
        site_url="https://reservas.test",
    )


@pytest.fixture
def whatsapp_provider():
    return FakeWhatsAppProvider()


@pytest.fixture
def call_provider():
    return FakeCallProvider()


@pytest.fixture
async def client(session_factory, test_settings, whatsapp_provider, call_provider):
    """Create test client with overridden database, settings and providers"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_whatsapp_provider] = lambda: whatsapp_provider
    app.dependency_overrides[get_call_provider] = lambda: call_provider

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def test_reservation(test_db):
    """Reservation waiting for its deposit"""
    reservation = Reservation(
        customer_name="Marta Soler",
        customer_phone="+34611222333",
        customer_email="marta@example.com",
        reservation_date=date.today() + timedelta(days=20),
        start_time="14:00",
        end_time="16:00",
        party_size=2,
        event_type="GRUPO_SENTADO",
        menu_code="menu_grupo_29",
        total_amount=58.0,
        deposit_amount=23.2,
        status=ReservationStatus.HOLD_BLOCKED.value,
    )
    test_db.add(reservation)
    await test_db.commit()

    return reservation


@pytest.fixture
async def test_menu(test_db):
    menu = MenuCatalogItem(
        code="menu_grupo_29",
        name="Menú Grupo (29€)",
        price=29,
        description="Primero, segundo y postre a escoger",
        drinks="1 bebida + agua",
        event_types=["GRUPO_SENTADO", "NOCTURNA_EXCLUSIVA"],
        choices={
            "first_course": [
                {"id": "rigatoni", "name": "Rigatoni crema tomate"},
                {"id": "ensalada_cabra", "name": "Ensalada cabra frutos rojos"},
            ],
            "second_course": [
                {"id": "solomillo", "name": "Solomillo pimienta verde"},
                {"id": "lubina", "name": "Lubina horno"},
            ],
            "dessert": [
                {"id": "sorbete", "name": "Sorbete limón cava"},
                {"id": "macedonia", "name": "Macedonia frutas"},
            ],
        },
    )
    test_db.add(menu)
    await test_db.commit()

    return menu


@pytest.fixture
async def confirmed_reservation(test_db, test_reservation, test_menu):
    """Paid reservation on a menu with dish choices"""
    test_reservation.status = ReservationStatus.CONFIRMED.value
    test_reservation.deposit_paid = True
    await test_db.commit()

    return test_reservation


@pytest.fixture
async def test_employee(test_db):
    employee = Employee(name="Jordi Puig", role="camarero", phone="+34600333444")
    test_db.add(employee)
    await test_db.commit()

    return employee
