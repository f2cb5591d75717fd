"""Shared test fixtures and helpers."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import date, datetime, timezone
from typing import Optional

import bcrypt
import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app
from app.models import Booking, Notification, User
from app.services import background
from app.services.mail_service import MailService, get_mail_service

CUSTOMER_ID = "cust-001"
CUSTOMER_EMAIL = "jane@example.com"
CUSTOMER_PASSWORD = "secret123"


class RecordingMailService(MailService):
    """Mail service that keeps messages instead of talking to SMTP."""

    def __init__(self):
        super().__init__(host="", sender="test@dustbinpro.test")
        self.sent: list[dict] = []

    async def send(self, to_email, subject, body):
        self.sent.append({"to": to_email, "subject": subject, "body": body})
        return True


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await background.drain(timeout=5)
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def mail():
    return RecordingMailService()


@pytest.fixture
async def client(session_maker, mail):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_service] = lambda: mail
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


async def make_user(
    db,
    uid: str = CUSTOMER_ID,
    email: str = CUSTOMER_EMAIL,
    password: Optional[str] = CUSTOMER_PASSWORD,
    first_name: Optional[str] = "Jane",
    last_name: Optional[str] = "Doe",
    name: Optional[str] = None,
    role: str = "customer",
    **fields,
) -> User:
    """Insert a user; a low bcrypt cost keeps the suite fast."""
    password_hash = None
    if password:
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")
    user = User(
        id=uid,
        email=email,
        first_name=first_name,
        last_name=last_name,
        name=name,
        role=role,
        email_verified=True,
        password_hash=password_hash,
        **fields,
    )
    db.add(user)
    await db.commit()
    return user


async def make_booking(
    db,
    customer_id: str = CUSTOMER_ID,
    booking_date: date = date(2025, 6, 1),
    status: str = "pending",
    **fields,
) -> Booking:
    values = dict(
        customer_id=customer_id,
        customer_name="Jane Doe",
        address="12 Harbour Road",
        booking_date=booking_date,
        preferred_time="09:00",
        status=status,
        service_type="Bin Cleaning",
        estimated_price=45,
        final_price=0,
        is_price_set=False,
        payment_status="pending",
    )
    values.update(fields)
    booking = Booking(**values)
    db.add(booking)
    await db.commit()
    return booking


async def make_notification(
    db,
    title: str,
    created_at: datetime,
    customer_id: str = CUSTOMER_ID,
    **fields,
) -> Notification:
    notification = Notification(
        customer_id=customer_id,
        title=title,
        message=fields.pop("message", f"{title} message"),
        created_at=created_at,
        **fields,
    )
    db.add(notification)
    await db.commit()
    return notification


def at(day: int, hour: int = 12) -> datetime:
    return datetime(2025, 5, day, hour, 0, tzinfo=timezone.utc)


async def login(client, email: str = CUSTOMER_EMAIL, password: str = CUSTOMER_PASSWORD):
    response = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response
