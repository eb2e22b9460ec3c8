"""Shared test fixtures for the booking API tests.

Uses a throwaway SQLite file through aiosqlite so tests run without
PostgreSQL and concurrent sessions get their own connections.
"""

import os
import tempfile

_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="booking-tests-"), "test.db")
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{_DB_PATH}"

os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.core.database import Base, get_db
from app.main import app

# Import all models to ensure they're registered with Base.metadata
from app.models.business import Business
from app.models.service import Service
from app.models.appointment import Appointment

from app.services.businesses import create_business
from app.services.catalog import create_service


engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

OWNER_ID = "owner-acme"
OTHER_OWNER_ID = "owner-rival"


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_db():
    async with TestSession() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


def make_token(owner_id: str) -> str:
    """Mint a token the way the auth provider would."""
    return jwt.encode({"sub": owner_id}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers(owner_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(owner_id)}"}


@pytest_asyncio.fixture
async def client():
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db():
    """Direct DB session for test setup/assertions."""
    async with TestSession() as session:
        yield session


@pytest.fixture
def owner_headers():
    return auth_headers(OWNER_ID)


@pytest.fixture
def other_owner_headers():
    return auth_headers(OTHER_OWNER_ID)


@pytest_asyncio.fixture
async def business(db):
    """The Acme Cuts business, owned by OWNER_ID."""
    return await create_business(db, OWNER_ID, "Acme Cuts", "a@acme.test")


@pytest_asyncio.fixture
async def other_business(db):
    return await create_business(db, OTHER_OWNER_ID, "Rival Cuts", "r@rival.test")


@pytest_asyncio.fixture
async def haircut(db, business):
    """A 30 minute, $20 service on Acme Cuts."""
    return await create_service(db, business.id, "Haircut", 30, price="20")


@pytest.fixture
def session_factory():
    """Opens independent sessions, for tests that simulate separate callers."""
    return TestSession
