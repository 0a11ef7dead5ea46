"""
Pytest fixtures for all tests.

Provides:
- In-memory SQLite database, tables created per test
- Test application with the database and storage dependencies overridden
- Tenants, users and bearer headers for each role
- Stub transport for third-party HTTP calls
"""

import os
import tempfile

# Must be set before the application settings are first imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="wastetrack-uploads-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")

from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (register all tables on the metadata)
from app.config import settings
from app.core.database import Base, get_db
from app.features.auth.service import auth_service
from app.features.external_data.service import global_data_cache
from app.features.waste_data.storage import LocalFileStorage, get_storage
from app.integrations import http as external_http
from app.main import create_application
from app.models import Tenant, User
from app.models.role import UserRole
from tests.factories import TenantFactory, UserFactory

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "password123"


@pytest_asyncio.fixture(scope="function")
async def test_db_engine():
    """
    Create test database engine.

    StaticPool keeps the single in-memory connection alive for the whole test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session shared by the test body and the application under test."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    """File storage rooted in a temporary directory."""
    return LocalFileStorage(str(tmp_path / "uploads"))


@pytest_asyncio.fixture
async def app(db_session: AsyncSession, storage: LocalFileStorage):
    """
    Create FastAPI test application.

    Overrides the database and storage dependencies.
    """
    application = create_application()

    async def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_storage] = lambda: storage

    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client bound to the test application.

    Usage:
        async def test_endpoint(client, admin_headers):
            response = await client.get("/api/clients", headers=admin_headers)
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def bearer(user: User) -> dict[str, str]:
    token = auth_service.issue_token(user).token
    return {"Authorization": f"Bearer {token}"}


# Test data
@pytest_asyncio.fixture
async def test_tenant(db_session: AsyncSession) -> Tenant:
    return await TenantFactory.create(db_session, company_name="EcoSolutions Inc.")


@pytest_asyncio.fixture
async def other_tenant(db_session: AsyncSession) -> Tenant:
    return await TenantFactory.create(db_session, company_name="Rival Recycling Co.")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession, test_tenant: Tenant) -> User:
    return await UserFactory.create(
        db_session,
        tenant=test_tenant,
        email="admin@ecosolutions.com",
        password=TEST_PASSWORD,
        role=UserRole.ADMIN.value,
    )


@pytest_asyncio.fixture
async def member_user(db_session: AsyncSession, test_tenant: Tenant) -> User:
    return await UserFactory.create(
        db_session,
        tenant=test_tenant,
        email="member@ecosolutions.com",
        password=TEST_PASSWORD,
        role=UserRole.MEMBER.value,
    )


@pytest_asyncio.fixture
async def other_admin(db_session: AsyncSession, other_tenant: Tenant) -> User:
    return await UserFactory.create(
        db_session,
        tenant=other_tenant,
        email="admin@rival.com",
        password=TEST_PASSWORD,
        role=UserRole.ADMIN.value,
    )


@pytest_asyncio.fixture
async def super_admin(db_session: AsyncSession) -> User:
    return await UserFactory.create(
        db_session,
        tenant=None,
        email="superadmin@platform.com",
        password=TEST_PASSWORD,
        role=UserRole.SUPER_ADMIN.value,
    )


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture
def member_headers(member_user: User) -> dict[str, str]:
    return bearer(member_user)


@pytest.fixture
def other_headers(other_admin: User) -> dict[str, str]:
    return bearer(other_admin)


@pytest.fixture
def super_admin_headers(super_admin: User) -> dict[str, str]:
    return bearer(super_admin)


# External services
@pytest.fixture
def stub_http(monkeypatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """
    Route third-party calls to a handler instead of the network.

    Usage:
        requests = stub_http(lambda req: httpx.Response(200, json={...}))
    """
    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(external_http, "transport", httpx.MockTransport(record))
        return seen

    return install


@pytest.fixture(autouse=True)
def isolate_integrations(monkeypatch):
    """No API keys and an empty global-data cache unless a test opts in."""
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(settings, "google_maps_api_key", None)
    monkeypatch.setattr(settings, "google_project_id", None)
    global_data_cache.clear()
    yield
    global_data_cache.clear()
