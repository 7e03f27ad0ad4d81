from typing import AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.init_db import init_db
from app.db.seed import seed_database
from app.db.session import build_engine, build_sessionmaker, get_db
from app.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEMO_PASSWORD = "password123"


@pytest.fixture()
async def session_factory():
    """Fresh in-memory database with demo data for every test."""
    engine = build_engine(TEST_DATABASE_URL)
    await init_db(engine)
    factory = build_sessionmaker(engine)
    async with factory() as session:
        await seed_database(session)
    yield factory
    await engine.dispose()


@pytest.fixture()
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app; each request gets its own session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def login(client: AsyncClient, email: str, password: str = DEMO_PASSWORD) -> Dict[str, str]:
    resp = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
async def admin_headers(client: AsyncClient) -> Dict[str, str]:
    return await login(client, "admin@institute.com")


@pytest.fixture()
async def teacher_headers(client: AsyncClient) -> Dict[str, str]:
    return await login(client, "teacher@institute.com")


@pytest.fixture()
async def accountant_headers(client: AsyncClient) -> Dict[str, str]:
    return await login(client, "accountant@institute.com")


@pytest.fixture()
async def librarian_headers(client: AsyncClient) -> Dict[str, str]:
    return await login(client, "librarian@institute.com")
