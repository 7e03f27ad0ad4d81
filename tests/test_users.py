import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_users(client: AsyncClient, admin_headers) -> None:
    resp = await client.get("/api/v1/users", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["count"] == 5
    assert "passwordHash" not in resp.json()["data"][0]


@pytest.mark.asyncio
async def test_create_user_then_login(client: AsyncClient, admin_headers) -> None:
    created = await client.post(
        "/api/v1/users",
        json={"email": "New.Librarian@Institute.com", "name": "New Librarian", "role": "librarian", "password": "shelf-2025"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    data = created.json()["data"]
    assert data["id"] == "USR0006"
    assert data["email"] == "new.librarian@institute.com"

    login = await client.post(
        "/api/v1/auth/login", json={"email": "new.librarian@institute.com", "password": "shelf-2025"}
    )
    assert login.status_code == 200
    assert login.json()["data"]["user"]["role"] == "librarian"


@pytest.mark.asyncio
async def test_create_user_validation_and_duplicates(client: AsyncClient, admin_headers) -> None:
    short = await client.post(
        "/api/v1/users",
        json={"email": "x@institute.com", "name": "X", "role": "teacher", "password": "short"},
        headers=admin_headers,
    )
    assert short.status_code == 400

    bad_role = await client.post(
        "/api/v1/users",
        json={"email": "x@institute.com", "name": "X", "role": "janitor", "password": "long-enough"},
        headers=admin_headers,
    )
    assert bad_role.status_code == 400

    duplicate = await client.post(
        "/api/v1/users",
        json={"email": "teacher@institute.com", "name": "T", "role": "teacher", "password": "long-enough"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409


@pytest.mark.asyncio
async def test_only_super_admin_manages_users(client: AsyncClient, accountant_headers) -> None:
    assert (await client.get("/api/v1/users", headers=accountant_headers)).status_code == 403
