import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_reports_seeded(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get("/api/v1/reports", headers=teacher_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 5
    assert [r["id"] for r in body["data"]] == ["RPT0001", "RPT0002", "RPT0003", "RPT0004", "RPT0005"]


@pytest.mark.asyncio
async def test_type_filter_and_all(client: AsyncClient, teacher_headers) -> None:
    fees = await client.get("/api/v1/reports", params={"type": "fees"}, headers=teacher_headers)
    assert [r["id"] for r in fees.json()["data"]] == ["RPT0003"]

    everything = await client.get("/api/v1/reports", params={"type": "all"}, headers=teacher_headers)
    assert everything.json()["count"] == 5


@pytest.mark.asyncio
async def test_date_range_and_search_compose(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get(
        "/api/v1/reports",
        params={"dateFrom": "2025-12-12", "dateTo": "2025-12-13", "search": "report"},
        headers=teacher_headers,
    )
    assert [r["id"] for r in resp.json()["data"]] == ["RPT0003", "RPT0004"]


@pytest.mark.asyncio
async def test_create_get_delete_report(client: AsyncClient, admin_headers) -> None:
    created = await client.post(
        "/api/v1/reports",
        json={"name": "Monthly Fees", "type": "fees", "format": "csv", "filters": {"month": "2025-12"}},
        headers=admin_headers,
    )
    assert created.status_code == 201
    data = created.json()["data"]
    assert data["id"] == "RPT0006"
    assert data["generatedBy"] == "Admin User"
    assert data["filters"] == {"month": "2025-12"}

    fetched = await client.get(f"/api/v1/reports/{data['id']}", headers=admin_headers)
    assert fetched.json()["data"] == data

    assert (await client.delete(f"/api/v1/reports/{data['id']}", headers=admin_headers)).status_code == 200
    missing = await client.get(f"/api/v1/reports/{data['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "Report not found"}


@pytest.mark.asyncio
async def test_create_report_with_unknown_type(client: AsyncClient, admin_headers) -> None:
    resp = await client.post(
        "/api/v1/reports",
        json={"name": "Odd", "type": "payroll", "format": "pdf"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid request: type")


@pytest.mark.asyncio
async def test_teacher_cannot_create_report(client: AsyncClient, teacher_headers) -> None:
    resp = await client.post(
        "/api/v1/reports",
        json={"name": "X", "type": "fees", "format": "pdf"},
        headers=teacher_headers,
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_malformed_date_bound_matches_nothing(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get("/api/v1/reports", params={"dateFrom": "last-week"}, headers=teacher_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": [], "count": 0}
