import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_date_and_student_filters_match_both(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get(
        "/api/v1/attendance",
        params={"date": "2025-12-14", "studentId": "STU0001"},
        headers=teacher_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    record = body["data"][0]
    assert record["id"] == "ATT0001"
    assert record["date"] == "2025-12-14"
    assert record["studentId"] == "STU0001"
    assert record["student"]["name"] == "Rahul Sharma"


@pytest.mark.asyncio
async def test_unmatched_filter_returns_empty_list(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get(
        "/api/v1/attendance",
        params={"date": "2025-01-01", "studentId": "S1"},
        headers=teacher_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": [], "count": 0}


@pytest.mark.asyncio
async def test_date_range_is_inclusive(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get(
        "/api/v1/attendance",
        params={"dateFrom": "2025-12-13", "dateTo": "2025-12-13"},
        headers=teacher_headers,
    )
    assert [a["id"] for a in resp.json()["data"]] == ["ATT0004"]


@pytest.mark.asyncio
async def test_mark_attendance_and_duplicate(client: AsyncClient, teacher_headers) -> None:
    payload = {"studentId": "STU0004", "date": "2025-12-14", "morningPresent": True}
    created = await client.post("/api/v1/attendance", json=payload, headers=teacher_headers)
    assert created.status_code == 201
    data = created.json()["data"]
    assert data["id"] == "ATT0005"
    assert data["morningPresent"] is True
    assert data["eveningPresent"] is False
    assert data["markedBy"] == "Class Teacher"

    again = await client.post("/api/v1/attendance", json=payload, headers=teacher_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "Attendance for this student and date already exists"


@pytest.mark.asyncio
async def test_mark_attendance_for_unknown_student(client: AsyncClient, teacher_headers) -> None:
    resp = await client.post(
        "/api/v1/attendance",
        json={"studentId": "STU9999", "date": "2025-12-14"},
        headers=teacher_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid student"


@pytest.mark.asyncio
async def test_missing_date_is_rejected(client: AsyncClient, teacher_headers) -> None:
    resp = await client.post("/api/v1/attendance", json={"studentId": "STU0004"}, headers=teacher_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"


@pytest.mark.asyncio
async def test_update_flags_and_embedded_student_is_live(client: AsyncClient, admin_headers) -> None:
    resp = await client.put(
        "/api/v1/attendance/ATT0002", json={"morningPresent": True}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["morningPresent"] is True
    assert resp.json()["data"]["eveningPresent"] is True

    await client.put("/api/v1/students/STU0002", json={"name": "Priya P."}, headers=admin_headers)
    fetched = await client.get("/api/v1/attendance/ATT0002", headers=admin_headers)
    assert fetched.json()["data"]["student"]["name"] == "Priya P."


@pytest.mark.asyncio
async def test_teacher_cannot_delete_attendance(client: AsyncClient, teacher_headers, admin_headers) -> None:
    denied = await client.delete("/api/v1/attendance/ATT0001", headers=teacher_headers)
    assert denied.status_code == 403

    first = await client.delete("/api/v1/attendance/ATT0001", headers=admin_headers)
    assert first.status_code == 200
    second = await client.delete("/api/v1/attendance/ATT0001", headers=admin_headers)
    assert second.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params", [{"date": "not-a-date"}, {"dateFrom": "yesterday"}, {"dateTo": "2025-13-40"}]
)
async def test_malformed_date_filter_matches_nothing(client: AsyncClient, teacher_headers, params) -> None:
    resp = await client.get("/api/v1/attendance", params=params, headers=teacher_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": [], "count": 0}


@pytest.mark.asyncio
async def test_date_range_is_inclusive(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get(
        "/api/v1/attendance",
        params={"dateFrom": "2025-12-13", "dateTo": "2025-12-13"},
        headers=teacher_headers,
    )
    assert [a["id"] for a in resp.json()["data"]] == ["ATT0004"]
