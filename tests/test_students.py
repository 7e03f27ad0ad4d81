import re

import pytest
from httpx import AsyncClient


NEW_STUDENT = {"name": "A", "enrollmentNumber": "E1", "class": "10"}


async def _list(client: AsyncClient, headers, **params):
    resp = await client.get("/api/v1/students", params=params, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["count"] == len(body["data"])
    return body["data"]


@pytest.mark.asyncio
async def test_create_student_assigns_id_and_defaults(client: AsyncClient, admin_headers) -> None:
    resp = await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert re.fullmatch(r"STU\d{4}", data["id"])
    assert data["status"] == "active"
    assert data["shift"] == "morning"
    assert data["class"] == "10"
    assert data["enrollmentNumber"] == "E1"
    assert data["dateOfJoining"]


@pytest.mark.asyncio
async def test_duplicate_enrollment_number_conflicts(client: AsyncClient, admin_headers) -> None:
    first = await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)
    assert first.status_code == 201
    before = await _list(client, admin_headers)

    again = await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)
    assert again.status_code == 409
    assert again.json() == {
        "success": False,
        "error": "Student with this enrollment number already exists",
    }
    assert len(await _list(client, admin_headers)) == len(before)


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "enrollmentNumber", "class"])
async def test_missing_required_field_is_rejected(client: AsyncClient, admin_headers, missing: str) -> None:
    before = await _list(client, admin_headers)
    payload = {k: v for k, v in NEW_STUDENT.items() if k != missing}

    resp = await client.post("/api/v1/students", json=payload, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Missing required fields"}
    assert len(await _list(client, admin_headers)) == len(before)


@pytest.mark.asyncio
async def test_empty_required_field_counts_as_missing(client: AsyncClient, admin_headers) -> None:
    resp = await client.post("/api/v1/students", json={**NEW_STUDENT, "name": ""}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"


@pytest.mark.asyncio
async def test_update_unknown_student_is_404(client: AsyncClient, admin_headers) -> None:
    resp = await client.put("/api/v1/students/STU9999", json={"name": "X"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_update_never_changes_id(client: AsyncClient, admin_headers) -> None:
    resp = await client.put(
        "/api/v1/students/STU0001",
        json={"id": "STU0500", "name": "Rahul S."},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == "STU0001"
    assert data["name"] == "Rahul S."
    assert (await client.get("/api/v1/students/STU0500", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_update_to_taken_enrollment_number_conflicts(client: AsyncClient, admin_headers) -> None:
    resp = await client.put(
        "/api/v1/students/STU0001",
        json={"enrollmentNumber": "ENR2024002"},
        headers=admin_headers,
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_delete_twice(client: AsyncClient, admin_headers) -> None:
    created = await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)
    student_id = created.json()["data"]["id"]

    first = await client.delete(f"/api/v1/students/{student_id}", headers=admin_headers)
    assert first.status_code == 200
    assert first.json()["data"]["id"] == student_id
    assert first.json()["message"] == "Student deleted successfully"

    second = await client.delete(f"/api/v1/students/{student_id}", headers=admin_headers)
    assert second.status_code == 404


@pytest.mark.asyncio
async def test_delete_student_with_book_out_conflicts(client: AsyncClient, admin_headers) -> None:
    # STU0001 still holds ISS0001
    resp = await client.delete("/api/v1/students/STU0001", headers=admin_headers)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_ids_are_not_reused_after_delete(client: AsyncClient, admin_headers) -> None:
    first = await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)
    first_id = first.json()["data"]["id"]
    await client.delete(f"/api/v1/students/{first_id}", headers=admin_headers)

    second = await client.post(
        "/api/v1/students", json={**NEW_STUDENT, "enrollmentNumber": "E2"}, headers=admin_headers
    )
    assert second.json()["data"]["id"] != first_id


@pytest.mark.asyncio
async def test_round_trip_read_one(client: AsyncClient, admin_headers) -> None:
    created = (await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)).json()["data"]
    fetched = await client.get(f"/api/v1/students/{created['id']}", headers=admin_headers)
    assert fetched.status_code == 200
    assert fetched.json()["data"] == created


@pytest.mark.asyncio
async def test_filters_are_subsets_and_compose_as_intersection(client: AsyncClient, admin_headers) -> None:
    everyone = {s["id"] for s in await _list(client, admin_headers)}
    tenth = {s["id"] for s in await _list(client, admin_headers, **{"class": "10th"})}
    evening = {s["id"] for s in await _list(client, admin_headers, shift="evening")}
    both = {s["id"] for s in await _list(client, admin_headers, **{"class": "10th", "shift": "evening"})}

    assert tenth <= everyone
    assert evening <= everyone
    assert both == tenth & evening
    assert both == {"STU0003"}


@pytest.mark.asyncio
async def test_search_is_case_insensitive(client: AsyncClient, admin_headers) -> None:
    found = await _list(client, admin_headers, search="PRIYA")
    assert [s["id"] for s in found] == ["STU0002"]
    assert await _list(client, admin_headers, search="nobody-by-this-name") == []


@pytest.mark.asyncio
async def test_teacher_can_read_but_not_create(client: AsyncClient, teacher_headers) -> None:
    assert (await client.get("/api/v1/students", headers=teacher_headers)).status_code == 200
    resp = await client.post("/api/v1/students", json=NEW_STUDENT, headers=teacher_headers)
    assert resp.status_code == 403
    assert resp.json() == {"success": False, "error": "Insufficient permissions"}


@pytest.mark.asyncio
async def test_delete_frees_seat_and_removes_attendance_and_fees(client: AsyncClient, admin_headers) -> None:
    created = await client.post("/api/v1/students", json=NEW_STUDENT, headers=admin_headers)
    student_id = created.json()["data"]["id"]

    assigned = await client.post(
        "/api/v1/seating/seats/SEAT0002/assign", json={"studentId": student_id}, headers=admin_headers
    )
    assert assigned.status_code == 200, assigned.text
    marked = await client.post(
        "/api/v1/attendance",
        json={"studentId": student_id, "date": "2025-12-15", "morningPresent": True},
        headers=admin_headers,
    )
    assert marked.status_code == 201, marked.text
    fee = await client.post(
        "/api/v1/fees/structures",
        json={"studentId": student_id, "categoryId": "FEE0001", "dueDate": "2026-01-05"},
        headers=admin_headers,
    )
    assert fee.status_code == 201, fee.text

    resp = await client.delete(f"/api/v1/students/{student_id}", headers=admin_headers)
    assert resp.status_code == 200

    seat = (await client.get("/api/v1/seating/seats/SEAT0002", headers=admin_headers)).json()["data"]
    assert seat["status"] == "available"
    assert "occupiedBy" not in seat
    attendance = await client.get("/api/v1/attendance", params={"studentId": student_id}, headers=admin_headers)
    assert attendance.json()["data"] == []
    fees = await client.get("/api/v1/fees/structures", params={"studentId": student_id}, headers=admin_headers)
    assert fees.json()["data"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"shift": "night"}, {"status": "graduated"}, {"class": "no-such-class"}])
async def test_unmatched_filter_value_gives_empty_list(client: AsyncClient, admin_headers, params) -> None:
    resp = await client.get("/api/v1/students", params=params, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": [], "count": 0}
