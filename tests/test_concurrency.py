import asyncio
from collections import Counter

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import is_unique_violation


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


@pytest.mark.asyncio
async def test_concurrent_distinct_students_all_created(client: AsyncClient, admin_headers) -> None:
    payloads = [{"name": f"Student {i}", "enrollmentNumber": f"DISTINCT{i}", "class": "10"} for i in range(5)]

    responses = await asyncio.gather(
        *(client.post("/api/v1/students", json=p, headers=admin_headers) for p in payloads)
    )

    assert [r.status_code for r in responses] == [201] * 5
    ids = {r.json()["data"]["id"] for r in responses}
    assert len(ids) == 5

    listed = await client.get("/api/v1/students", params={"search": "DISTINCT"}, headers=admin_headers)
    assert listed.json()["count"] == 5


@pytest.mark.asyncio
async def test_concurrent_duplicates_only_conflict_on_the_same_key(client: AsyncClient, admin_headers) -> None:
    payloads = [
        {"name": f"Student {i}", "enrollmentNumber": f"RACE{i % 5}", "class": "10"} for i in range(20)
    ]

    responses = await asyncio.gather(
        *(client.post("/api/v1/students", json=p, headers=admin_headers) for p in payloads)
    )

    codes = Counter(r.status_code for r in responses)
    assert codes == {201: 5, 409: 15}
    created = {r.json()["data"]["enrollmentNumber"] for r in responses if r.status_code == 201}
    assert created == {f"RACE{i}" for i in range(5)}


@pytest.mark.asyncio
async def test_concurrent_attendance_for_different_students(client: AsyncClient, admin_headers) -> None:
    responses = await asyncio.gather(
        *(
            client.post(
                "/api/v1/attendance",
                json={"studentId": student_id, "date": "2025-12-20", "morningPresent": True},
                headers=admin_headers,
            )
            for student_id in ("STU0001", "STU0002", "STU0003", "STU0004")
        )
    )

    assert [r.status_code for r in responses] == [201] * 4
    assert len({r.json()["data"]["id"] for r in responses}) == 4


def test_unique_violation_matches_only_its_own_key() -> None:
    enrollment = _integrity_error("UNIQUE constraint failed: students.enrollment_number")
    primary_key = _integrity_error("UNIQUE constraint failed: students.id")
    pair = _integrity_error("UNIQUE constraint failed: attendance.student_id, attendance.date")

    assert is_unique_violation(enrollment, "students", "enrollment_number")
    assert not is_unique_violation(primary_key, "students", "enrollment_number")
    assert is_unique_violation(pair, "attendance", "student_id", "date")
    assert not is_unique_violation(pair, "attendance", "student_id")


def test_unique_violation_reads_postgres_detail() -> None:
    exc = _integrity_error(
        'duplicate key value violates unique constraint "users_email_key"\n'
        "DETAIL:  Key (email)=(a@b.com) already exists."
    )
    assert is_unique_violation(exc, "users", "email")
    assert not is_unique_violation(exc, "library_books", "isbn")
