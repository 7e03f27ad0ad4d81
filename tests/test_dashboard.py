from datetime import date

import pytest
from httpx import AsyncClient

from app.api.v1.fees.service import fee_status


@pytest.mark.asyncio
async def test_dashboard_stats_from_seed(client: AsyncClient, teacher_headers) -> None:
    resp = await client.get("/api/v1/dashboard/stats", headers=teacher_headers)
    assert resp.status_code == 200
    stats = resp.json()["data"]
    assert stats["totalStudents"] == 5
    assert stats["activeStudents"] == 4
    assert stats["studentsLeft"] == 1
    assert stats["morningShiftCount"] == 3
    assert stats["eveningShiftCount"] == 2
    assert stats["totalFeesCollected"] == 7000
    assert stats["pendingFees"] == 3500
    assert stats["pendingFeesCount"] == 2
    assert stats["overdueBooks"] == 2
    assert stats["seatTotal"] == 4
    assert stats["seatsOccupied"] == 2
    assert stats["lockerTotal"] == 2
    assert stats["lockersAssigned"] == 2


@pytest.mark.asyncio
async def test_new_admission_counts_this_month(client: AsyncClient, admin_headers) -> None:
    await client.post(
        "/api/v1/students", json={"name": "New", "enrollmentNumber": "E9", "class": "9th"}, headers=admin_headers
    )
    stats = (await client.get("/api/v1/dashboard/stats", headers=admin_headers)).json()["data"]
    assert stats["newAdmissions"] == 1
    assert stats["totalStudents"] == 6


def test_fee_status_rules() -> None:
    today = date(2025, 6, 1)
    assert fee_status(100, 100, date(2025, 1, 1), today) == "paid"
    assert fee_status(100, 40, date(2025, 5, 1), today) == "overdue"
    assert fee_status(100, 40, date(2025, 7, 1), today) == "partial"
    assert fee_status(100, 0, date(2025, 7, 1), today) == "pending"
    assert fee_status(100, 0, today, today) == "pending"
