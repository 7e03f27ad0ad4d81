import re

import pytest
from httpx import AsyncClient


async def _new_structure(client: AsyncClient, headers) -> dict:
    resp = await client.post(
        "/api/v1/fees/structures",
        json={"studentId": "STU0004", "categoryId": "FEE0003", "dueDate": "2099-01-05"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.mark.asyncio
async def test_structure_defaults_to_category_amount(client: AsyncClient, accountant_headers) -> None:
    fs = await _new_structure(client, accountant_headers)
    assert fs["id"] == "FS0004"
    assert fs["amount"] == 300
    assert fs["paidAmount"] == 0
    assert fs["remainingAmount"] == 300
    assert fs["status"] == "pending"
    assert fs["studentName"] == "Sneha Reddy"
    assert fs["category"]["name"] == "Locker Fee"


@pytest.mark.asyncio
async def test_duplicate_structure_and_unknown_references(client: AsyncClient, accountant_headers) -> None:
    await _new_structure(client, accountant_headers)
    again = await client.post(
        "/api/v1/fees/structures",
        json={"studentId": "STU0004", "categoryId": "FEE0003", "dueDate": "2099-01-05"},
        headers=accountant_headers,
    )
    assert again.status_code == 409

    unknown = await client.post(
        "/api/v1/fees/structures",
        json={"studentId": "STU0004", "categoryId": "FEE9999", "dueDate": "2099-01-05"},
        headers=accountant_headers,
    )
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_partial_then_full_payment(client: AsyncClient, accountant_headers) -> None:
    fs = await _new_structure(client, accountant_headers)

    paid = await client.post(
        "/api/v1/fees/payments",
        json={"feeStructureId": fs["id"], "amount": 100, "paymentMethod": "cash"},
        headers=accountant_headers,
    )
    assert paid.status_code == 201
    payment = paid.json()["data"]
    assert re.fullmatch(r"REC\d{6}[A-Z0-9]{3}", payment["receiptNumber"])
    assert payment["studentId"] == "STU0004"
    assert payment["receivedBy"] == "Accounts Officer"

    partial = (await client.get(f"/api/v1/fees/structures/{fs['id']}", headers=accountant_headers)).json()["data"]
    assert partial["status"] == "partial"
    assert partial["paidAmount"] == 100
    assert partial["remainingAmount"] == 200

    too_much = await client.post(
        "/api/v1/fees/payments",
        json={"feeStructureId": fs["id"], "amount": 250, "paymentMethod": "card"},
        headers=accountant_headers,
    )
    assert too_much.status_code == 400
    assert too_much.json()["error"] == "Payment amount cannot exceed remaining balance"

    rest = await client.post(
        "/api/v1/fees/payments",
        json={"feeStructureId": fs["id"], "amount": 200, "paymentMethod": "online"},
        headers=accountant_headers,
    )
    assert rest.status_code == 201
    done = (await client.get(f"/api/v1/fees/structures/{fs['id']}", headers=accountant_headers)).json()["data"]
    assert done["status"] == "paid"
    assert done["remainingAmount"] == 0

    history = await client.get(
        "/api/v1/fees/payments", params={"feeStructureId": fs["id"]}, headers=accountant_headers
    )
    assert history.json()["count"] == 2


@pytest.mark.asyncio
async def test_payment_validation(client: AsyncClient, accountant_headers) -> None:
    zero = await client.post(
        "/api/v1/fees/payments",
        json={"feeStructureId": "FS0002", "amount": 0, "paymentMethod": "cash"},
        headers=accountant_headers,
    )
    assert zero.status_code == 400

    unknown = await client.post(
        "/api/v1/fees/payments",
        json={"feeStructureId": "FS9999", "amount": 10, "paymentMethod": "cash"},
        headers=accountant_headers,
    )
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_status_filter(client: AsyncClient, accountant_headers) -> None:
    paid = await client.get("/api/v1/fees/structures", params={"status": "paid"}, headers=accountant_headers)
    assert [f["id"] for f in paid.json()["data"]] == ["FS0001"]

    overdue = await client.get("/api/v1/fees/structures", params={"status": "overdue"}, headers=accountant_headers)
    assert [f["id"] for f in overdue.json()["data"]] == ["FS0002", "FS0003"]

    mine = await client.get(
        "/api/v1/fees/structures", params={"studentId": "STU0002"}, headers=accountant_headers
    )
    assert [f["id"] for f in mine.json()["data"]] == ["FS0002"]


@pytest.mark.asyncio
async def test_categories(client: AsyncClient, admin_headers) -> None:
    created = await client.post(
        "/api/v1/fees/categories",
        json={"name": "Exam Fee", "amount": 750, "isRecurring": False},
        headers=admin_headers,
    )
    assert created.status_code == 201
    assert created.json()["data"]["id"] == "FEE0004"

    duplicate = await client.post(
        "/api/v1/fees/categories", json={"name": "Exam Fee", "amount": 100}, headers=admin_headers
    )
    assert duplicate.status_code == 409

    listed = await client.get("/api/v1/fees/categories", headers=admin_headers)
    assert listed.json()["count"] == 4


@pytest.mark.asyncio
async def test_teacher_has_no_fee_access(client: AsyncClient, teacher_headers) -> None:
    assert (await client.get("/api/v1/fees/structures", headers=teacher_headers)).status_code == 403


@pytest.mark.asyncio
async def test_unknown_fee_status_matches_nothing(client: AsyncClient, accountant_headers) -> None:
    resp = await client.get("/api/v1/fees/structures", params={"status": "waived"}, headers=accountant_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": [], "count": 0}
