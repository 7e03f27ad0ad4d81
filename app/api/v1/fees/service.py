"""Fees service: categories, per-student fee structures and payments."""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, false, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.v1.students.service import get_student_by_id
from app.core.enums import FeeStatus
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, ServiceError, is_unique_violation
from app.core.id_sequence import next_identifier
from app.core.models import FeeCategory, FeeStructure, Payment

from .receipt import generate_receipt_number
from .schemas import (
    FeeCategoryCreate,
    FeeCategoryResponse,
    FeeStructureCreate,
    FeeStructureResponse,
    PaymentCreate,
    PaymentResponse,
)

logger = logging.getLogger(__name__)

CATEGORY_PREFIX = "FEE"
STRUCTURE_PREFIX = "FS"
PAYMENT_PREFIX = "PAY"
RECEIPT_ATTEMPTS = 5


def _to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


def fee_status(amount, paid_amount, due_date: date, today: Optional[date] = None) -> str:
    """paid once fully covered; otherwise overdue past the due date, partial or pending."""
    amount = _to_decimal(amount)
    paid_amount = _to_decimal(paid_amount)
    if paid_amount >= amount:
        return FeeStatus.PAID.value
    if due_date < (today or date.today()):
        return FeeStatus.OVERDUE.value
    if paid_amount > 0:
        return FeeStatus.PARTIAL.value
    return FeeStatus.PENDING.value


def _status_clause(status_value: str, today: date):
    fully_paid = FeeStructure.paid_amount >= FeeStructure.amount
    if status_value == FeeStatus.PAID.value:
        return fully_paid
    if status_value == FeeStatus.OVERDUE.value:
        return and_(~fully_paid, FeeStructure.due_date < today)
    if status_value == FeeStatus.PARTIAL.value:
        return and_(~fully_paid, FeeStructure.due_date >= today, FeeStructure.paid_amount > 0)
    if status_value == FeeStatus.PENDING.value:
        return and_(~fully_paid, FeeStructure.due_date >= today, FeeStructure.paid_amount <= 0)
    return false()


def _category_to_response(c: FeeCategory) -> FeeCategoryResponse:
    return FeeCategoryResponse.model_validate(c)


def _structure_to_response(fs: FeeStructure, today: Optional[date] = None) -> FeeStructureResponse:
    amount = _to_decimal(fs.amount)
    paid = _to_decimal(fs.paid_amount)
    return FeeStructureResponse(
        id=fs.id,
        student_id=fs.student_id,
        student_name=fs.student.name if fs.student else None,
        category_id=fs.category_id,
        category=_category_to_response(fs.category) if fs.category else None,
        amount=float(amount),
        due_date=fs.due_date,
        status=fee_status(amount, paid, fs.due_date, today),
        paid_amount=float(paid),
        remaining_amount=float(max(Decimal("0"), amount - paid)),
    )


def _payment_to_response(p: Payment) -> PaymentResponse:
    return PaymentResponse(
        id=p.id,
        student_id=p.student_id,
        fee_structure_id=p.fee_structure_id,
        amount=float(_to_decimal(p.amount)),
        payment_date=p.payment_date,
        payment_method=p.payment_method,
        receipt_number=p.receipt_number,
        notes=p.notes,
        received_by=p.received_by,
        created_at=p.created_at,
    )


async def _load_structure(db: AsyncSession, structure_id: str) -> Optional[FeeStructure]:
    result = await db.execute(
        select(FeeStructure)
        .options(selectinload(FeeStructure.student), selectinload(FeeStructure.category))
        .where(FeeStructure.id == structure_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# --- Fee Category ---
async def list_categories(db: AsyncSession) -> List[FeeCategoryResponse]:
    result = await db.execute(select(FeeCategory).order_by(FeeCategory.seq))
    return [_category_to_response(c) for c in result.scalars().all()]


async def create_category(db: AsyncSession, payload: FeeCategoryCreate) -> FeeCategoryResponse:
    name = payload.name.strip()
    existing = await db.execute(select(FeeCategory.id).where(FeeCategory.name == name))
    if existing.scalar_one_or_none():
        raise ConflictError("Fee category with this name already exists")
    try:
        category_id, seq = await next_identifier(db, CATEGORY_PREFIX)
        obj = FeeCategory(
            id=category_id,
            seq=seq,
            name=name,
            description=payload.description,
            amount=_to_decimal(payload.amount),
            is_recurring=payload.is_recurring,
            due_day=payload.due_day,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "fee_categories", "name"):
            raise
        raise ConflictError("Fee category with this name already exists") from e
    logger.info("Created fee category %s (%s)", obj.id, obj.name)
    return _category_to_response(obj)


# --- Fee Structure ---
async def list_structures(
    db: AsyncSession,
    student_id: Optional[str] = None,
    status: Optional[str] = None,
) -> List[FeeStructureResponse]:
    today = date.today()
    stmt = select(FeeStructure).options(selectinload(FeeStructure.student))
    if student_id:
        stmt = stmt.where(FeeStructure.student_id == student_id)
    if status:
        stmt = stmt.where(_status_clause(status, today))
    result = await db.execute(stmt.order_by(FeeStructure.seq))
    return [_structure_to_response(fs, today) for fs in result.scalars().all()]


async def get_structure(db: AsyncSession, structure_id: str) -> Optional[FeeStructureResponse]:
    obj = await _load_structure(db, structure_id)
    return _structure_to_response(obj) if obj else None


async def create_structure(db: AsyncSession, payload: FeeStructureCreate) -> FeeStructureResponse:
    if not await get_student_by_id(db, payload.student_id):
        raise NotFoundError("Student not found")
    category = await db.get(FeeCategory, payload.category_id)
    if not category:
        raise NotFoundError("Fee category not found")

    duplicate = await db.execute(
        select(FeeStructure.id).where(
            FeeStructure.student_id == payload.student_id,
            FeeStructure.category_id == payload.category_id,
            FeeStructure.due_date == payload.due_date,
        )
    )
    if duplicate.scalar_one_or_none():
        raise ConflictError("Fee for this student, category and due date already exists")

    amount = _to_decimal(payload.amount) if payload.amount is not None else _to_decimal(category.amount)
    try:
        structure_id, seq = await next_identifier(db, STRUCTURE_PREFIX)
        db.add(
            FeeStructure(
                id=structure_id,
                seq=seq,
                student_id=payload.student_id,
                category_id=payload.category_id,
                amount=amount,
                due_date=payload.due_date,
                paid_amount=Decimal("0"),
            )
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "fee_structures", "student_id", "category_id", "due_date"):
            raise
        raise ConflictError("Fee for this student, category and due date already exists") from e
    logger.info("Assigned fee %s (%s) to %s", structure_id, category.name, payload.student_id)
    return _structure_to_response(await _load_structure(db, structure_id))


# --- Payment ---
async def _unused_receipt_number(db: AsyncSession) -> str:
    for _ in range(RECEIPT_ATTEMPTS):
        receipt_number = generate_receipt_number()
        taken = await db.execute(select(Payment.id).where(Payment.receipt_number == receipt_number))
        if not taken.scalar_one_or_none():
            return receipt_number
    raise ServiceError("Could not allocate a receipt number")


async def record_payment(
    db: AsyncSession,
    payload: PaymentCreate,
    received_by: Optional[str],
) -> PaymentResponse:
    structure = await db.get(FeeStructure, payload.fee_structure_id)
    if not structure:
        raise NotFoundError("Fee structure not found")

    amount = _to_decimal(payload.amount)
    remaining = _to_decimal(structure.amount) - _to_decimal(structure.paid_amount)
    if amount > remaining:
        raise BadRequestError("Payment amount cannot exceed remaining balance")

    # Conditional increment so concurrent payments cannot overshoot the amount due
    applied = await db.execute(
        update(FeeStructure)
        .where(
            FeeStructure.id == structure.id,
            FeeStructure.paid_amount + amount <= FeeStructure.amount,
        )
        .values(paid_amount=FeeStructure.paid_amount + amount)
        .execution_options(synchronize_session=False)
    )
    if applied.rowcount == 0:
        await db.rollback()
        raise BadRequestError("Payment amount cannot exceed remaining balance")

    receipt_number = await _unused_receipt_number(db)
    try:
        payment_id, seq = await next_identifier(db, PAYMENT_PREFIX)
        pt = Payment(
            id=payment_id,
            seq=seq,
            student_id=structure.student_id,
            fee_structure_id=structure.id,
            amount=amount,
            payment_date=payload.payment_date or date.today(),
            payment_method=payload.payment_method,
            receipt_number=receipt_number,
            notes=(payload.notes or "").strip() or None,
            received_by=received_by,
        )
        db.add(pt)
        await db.commit()
        await db.refresh(pt)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "payments", "receipt_number"):
            raise
        raise ConflictError("Receipt number already used, please retry") from e
    logger.info(
        "Recorded payment %s (%s) of %s against %s", pt.id, pt.receipt_number, amount, structure.id
    )
    return _payment_to_response(pt)


async def list_payments(
    db: AsyncSession,
    student_id: Optional[str] = None,
    fee_structure_id: Optional[str] = None,
) -> List[PaymentResponse]:
    stmt = select(Payment)
    if student_id:
        stmt = stmt.where(Payment.student_id == student_id)
    if fee_structure_id:
        stmt = stmt.where(Payment.fee_structure_id == fee_structure_id)
    result = await db.execute(stmt.order_by(Payment.seq))
    return [_payment_to_response(p) for p in result.scalars().all()]
