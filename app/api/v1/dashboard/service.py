"""Headline numbers for the dashboard, computed with aggregate queries."""

from datetime import date
from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import SeatStatus, Shift, StudentStatus
from app.core.models import BookIssue, FeeStructure, Payment, Seat, Student

from .schemas import DashboardStats


async def _count(db: AsyncSession, model, *conditions) -> int:
    stmt = select(func.count()).select_from(model)
    if conditions:
        stmt = stmt.where(*conditions)
    return (await db.execute(stmt)).scalar_one() or 0


async def get_stats(db: AsyncSession, today: Optional[date] = None) -> DashboardStats:
    today = today or date.today()
    month_start = today.replace(day=1)

    fees_collected = (await db.execute(select(func.coalesce(func.sum(Payment.amount), 0)))).scalar_one()
    unpaid = FeeStructure.paid_amount < FeeStructure.amount
    pending_total = (
        await db.execute(
            select(func.coalesce(func.sum(FeeStructure.amount - FeeStructure.paid_amount), 0)).where(unpaid)
        )
    ).scalar_one()

    occupied = Seat.status == SeatStatus.OCCUPIED.value
    return DashboardStats(
        total_students=await _count(db, Student),
        active_students=await _count(db, Student, Student.status == StudentStatus.ACTIVE.value),
        new_admissions=await _count(db, Student, Student.date_of_joining >= month_start),
        students_left=await _count(db, Student, Student.status == StudentStatus.INACTIVE.value),
        morning_shift_count=await _count(db, Student, Student.shift == Shift.MORNING.value),
        evening_shift_count=await _count(db, Student, Student.shift == Shift.EVENING.value),
        total_fees_collected=float(fees_collected or 0),
        pending_fees=float(pending_total or 0),
        pending_fees_count=await _count(db, FeeStructure, unpaid),
        overdue_books=await _count(
            db, BookIssue, and_(BookIssue.return_date.is_(None), BookIssue.due_date < today)
        ),
        books_issued_today=await _count(db, BookIssue, BookIssue.issue_date == today),
        seat_total=await _count(db, Seat),
        seats_occupied=await _count(db, Seat, occupied),
        locker_total=await _count(db, Seat, Seat.has_locker.is_(True)),
        lockers_assigned=await _count(db, Seat, Seat.has_locker.is_(True), occupied),
    )
