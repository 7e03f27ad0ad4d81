"""Attendance service: one record per student per day, student joined on every read."""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.v1.students.service import get_student_by_id, student_to_response
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, is_unique_violation
from app.core.filters import parse_date_filter, search_clause
from app.core.id_sequence import next_identifier
from app.core.models import Attendance, Student

from .schemas import AttendanceCreate, AttendanceResponse, AttendanceUpdate

logger = logging.getLogger(__name__)

ID_PREFIX = "ATT"
DUPLICATE_MESSAGE = "Attendance for this student and date already exists"


def _to_response(a: Attendance) -> AttendanceResponse:
    return AttendanceResponse(
        id=a.id,
        student_id=a.student_id,
        student=student_to_response(a.student) if a.student else None,
        date=a.date,
        morning_present=a.morning_present,
        evening_present=a.evening_present,
        marked_by=a.marked_by,
        marked_at=a.marked_at,
    )


async def _load(db: AsyncSession, attendance_id: str) -> Optional[Attendance]:
    result = await db.execute(
        select(Attendance)
        .options(selectinload(Attendance.student))
        .where(Attendance.id == attendance_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_attendance(
    db: AsyncSession,
    search: Optional[str] = None,
    on_date: Optional[str] = None,
    student_id: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> List[AttendanceResponse]:
    try:
        day, start, end = (parse_date_filter(v) for v in (on_date, date_from, date_to))
    except ValueError:
        return []

    stmt = select(Attendance).join(Student, Attendance.student_id == Student.id)
    if search:
        stmt = stmt.where(
            or_(search_clause(search, Student.name), search_clause(search, Attendance.student_id))
        )
    if day is not None:
        stmt = stmt.where(Attendance.date == day)
    if student_id:
        stmt = stmt.where(Attendance.student_id == student_id)
    if start is not None:
        stmt = stmt.where(Attendance.date >= start)
    if end is not None:
        stmt = stmt.where(Attendance.date <= end)
    result = await db.execute(stmt.order_by(Attendance.seq))
    return [_to_response(a) for a in result.scalars().all()]


async def get_attendance(db: AsyncSession, attendance_id: str) -> Optional[AttendanceResponse]:
    obj = await _load(db, attendance_id)
    return _to_response(obj) if obj else None


async def mark_attendance(
    db: AsyncSession,
    payload: AttendanceCreate,
    marked_by: str,
) -> AttendanceResponse:
    if not await get_student_by_id(db, payload.student_id):
        raise BadRequestError("Invalid student")

    existing = await db.execute(
        select(Attendance.id).where(
            Attendance.student_id == payload.student_id,
            Attendance.date == payload.date,
        )
    )
    if existing.scalar_one_or_none():
        raise ConflictError(DUPLICATE_MESSAGE)

    try:
        attendance_id, seq = await next_identifier(db, ID_PREFIX)
        db.add(
            Attendance(
                id=attendance_id,
                seq=seq,
                student_id=payload.student_id,
                date=payload.date,
                morning_present=payload.morning_present,
                evening_present=payload.evening_present,
                marked_by=marked_by,
                marked_at=datetime.now(timezone.utc),
            )
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "attendance", "student_id", "date"):
            raise
        raise ConflictError(DUPLICATE_MESSAGE) from e

    logger.info("Marked attendance %s for %s on %s", attendance_id, payload.student_id, payload.date)
    return _to_response(await _load(db, attendance_id))


async def update_attendance(
    db: AsyncSession,
    attendance_id: str,
    payload: AttendanceUpdate,
    marked_by: str,
) -> AttendanceResponse:
    obj = await _load(db, attendance_id)
    if not obj:
        raise NotFoundError("Attendance record not found")
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(obj, field, value)
    if changes:
        obj.marked_by = marked_by
        obj.marked_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Updated attendance %s", attendance_id)
    return _to_response(await _load(db, attendance_id))


async def delete_attendance(db: AsyncSession, attendance_id: str) -> AttendanceResponse:
    obj = await _load(db, attendance_id)
    if not obj:
        raise NotFoundError("Attendance record not found")
    removed = _to_response(obj)
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted attendance %s", attendance_id)
    return removed
