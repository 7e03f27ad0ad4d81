import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, is_unique_violation
from app.core.filters import search_clause
from app.core.id_sequence import next_identifier
from app.core.models import BookIssue, Seat, Student

from .schemas import StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)

ID_PREFIX = "STU"


def student_to_response(s: Student) -> StudentResponse:
    return StudentResponse(
        id=s.id,
        enrollment_number=s.enrollment_number,
        name=s.name,
        class_name=s.class_name,
        batch=s.batch,
        guardian_name=s.guardian_name,
        guardian_phone=s.guardian_phone,
        phone=s.phone,
        email=s.email,
        shift=s.shift,
        seat_number=s.seat_number,
        locker_assigned=s.locker_assigned,
        status=s.status,
        date_of_joining=s.date_of_joining,
        date_of_exit=s.date_of_exit,
        address=s.address,
        emergency_contact=s.emergency_contact,
        created_at=s.created_at,
    )


def _duplicate_message() -> str:
    return "Student with this enrollment number already exists"


async def _find_by_enrollment(
    db: AsyncSession,
    enrollment_number: str,
    exclude_student_id: Optional[str] = None,
) -> Optional[Student]:
    stmt = select(Student).where(Student.enrollment_number == enrollment_number)
    if exclude_student_id is not None:
        stmt = stmt.where(Student.id != exclude_student_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_student_by_id(db: AsyncSession, student_id: str) -> Optional[Student]:
    return await db.get(Student, student_id)


async def list_students(
    db: AsyncSession,
    search: Optional[str] = None,
    class_name: Optional[str] = None,
    shift: Optional[str] = None,
    status: Optional[str] = None,
) -> List[StudentResponse]:
    stmt = select(Student)
    clause = search_clause(search, Student.name, Student.enrollment_number, Student.class_name)
    if clause is not None:
        stmt = stmt.where(clause)
    if class_name:
        stmt = stmt.where(Student.class_name == class_name)
    if shift:
        stmt = stmt.where(Student.shift == shift)
    if status:
        stmt = stmt.where(Student.status == status)
    result = await db.execute(stmt.order_by(Student.seq))
    return [student_to_response(s) for s in result.scalars().all()]


async def get_student(db: AsyncSession, student_id: str) -> Optional[StudentResponse]:
    obj = await get_student_by_id(db, student_id)
    return student_to_response(obj) if obj else None


async def create_student(db: AsyncSession, payload: StudentCreate) -> StudentResponse:
    if await _find_by_enrollment(db, payload.enrollment_number):
        raise ConflictError(_duplicate_message())

    data = payload.model_dump()
    data["date_of_joining"] = payload.date_of_joining or date.today()
    try:
        student_id, seq = await next_identifier(db, ID_PREFIX)
        obj = Student(id=student_id, seq=seq, **data)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "students", "enrollment_number"):
            raise
        raise ConflictError(_duplicate_message()) from e

    logger.info("Created student %s (%s)", obj.id, obj.enrollment_number)
    return student_to_response(obj)


async def update_student(
    db: AsyncSession,
    student_id: str,
    payload: StudentUpdate,
) -> StudentResponse:
    obj = await get_student_by_id(db, student_id)
    if not obj:
        raise NotFoundError("Student not found")

    changes = payload.model_dump(exclude_unset=True)
    new_enrollment = changes.get("enrollment_number")
    if new_enrollment and await _find_by_enrollment(db, new_enrollment, exclude_student_id=student_id):
        raise ConflictError(_duplicate_message())

    for field, value in changes.items():
        setattr(obj, field, value)
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "students", "enrollment_number"):
            raise
        raise ConflictError(_duplicate_message()) from e

    logger.info("Updated student %s: %s", obj.id, ", ".join(sorted(changes)) or "no changes")
    return student_to_response(obj)


async def delete_student(db: AsyncSession, student_id: str) -> StudentResponse:
    """Remove a student. Attendance and fee records go with it; the seat is freed."""
    obj = await get_student_by_id(db, student_id)
    if not obj:
        raise NotFoundError("Student not found")

    open_issues = (
        await db.execute(
            select(func.count(BookIssue.id)).where(
                BookIssue.student_id == student_id,
                BookIssue.return_date.is_(None),
            )
        )
    ).scalar_one()
    if open_issues:
        raise ConflictError("Student has library books that are not returned")

    seat = (
        await db.execute(select(Seat).where(Seat.occupied_by == student_id))
    ).scalar_one_or_none()
    if seat is not None:
        seat.occupied_by = None
        seat.status = "available"

    removed = student_to_response(obj)
    await db.delete(obj)
    await db.commit()

    logger.info("Deleted student %s", student_id)
    return removed
