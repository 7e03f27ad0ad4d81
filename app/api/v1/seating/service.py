"""Seating service: seat inventory and student seat assignment."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.v1.students.service import get_student_by_id, student_to_response
from app.core.enums import SeatStatus
from app.core.exceptions import ConflictError, NotFoundError, is_unique_violation
from app.core.filters import search_clause
from app.core.id_sequence import next_identifier
from app.core.models import Seat

from .schemas import SeatAssignRequest, SeatCreate, SeatResponse, SeatUpdate

logger = logging.getLogger(__name__)

ID_PREFIX = "SEAT"
DUPLICATE_SEAT = "Seat with this number already exists in this room and section"


def _to_response(s: Seat) -> SeatResponse:
    return SeatResponse(
        id=s.id,
        room=s.room,
        section=s.section,
        seat_number=s.seat_number,
        has_locker=s.has_locker,
        status=s.status,
        is_occupied=s.status == SeatStatus.OCCUPIED.value,
        occupied_by=s.occupied_by,
        student=student_to_response(s.student) if s.student else None,
        last_modified=s.last_modified,
    )


async def _load(db: AsyncSession, seat_id: str) -> Optional[Seat]:
    result = await db.execute(
        select(Seat)
        .options(selectinload(Seat.student))
        .where(Seat.id == seat_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _find_duplicate(
    db: AsyncSession, room: str, section: str, seat_number: str, exclude_seat_id: Optional[str] = None
) -> Optional[Seat]:
    stmt = select(Seat).where(
        Seat.room == room,
        Seat.section == section,
        Seat.seat_number == seat_number,
    )
    if exclude_seat_id is not None:
        stmt = stmt.where(Seat.id != exclude_seat_id)
    return (await db.execute(stmt)).scalar_one_or_none()


async def list_seats(
    db: AsyncSession,
    search: Optional[str] = None,
    room: Optional[str] = None,
    section: Optional[str] = None,
    status: Optional[str] = None,
    has_locker: Optional[bool] = None,
) -> List[SeatResponse]:
    stmt = select(Seat)
    clause = search_clause(search, Seat.seat_number, Seat.room, Seat.section)
    if clause is not None:
        stmt = stmt.where(clause)
    if room:
        stmt = stmt.where(Seat.room == room)
    if section:
        stmt = stmt.where(Seat.section == section)
    if status:
        stmt = stmt.where(Seat.status == status)
    if has_locker is not None:
        stmt = stmt.where(Seat.has_locker.is_(has_locker))
    result = await db.execute(stmt.order_by(Seat.seq))
    return [_to_response(s) for s in result.scalars().all()]


async def get_seat(db: AsyncSession, seat_id: str) -> Optional[SeatResponse]:
    obj = await _load(db, seat_id)
    return _to_response(obj) if obj else None


async def create_seat(db: AsyncSession, payload: SeatCreate) -> SeatResponse:
    if await _find_duplicate(db, payload.room, payload.section, payload.seat_number):
        raise ConflictError(DUPLICATE_SEAT)
    try:
        seat_id, seq = await next_identifier(db, ID_PREFIX)
        db.add(Seat(id=seat_id, seq=seq, **payload.model_dump()))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "seats", "room", "section", "seat_number"):
            raise
        raise ConflictError(DUPLICATE_SEAT) from e
    logger.info("Created seat %s (%s/%s/%s)", seat_id, payload.room, payload.section, payload.seat_number)
    return _to_response(await _load(db, seat_id))


async def update_seat(db: AsyncSession, seat_id: str, payload: SeatUpdate) -> SeatResponse:
    obj = await _load(db, seat_id)
    if not obj:
        raise NotFoundError("Seat not found")
    changes = payload.model_dump(exclude_unset=True)

    if "status" in changes and obj.status == SeatStatus.OCCUPIED.value:
        raise ConflictError("Release the seat before changing its status")

    room = changes.get("room", obj.room)
    section = changes.get("section", obj.section)
    seat_number = changes.get("seat_number", obj.seat_number)
    if {"room", "section", "seat_number"} & changes.keys():
        if await _find_duplicate(db, room, section, seat_number, exclude_seat_id=seat_id):
            raise ConflictError(DUPLICATE_SEAT)

    for field, value in changes.items():
        setattr(obj, field, value)
    if obj.student is not None and "seat_number" in changes:
        obj.student.seat_number = obj.seat_number
    obj.last_modified = datetime.utcnow()
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "seats", "room", "section", "seat_number"):
            raise
        raise ConflictError(DUPLICATE_SEAT) from e
    logger.info("Updated seat %s", seat_id)
    return _to_response(await _load(db, seat_id))


async def delete_seat(db: AsyncSession, seat_id: str) -> SeatResponse:
    obj = await _load(db, seat_id)
    if not obj:
        raise NotFoundError("Seat not found")
    if obj.status == SeatStatus.OCCUPIED.value:
        raise ConflictError("Seat is occupied")
    removed = _to_response(obj)
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted seat %s", seat_id)
    return removed


async def assign_seat(db: AsyncSession, seat_id: str, payload: SeatAssignRequest) -> SeatResponse:
    obj = await _load(db, seat_id)
    if not obj:
        raise NotFoundError("Seat not found")
    student = await get_student_by_id(db, payload.student_id)
    if not student:
        raise NotFoundError("Student not found")
    if obj.status != SeatStatus.AVAILABLE.value:
        raise ConflictError(f"Seat is {obj.status}")
    held = (await db.execute(select(Seat.id).where(Seat.occupied_by == student.id))).scalar_one_or_none()
    if held:
        raise ConflictError(f"Student already has seat {held}")

    obj.status = SeatStatus.OCCUPIED.value
    obj.occupied_by = student.id
    obj.last_modified = datetime.utcnow()
    student.seat_number = obj.seat_number
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "seats", "occupied_by"):
            raise
        raise ConflictError("Student already has a seat") from e
    logger.info("Assigned seat %s to %s", seat_id, student.id)
    return _to_response(await _load(db, seat_id))


async def release_seat(db: AsyncSession, seat_id: str) -> SeatResponse:
    obj = await _load(db, seat_id)
    if not obj:
        raise NotFoundError("Seat not found")
    if obj.status != SeatStatus.OCCUPIED.value:
        raise ConflictError("Seat is not occupied")

    if obj.student is not None:
        obj.student.seat_number = None
    released_from = obj.occupied_by
    obj.status = SeatStatus.AVAILABLE.value
    obj.occupied_by = None
    obj.last_modified = datetime.utcnow()
    await db.commit()
    logger.info("Released seat %s from %s", seat_id, released_from)
    return _to_response(await _load(db, seat_id))
