"""Library service: book catalogue and issue/return circulation."""

import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import and_, false, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.v1.students.service import get_student_by_id, student_to_response
from app.core.config import settings
from app.core.enums import BookIssueStatus
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, is_unique_violation
from app.core.filters import search_clause
from app.core.id_sequence import next_identifier
from app.core.models import BookIssue, LibraryBook

from .fines import calculate_fine, issue_status
from .schemas import (
    BookCreate,
    BookIssueCreate,
    BookIssueResponse,
    BookResponse,
    BookReturnRequest,
    BookUpdate,
)

logger = logging.getLogger(__name__)

BOOK_PREFIX = "BK"
ISSUE_PREFIX = "ISS"
DUPLICATE_ISBN = "Book with this ISBN already exists"


def _book_to_response(b: LibraryBook) -> BookResponse:
    return BookResponse.model_validate(b)


def _issue_to_response(i: BookIssue, today: Optional[date] = None) -> BookIssueResponse:
    fine = i.fine_amount if i.return_date is not None else calculate_fine(i.due_date, today=today)
    return BookIssueResponse(
        id=i.id,
        book_id=i.book_id,
        book=_book_to_response(i.book) if i.book else None,
        student_id=i.student_id,
        student=student_to_response(i.student) if i.student else None,
        issue_date=i.issue_date,
        due_date=i.due_date,
        return_date=i.return_date,
        fine_amount=fine,
        status=issue_status(i.due_date, i.return_date, today),
        issued_by=i.issued_by,
        returned_by=i.returned_by,
    )


async def _find_by_isbn(
    db: AsyncSession, isbn: str, exclude_book_id: Optional[str] = None
) -> Optional[LibraryBook]:
    stmt = select(LibraryBook).where(LibraryBook.isbn == isbn)
    if exclude_book_id is not None:
        stmt = stmt.where(LibraryBook.id != exclude_book_id)
    return (await db.execute(stmt)).scalar_one_or_none()


async def _load_issue(db: AsyncSession, issue_id: str) -> Optional[BookIssue]:
    result = await db.execute(
        select(BookIssue)
        .options(selectinload(BookIssue.book), selectinload(BookIssue.student))
        .where(BookIssue.id == issue_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# --- Books ---
async def list_books(
    db: AsyncSession,
    search: Optional[str] = None,
    category: Optional[str] = None,
    available: Optional[bool] = None,
) -> List[BookResponse]:
    stmt = select(LibraryBook)
    clause = search_clause(search, LibraryBook.title, LibraryBook.author, LibraryBook.isbn)
    if clause is not None:
        stmt = stmt.where(clause)
    if category:
        stmt = stmt.where(LibraryBook.category == category)
    if available is True:
        stmt = stmt.where(LibraryBook.available_copies > 0)
    elif available is False:
        stmt = stmt.where(LibraryBook.available_copies == 0)
    result = await db.execute(stmt.order_by(LibraryBook.seq))
    return [_book_to_response(b) for b in result.scalars().all()]


async def get_book(db: AsyncSession, book_id: str) -> Optional[BookResponse]:
    obj = await db.get(LibraryBook, book_id)
    return _book_to_response(obj) if obj else None


async def create_book(db: AsyncSession, payload: BookCreate) -> BookResponse:
    isbn = payload.isbn.strip()
    if await _find_by_isbn(db, isbn):
        raise ConflictError(DUPLICATE_ISBN)
    data = payload.model_dump()
    data["isbn"] = isbn
    try:
        book_id, seq = await next_identifier(db, BOOK_PREFIX)
        obj = LibraryBook(id=book_id, seq=seq, available_copies=payload.total_copies, **data)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "library_books", "isbn"):
            raise
        raise ConflictError(DUPLICATE_ISBN) from e
    logger.info("Added book %s (%s), %d copies", obj.id, obj.isbn, obj.total_copies)
    return _book_to_response(obj)


async def update_book(db: AsyncSession, book_id: str, payload: BookUpdate) -> BookResponse:
    obj = await db.get(LibraryBook, book_id)
    if not obj:
        raise NotFoundError("Book not found")

    changes = payload.model_dump(exclude_unset=True)
    if "isbn" in changes:
        changes["isbn"] = changes["isbn"].strip()
        if await _find_by_isbn(db, changes["isbn"], exclude_book_id=book_id):
            raise ConflictError(DUPLICATE_ISBN)
    if "total_copies" in changes:
        delta = changes["total_copies"] - obj.total_copies
        new_available = obj.available_copies + delta
        if new_available < 0:
            raise BadRequestError("Cannot reduce total copies below the number of issued copies")
        obj.available_copies = new_available

    for field, value in changes.items():
        setattr(obj, field, value)
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "library_books", "isbn"):
            raise
        raise ConflictError(DUPLICATE_ISBN) from e
    logger.info("Updated book %s", book_id)
    return _book_to_response(obj)


async def delete_book(db: AsyncSession, book_id: str) -> BookResponse:
    obj = await db.get(LibraryBook, book_id)
    if not obj:
        raise NotFoundError("Book not found")
    if obj.available_copies < obj.total_copies:
        raise ConflictError("Book has copies that are not returned")
    removed = _book_to_response(obj)
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted book %s", book_id)
    return removed


# --- Issues ---
def _status_clause(status_value: str, today: date):
    if status_value == BookIssueStatus.RETURNED.value:
        return BookIssue.return_date.is_not(None)
    if status_value == BookIssueStatus.OVERDUE.value:
        return and_(BookIssue.return_date.is_(None), BookIssue.due_date < today)
    if status_value == BookIssueStatus.ISSUED.value:
        return and_(BookIssue.return_date.is_(None), BookIssue.due_date >= today)
    return false()


async def list_issues(
    db: AsyncSession,
    student_id: Optional[str] = None,
    book_id: Optional[str] = None,
    status: Optional[str] = None,
) -> List[BookIssueResponse]:
    today = date.today()
    stmt = select(BookIssue)
    if student_id:
        stmt = stmt.where(BookIssue.student_id == student_id)
    if book_id:
        stmt = stmt.where(BookIssue.book_id == book_id)
    if status:
        stmt = stmt.where(_status_clause(status, today))
    result = await db.execute(stmt.order_by(BookIssue.seq))
    return [_issue_to_response(i, today) for i in result.scalars().all()]


async def get_issue(db: AsyncSession, issue_id: str) -> Optional[BookIssueResponse]:
    obj = await _load_issue(db, issue_id)
    return _issue_to_response(obj) if obj else None


async def issue_book(db: AsyncSession, payload: BookIssueCreate, issued_by: str) -> BookIssueResponse:
    """Lend one copy of a book to a student."""
    book = await db.get(LibraryBook, payload.book_id)
    if not book:
        raise NotFoundError("Book not found")
    if not await get_student_by_id(db, payload.student_id):
        raise NotFoundError("Student not found")

    issue_date = payload.issue_date or date.today()
    due_date = payload.due_date or issue_date + timedelta(days=settings.library_loan_days)
    if due_date < issue_date:
        raise BadRequestError("Due date cannot be before issue date")

    # Conditional decrement: two concurrent issues cannot both take the last copy
    taken = await db.execute(
        update(LibraryBook)
        .where(LibraryBook.id == payload.book_id, LibraryBook.available_copies > 0)
        .values(available_copies=LibraryBook.available_copies - 1)
        .execution_options(synchronize_session=False)
    )
    if taken.rowcount == 0:
        await db.rollback()
        raise ConflictError("No copies of this book are available")

    issue_id, seq = await next_identifier(db, ISSUE_PREFIX)
    db.add(
        BookIssue(
            id=issue_id,
            seq=seq,
            book_id=payload.book_id,
            student_id=payload.student_id,
            issue_date=issue_date,
            due_date=due_date,
            fine_amount=0,
            issued_by=issued_by,
        )
    )
    await db.commit()
    await db.refresh(book)
    logger.info("Issued book %s to %s as %s (due %s)", payload.book_id, payload.student_id, issue_id, due_date)
    return _issue_to_response(await _load_issue(db, issue_id))


async def return_book(
    db: AsyncSession,
    issue_id: str,
    payload: BookReturnRequest,
    returned_by: str,
) -> BookIssueResponse:
    obj = await _load_issue(db, issue_id)
    if not obj:
        raise NotFoundError("Book issue not found")
    if obj.return_date is not None:
        raise ConflictError("Book has already been returned")

    return_date = payload.return_date or date.today()
    if return_date < obj.issue_date:
        raise BadRequestError("Return date cannot be before issue date")
    if return_date > date.today():
        raise BadRequestError("Return date cannot be in the future")

    obj.return_date = return_date
    obj.returned_by = returned_by
    obj.fine_amount = calculate_fine(obj.due_date, return_date=return_date)
    await db.execute(
        update(LibraryBook)
        .where(LibraryBook.id == obj.book_id, LibraryBook.available_copies < LibraryBook.total_copies)
        .values(available_copies=LibraryBook.available_copies + 1)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    await db.refresh(obj.book)
    logger.info("Returned %s (fine %d)", issue_id, obj.fine_amount)
    return _issue_to_response(obj)

