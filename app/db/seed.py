"""
Load the demo data set into an empty database.

Runs at startup when SEED_DEMO_DATA is on, and can be run by hand:
    python -m app.db.seed
"""
import asyncio
import logging
from decimal import Decimal
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.security import cached_password_hash
from app.core.config import settings
from app.core.id_sequence import advance_to
from app.core.models import (
    Attendance,
    BookIssue,
    FeeCategory,
    FeeStructure,
    LibraryBook,
    Payment,
    Report,
    Seat,
    Student,
)
from app.db import seed_data
from app.db.init_db import init_db
from app.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)


def _seq(identifier: str) -> int:
    """STU0007 -> 7"""
    return int(identifier.lstrip("ABCDEFGHIJKLMNOPQRSTUVWXYZ"))


def _prefix(identifier: str) -> str:
    return identifier.rstrip("0123456789")


async def seed_database(db: AsyncSession) -> bool:
    """Insert the demo records unless students already exist. Returns True when data was inserted."""
    existing = (await db.execute(select(func.count()).select_from(Student))).scalar_one()
    if existing:
        logger.info("Database already has %s students, skipping demo seed", existing)
        return False

    password_hash = cached_password_hash(settings.demo_user_password)
    for user_id, email, name, role in seed_data.USERS:
        db.add(User(id=user_id, seq=_seq(user_id), email=email, name=name, role=role, password_hash=password_hash))

    for row in seed_data.STUDENTS:
        db.add(Student(seq=_seq(row["id"]), **row))
    await db.flush()

    for att_id, student_id, on_date, morning, evening, marked_by in seed_data.ATTENDANCE:
        db.add(
            Attendance(
                id=att_id,
                seq=_seq(att_id),
                student_id=student_id,
                date=on_date,
                morning_present=morning,
                evening_present=evening,
                marked_by=marked_by,
            )
        )

    for row in seed_data.BOOKS:
        db.add(LibraryBook(seq=_seq(row["id"]), **{**row, "price": Decimal(row["price"])}))
    await db.flush()

    for issue_id, book_id, student_id, issued, due, returned, fine in seed_data.BOOK_ISSUES:
        db.add(
            BookIssue(
                id=issue_id,
                seq=_seq(issue_id),
                book_id=book_id,
                student_id=student_id,
                issue_date=issued,
                due_date=due,
                return_date=returned,
                fine_amount=fine,
                issued_by="Head Librarian",
                returned_by="Head Librarian" if returned else None,
            )
        )

    for seat_id, room, section, seat_number, has_locker, seat_status, occupied_by in seed_data.SEATS:
        db.add(
            Seat(
                id=seat_id,
                seq=_seq(seat_id),
                room=room,
                section=section,
                seat_number=seat_number,
                has_locker=has_locker,
                status=seat_status,
                occupied_by=occupied_by,
            )
        )

    for report_id, name, report_type, generated_at, generated_by, fmt in seed_data.REPORTS:
        db.add(
            Report(
                id=report_id,
                seq=_seq(report_id),
                name=name,
                type=report_type,
                filters={},
                generated_at=generated_at,
                generated_by=generated_by,
                format=fmt,
            )
        )

    for cat_id, name, description, amount, recurring, due_day in seed_data.FEE_CATEGORIES:
        db.add(
            FeeCategory(
                id=cat_id,
                seq=_seq(cat_id),
                name=name,
                description=description,
                amount=Decimal(amount),
                is_recurring=recurring,
                due_day=due_day,
            )
        )
    await db.flush()

    for fs_id, student_id, category_id, amount, due, paid in seed_data.FEE_STRUCTURES:
        db.add(
            FeeStructure(
                id=fs_id,
                seq=_seq(fs_id),
                student_id=student_id,
                category_id=category_id,
                amount=Decimal(amount),
                due_date=due,
                paid_amount=Decimal(paid),
            )
        )
    await db.flush()

    for pay_id, student_id, fs_id, amount, paid_on, method, receipt, received_by in seed_data.PAYMENTS:
        db.add(
            Payment(
                id=pay_id,
                seq=_seq(pay_id),
                student_id=student_id,
                fee_structure_id=fs_id,
                amount=Decimal(amount),
                payment_date=paid_on,
                payment_method=method,
                receipt_number=receipt,
                received_by=received_by,
            )
        )

    # Counters start after the highest seeded identifier for each prefix
    highest: Dict[str, int] = {}
    seeded_ids = (
        [u[0] for u in seed_data.USERS]
        + [s["id"] for s in seed_data.STUDENTS]
        + [a[0] for a in seed_data.ATTENDANCE]
        + [b["id"] for b in seed_data.BOOKS]
        + [i[0] for i in seed_data.BOOK_ISSUES]
        + [s[0] for s in seed_data.SEATS]
        + [r[0] for r in seed_data.REPORTS]
        + [c[0] for c in seed_data.FEE_CATEGORIES]
        + [f[0] for f in seed_data.FEE_STRUCTURES]
        + [p[0] for p in seed_data.PAYMENTS]
    )
    for identifier in seeded_ids:
        prefix = _prefix(identifier)
        highest[prefix] = max(highest.get(prefix, 0), _seq(identifier))
    for prefix, value in highest.items():
        await advance_to(db, prefix, value)

    await db.commit()
    logger.info(
        "Seeded demo data: %s users, %s students, %s books, %s seats",
        len(seed_data.USERS),
        len(seed_data.STUDENTS),
        len(seed_data.BOOKS),
        len(seed_data.SEATS),
    )
    return True


async def main() -> None:
    """Entry point for the seed script."""
    from app.core.logger import setup_logging

    setup_logging(settings.log_level)
    await init_db()
    async with AsyncSessionLocal() as db:
        try:
            await seed_database(db)
        except Exception:
            logger.exception("Error seeding demo data")
            await db.rollback()
            raise


if __name__ == "__main__":
    asyncio.run(main())
