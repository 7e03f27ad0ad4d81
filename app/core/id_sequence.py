"""
Identifier generation: a fixed prefix plus a zero-padded per-prefix counter.

Counters live in the id_sequences table and only ever move forward, so an
identifier freed by a delete is never handed out again. The counter update
shares the caller's transaction; if the insert is rolled back, so is the bump.
"""

from typing import Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models.id_sequence import IdSequence


ID_WIDTH = 4


def format_identifier(prefix: str, seq: int, width: int = ID_WIDTH) -> str:
    return f"{prefix}{seq:0{width}d}"


async def next_identifier(db: AsyncSession, prefix: str) -> Tuple[str, int]:
    """Reserve the next identifier for prefix. Returns (identifier, seq)."""
    result = await db.execute(
        select(IdSequence).where(IdSequence.prefix == prefix).with_for_update()
    )
    counter = result.scalar_one_or_none()
    if counter is None:
        counter = IdSequence(prefix=prefix, last_value=0)
        db.add(counter)
    counter.last_value += 1
    await db.flush()
    return format_identifier(prefix, counter.last_value), counter.last_value


async def advance_to(db: AsyncSession, prefix: str, value: int) -> None:
    """Move the counter for prefix forward to at least value (used after seeding)."""
    result = await db.execute(select(IdSequence).where(IdSequence.prefix == prefix))
    counter = result.scalar_one_or_none()
    if counter is None:
        db.add(IdSequence(prefix=prefix, last_value=value))
    elif counter.last_value < value:
        counter.last_value = value
    await db.flush()
