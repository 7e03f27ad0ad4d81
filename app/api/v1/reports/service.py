import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.filters import parse_date_filter, search_clause
from app.core.id_sequence import next_identifier
from app.core.models import Report

from .schemas import ReportCreate, ReportResponse

logger = logging.getLogger(__name__)

ID_PREFIX = "RPT"
ALL_TYPES = "all"


async def list_reports(
    db: AsyncSession,
    search: Optional[str] = None,
    report_type: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> List[ReportResponse]:
    """Filter report metadata. type "all" is the same as no type filter; date bounds are inclusive."""
    try:
        start, end = parse_date_filter(date_from), parse_date_filter(date_to)
    except ValueError:
        return []
    stmt = select(Report)
    clause = search_clause(search, Report.name, Report.generated_by)
    if clause is not None:
        stmt = stmt.where(clause)
    if report_type and report_type != ALL_TYPES:
        stmt = stmt.where(Report.type == report_type)
    if start is not None:
        stmt = stmt.where(Report.generated_at >= start)
    if end is not None:
        stmt = stmt.where(Report.generated_at <= end)
    result = await db.execute(stmt.order_by(Report.seq))
    return [ReportResponse.model_validate(r) for r in result.scalars().all()]


async def get_report(db: AsyncSession, report_id: str) -> Optional[ReportResponse]:
    obj = await db.get(Report, report_id)
    return ReportResponse.model_validate(obj) if obj else None


async def create_report(
    db: AsyncSession,
    payload: ReportCreate,
    generated_by: str,
) -> ReportResponse:
    report_id, seq = await next_identifier(db, ID_PREFIX)
    obj = Report(
        id=report_id,
        seq=seq,
        name=payload.name.strip(),
        type=payload.type,
        format=payload.format,
        filters=payload.filters,
        generated_at=payload.generated_at or date.today(),
        generated_by=generated_by,
        download_url=payload.download_url,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Created report %s (%s)", obj.id, obj.type)
    return ReportResponse.model_validate(obj)


async def delete_report(db: AsyncSession, report_id: str) -> ReportResponse:
    obj = await db.get(Report, report_id)
    if not obj:
        raise NotFoundError("Report not found")
    removed = ReportResponse.model_validate(obj)
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted report %s", report_id)
    return removed
