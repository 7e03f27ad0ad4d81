import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.auth.rbac import check_permission
from app.auth.schemas import CurrentUser
from app.core.exceptions import ServiceError
from app.core.schemas import ApiResponse
from app.db.session import get_db

from .schemas import ReportCreate, ReportResponse
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get(
    "",
    response_model=ApiResponse[List[ReportResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("reports", "read"))],
)
async def list_reports(
    search: Optional[str] = Query(None, description="Matches report name or author"),
    report_type: Optional[str] = Query(None, alias="type", description="Report type, or 'all'"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_reports(
            db,
            search=search,
            report_type=report_type,
            date_from=date_from,
            date_to=date_to,
        )
    except Exception:
        logger.exception("Error fetching reports")
        raise HTTPException(status_code=500, detail="Failed to fetch reports")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "",
    response_model=ApiResponse[ReportResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("reports", "create"))],
)
async def create_report(
    payload: ReportCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return ApiResponse(data=await service.create_report(db, payload, generated_by=current_user.name))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating report")
        raise HTTPException(status_code=500, detail="Failed to create report")


@router.get(
    "/{report_id}",
    response_model=ApiResponse[ReportResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("reports", "read"))],
)
async def get_report(
    report_id: str,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_report(db, report_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    return ApiResponse(data=obj)


@router.delete(
    "/{report_id}",
    response_model=ApiResponse[ReportResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("reports", "delete"))],
)
async def delete_report(
    report_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        removed = await service.delete_report(db, report_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error deleting report %s", report_id)
        raise HTTPException(status_code=500, detail="Failed to delete report")
    return ApiResponse(data=removed, message="Report deleted successfully")
