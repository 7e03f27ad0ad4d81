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

from .schemas import AttendanceCreate, AttendanceResponse, AttendanceUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/attendance", tags=["attendance"])


@router.get(
    "",
    response_model=ApiResponse[List[AttendanceResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("attendance", "read"))],
)
async def list_attendance(
    search: Optional[str] = Query(None, description="Matches student name or student id"),
    on_date: Optional[str] = Query(None, alias="date"),
    student_id: Optional[str] = Query(None, alias="studentId"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_attendance(
            db,
            search=search,
            on_date=on_date,
            student_id=student_id,
            date_from=date_from,
            date_to=date_to,
        )
    except Exception:
        logger.exception("Error fetching attendance")
        raise HTTPException(status_code=500, detail="Failed to fetch attendance")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "",
    response_model=ApiResponse[AttendanceResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("attendance", "create"))],
)
async def mark_attendance(
    payload: AttendanceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Mark one student's morning/evening presence for a day."""
    try:
        return ApiResponse(data=await service.mark_attendance(db, payload, marked_by=current_user.name))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating attendance")
        raise HTTPException(status_code=500, detail="Failed to create attendance")


@router.get(
    "/{attendance_id}",
    response_model=ApiResponse[AttendanceResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("attendance", "read"))],
)
async def get_attendance(
    attendance_id: str,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_attendance(db, attendance_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance record not found")
    return ApiResponse(data=obj)


@router.put(
    "/{attendance_id}",
    response_model=ApiResponse[AttendanceResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("attendance", "update"))],
)
async def update_attendance(
    attendance_id: str,
    payload: AttendanceUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return ApiResponse(
            data=await service.update_attendance(db, attendance_id, payload, marked_by=current_user.name)
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error updating attendance %s", attendance_id)
        raise HTTPException(status_code=500, detail="Failed to update attendance")


@router.delete(
    "/{attendance_id}",
    response_model=ApiResponse[AttendanceResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("attendance", "delete"))],
)
async def delete_attendance(
    attendance_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        removed = await service.delete_attendance(db, attendance_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error deleting attendance %s", attendance_id)
        raise HTTPException(status_code=500, detail="Failed to delete attendance")
    return ApiResponse(data=removed, message="Attendance record deleted successfully")
