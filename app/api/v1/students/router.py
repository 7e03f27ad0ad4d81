import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import check_permission
from app.core.exceptions import ServiceError
from app.core.schemas import ApiResponse
from app.db.session import get_db

from .schemas import StudentCreate, StudentResponse, StudentUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.get(
    "",
    response_model=ApiResponse[List[StudentResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("students", "read"))],
)
async def list_students(
    search: Optional[str] = Query(None, description="Matches name, enrollment number or class"),
    class_name: Optional[str] = Query(None, alias="class"),
    shift: Optional[str] = Query(None),
    student_status: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_students(
            db,
            search=search,
            class_name=class_name,
            shift=shift,
            status=student_status,
        )
    except Exception:
        logger.exception("Error fetching students")
        raise HTTPException(status_code=500, detail="Failed to fetch students")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "",
    response_model=ApiResponse[StudentResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("students", "create"))],
)
async def create_student(
    payload: StudentCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.create_student(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating student")
        raise HTTPException(status_code=500, detail="Failed to create student")


@router.get(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("students", "read"))],
)
async def get_student(
    student_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        obj = await service.get_student(db, student_id)
    except Exception:
        logger.exception("Error fetching student %s", student_id)
        raise HTTPException(status_code=500, detail="Failed to fetch student")
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return ApiResponse(data=obj)


@router.put(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("students", "update"))],
)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.update_student(db, student_id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error updating student %s", student_id)
        raise HTTPException(status_code=500, detail="Failed to update student")


@router.delete(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("students", "delete"))],
)
async def delete_student(
    student_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        removed = await service.delete_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error deleting student %s", student_id)
        raise HTTPException(status_code=500, detail="Failed to delete student")
    return ApiResponse(data=removed, message="Student deleted successfully")
