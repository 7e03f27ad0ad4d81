"""Fees router: categories, fee structures and payments."""

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

from .schemas import (
    FeeCategoryCreate,
    FeeCategoryResponse,
    FeeStructureCreate,
    FeeStructureResponse,
    PaymentCreate,
    PaymentResponse,
)
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/fees", tags=["fees"])


# --- Fee Category ---
@router.get(
    "/categories",
    response_model=ApiResponse[List[FeeCategoryResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("fees", "read"))],
)
async def list_fee_categories(db: AsyncSession = Depends(get_db)):
    try:
        items = await service.list_categories(db)
    except Exception:
        logger.exception("Error fetching fee categories")
        raise HTTPException(status_code=500, detail="Failed to fetch fee categories")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "/categories",
    response_model=ApiResponse[FeeCategoryResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("fees", "create"))],
)
async def create_fee_category(
    payload: FeeCategoryCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.create_category(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating fee category")
        raise HTTPException(status_code=500, detail="Failed to create fee category")


# --- Fee Structure ---
@router.get(
    "/structures",
    response_model=ApiResponse[List[FeeStructureResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("fees", "read"))],
)
async def list_fee_structures(
    student_id: Optional[str] = Query(None, alias="studentId"),
    fee_status: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_structures(
            db,
            student_id=student_id,
            status=fee_status,
        )
    except Exception:
        logger.exception("Error fetching fee structures")
        raise HTTPException(status_code=500, detail="Failed to fetch fee structures")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "/structures",
    response_model=ApiResponse[FeeStructureResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("fees", "create"))],
)
async def create_fee_structure(
    payload: FeeStructureCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.create_structure(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating fee structure")
        raise HTTPException(status_code=500, detail="Failed to create fee structure")


@router.get(
    "/structures/{structure_id}",
    response_model=ApiResponse[FeeStructureResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("fees", "read"))],
)
async def get_fee_structure(
    structure_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        obj = await service.get_structure(db, structure_id)
    except Exception:
        logger.exception("Error fetching fee structure %s", structure_id)
        raise HTTPException(status_code=500, detail="Failed to fetch fee structure")
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee structure not found")
    return ApiResponse(data=obj)


# --- Payment ---
@router.get(
    "/payments",
    response_model=ApiResponse[List[PaymentResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("fees", "read"))],
)
async def list_payments(
    student_id: Optional[str] = Query(None, alias="studentId"),
    fee_structure_id: Optional[str] = Query(None, alias="feeStructureId"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_payments(db, student_id=student_id, fee_structure_id=fee_structure_id)
    except Exception:
        logger.exception("Error fetching payments")
        raise HTTPException(status_code=500, detail="Failed to fetch payments")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "/payments",
    response_model=ApiResponse[PaymentResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("fees", "create"))],
)
async def record_payment(
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return ApiResponse(data=await service.record_payment(db, payload, received_by=current_user.name))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error recording payment")
        raise HTTPException(status_code=500, detail="Failed to record payment")
