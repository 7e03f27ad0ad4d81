import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import check_permission
from app.auth.schemas import UserInfo
from app.core.exceptions import ServiceError
from app.core.schemas import ApiResponse
from app.db.session import get_db

from .schemas import UserCreate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get(
    "",
    response_model=ApiResponse[List[UserInfo]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("users", "read"))],
)
async def list_users(db: AsyncSession = Depends(get_db)):
    try:
        items = await service.list_users(db)
    except Exception:
        logger.exception("Error fetching users")
        raise HTTPException(status_code=500, detail="Failed to fetch users")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "",
    response_model=ApiResponse[UserInfo],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("users", "create"))],
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.create_user(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating user")
        raise HTTPException(status_code=500, detail="Failed to create user")
