import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import check_permission
from app.core.schemas import ApiResponse
from app.db.session import get_db

from .schemas import DashboardStats
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=ApiResponse[DashboardStats],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("dashboard", "read"))],
)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)):
    try:
        return ApiResponse(data=await service.get_stats(db))
    except Exception:
        logger.exception("Error computing dashboard stats")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats")
