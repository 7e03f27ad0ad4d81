import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import check_permission
from app.core.exceptions import ServiceError
from app.core.schemas import ApiResponse
from app.db.session import get_db

from .schemas import SeatAssignRequest, SeatCreate, SeatResponse, SeatUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/seating", tags=["seating"])


@router.get(
    "/seats",
    response_model=ApiResponse[List[SeatResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("seating", "read"))],
)
async def list_seats(
    search: Optional[str] = Query(None, description="Matches seat number, room or section"),
    room: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    seat_status: Optional[str] = Query(None, alias="status"),
    has_locker: Optional[bool] = Query(None, alias="hasLocker"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_seats(
            db,
            search=search,
            room=room,
            section=section,
            status=seat_status,
            has_locker=has_locker,
        )
    except Exception:
        logger.exception("Error fetching seats")
        raise HTTPException(status_code=500, detail="Failed to fetch seats")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "/seats",
    response_model=ApiResponse[SeatResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("seating", "create"))],
)
async def create_seat(
    payload: SeatCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.create_seat(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating seat")
        raise HTTPException(status_code=500, detail="Failed to create seat")


@router.get(
    "/seats/{seat_id}",
    response_model=ApiResponse[SeatResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("seating", "read"))],
)
async def get_seat(
    seat_id: str,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_seat(db, seat_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Seat not found")
    return ApiResponse(data=obj)


@router.put(
    "/seats/{seat_id}",
    response_model=ApiResponse[SeatResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("seating", "update"))],
)
async def update_seat(
    seat_id: str,
    payload: SeatUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.update_seat(db, seat_id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error updating seat %s", seat_id)
        raise HTTPException(status_code=500, detail="Failed to update seat")


@router.delete(
    "/seats/{seat_id}",
    response_model=ApiResponse[SeatResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("seating", "delete"))],
)
async def delete_seat(
    seat_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        removed = await service.delete_seat(db, seat_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error deleting seat %s", seat_id)
        raise HTTPException(status_code=500, detail="Failed to delete seat")
    return ApiResponse(data=removed, message="Seat deleted successfully")


@router.post(
    "/seats/{seat_id}/assign",
    response_model=ApiResponse[SeatResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("seating", "update"))],
)
async def assign_seat(
    seat_id: str,
    payload: SeatAssignRequest,
    db: AsyncSession = Depends(get_db),
):
    """Seat a student. The seat must be available and the student must not hold another seat."""
    try:
        return ApiResponse(data=await service.assign_seat(db, seat_id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error assigning seat %s", seat_id)
        raise HTTPException(status_code=500, detail="Failed to assign seat")


@router.post(
    "/seats/{seat_id}/release",
    response_model=ApiResponse[SeatResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("seating", "update"))],
)
async def release_seat(
    seat_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.release_seat(db, seat_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error releasing seat %s", seat_id)
        raise HTTPException(status_code=500, detail="Failed to release seat")
