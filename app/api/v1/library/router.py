"""Library router: books catalogue and issue/return."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.auth.rbac import check_permission
from app.auth.schemas import CurrentUser
from app.core.exceptions import ServiceError
from app.core.schemas import ApiResponse
from app.db.session import get_db

from .schemas import (
    BookCreate,
    BookIssueCreate,
    BookIssueResponse,
    BookResponse,
    BookReturnRequest,
    BookUpdate,
)
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/library", tags=["library"])


# --- Books ---
@router.get(
    "/books",
    response_model=ApiResponse[List[BookResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "read"))],
)
async def list_books(
    search: Optional[str] = Query(None, description="Matches title, author or ISBN"),
    category: Optional[str] = Query(None),
    available: Optional[bool] = Query(None, description="true: copies on the shelf, false: all copies out"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_books(db, search=search, category=category, available=available)
    except Exception:
        logger.exception("Error fetching books")
        raise HTTPException(status_code=500, detail="Failed to fetch books")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "/books",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("library", "create"))],
)
async def create_book(
    payload: BookCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.create_book(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating book")
        raise HTTPException(status_code=500, detail="Failed to create book")


@router.get(
    "/books/{book_id}",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "read"))],
)
async def get_book(
    book_id: str,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_book(db, book_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return ApiResponse(data=obj)


@router.put(
    "/books/{book_id}",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "update"))],
)
async def update_book(
    book_id: str,
    payload: BookUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return ApiResponse(data=await service.update_book(db, book_id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error updating book %s", book_id)
        raise HTTPException(status_code=500, detail="Failed to update book")


@router.delete(
    "/books/{book_id}",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "delete"))],
)
async def delete_book(
    book_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        removed = await service.delete_book(db, book_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error deleting book %s", book_id)
        raise HTTPException(status_code=500, detail="Failed to delete book")
    return ApiResponse(data=removed, message="Book deleted successfully")


# --- Issues ---
@router.get(
    "/issues",
    response_model=ApiResponse[List[BookIssueResponse]],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "read"))],
)
async def list_issues(
    student_id: Optional[str] = Query(None, alias="studentId"),
    book_id: Optional[str] = Query(None, alias="bookId"),
    issue_status: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    try:
        items = await service.list_issues(
            db,
            student_id=student_id,
            book_id=book_id,
            status=issue_status,
        )
    except Exception:
        logger.exception("Error fetching book issues")
        raise HTTPException(status_code=500, detail="Failed to fetch book issues")
    return ApiResponse(data=items, count=len(items))


@router.post(
    "/issues",
    response_model=ApiResponse[BookIssueResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("library", "create"))],
)
async def issue_book(
    payload: BookIssueCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return ApiResponse(data=await service.issue_book(db, payload, issued_by=current_user.name))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error issuing book")
        raise HTTPException(status_code=500, detail="Failed to issue book")


@router.get(
    "/issues/{issue_id}",
    response_model=ApiResponse[BookIssueResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "read"))],
)
async def get_issue(
    issue_id: str,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_issue(db, issue_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book issue not found")
    return ApiResponse(data=obj)


@router.post(
    "/issues/{issue_id}/return",
    response_model=ApiResponse[BookIssueResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(check_permission("library", "update"))],
)
async def return_book(
    issue_id: str,
    payload: Optional[BookReturnRequest] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        result = await service.return_book(
            db, issue_id, payload or BookReturnRequest(), returned_by=current_user.name
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error returning book issue %s", issue_id)
        raise HTTPException(status_code=500, detail="Failed to return book")
    return ApiResponse(data=result, message="Book returned successfully")
