import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.auth.schemas import CurrentUser, LoginRequest, LoginResponse, SessionInfo
from app.auth.services import INVALID_CREDENTIALS, ServiceError, get_session_info, login_user, logout_user
from app.core.schemas import ApiResponse
from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    response_model_exclude_none=True,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        result = await login_user(db, payload)
    except ServiceError as e:
        if e.status_code == http_status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise HTTPException(status_code=e.status_code, detail="Internal server error")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error during login")
        raise HTTPException(status_code=500, detail="Login failed")
    return ApiResponse(data=result)


@router.post("/login-oauth")
async def login_oauth(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    try:
        payload = LoginRequest(
            email=form_data.username.strip(),
            password=form_data.password,
        )
        result = await login_user(db, payload)
    except ValidationError:
        # the username field must hold an email address
        raise HTTPException(status_code=http_status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error during OAuth login")
        raise HTTPException(status_code=500, detail="Login failed")
    return {
        "access_token": result.access_token,
        "token_type": "bearer",
    }


@router.post("/logout", response_model=ApiResponse[None], response_model_exclude_none=True)
async def logout(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        await logout_user(db, current_user)
    except Exception:
        logger.exception("Error logging out user %s", current_user.id)
        raise HTTPException(status_code=500, detail="Logout failed")
    return ApiResponse(message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[SessionInfo], response_model_exclude_none=True)
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return ApiResponse(data=await get_session_info(db, current_user))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error fetching session for user %s", current_user.id)
        raise HTTPException(status_code=500, detail="Failed to fetch session")
