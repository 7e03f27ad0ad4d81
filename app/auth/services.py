import logging
import secrets
from datetime import datetime, timezone

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User, UserSession
from app.auth.rbac import grants_for_role
from app.auth.schemas import CurrentUser, LoginRequest, LoginResponse, SessionInfo, UserInfo
from app.auth.security import create_access_token, verify_password
from app.core.exceptions import ServiceError


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=user.created_at,
        last_login=user.last_login,
    )


async def login_user(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    """Verify credentials, open a session and issue an access token bound to it."""
    result = await db.execute(select(User).where(User.email == payload.email.lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise ServiceError(INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED)

    session_id = secrets.token_urlsafe(32)
    access_token, expires_at = create_access_token(
        subject={"sub": user.id, "sid": session_id, "role": user.role}
    )
    db.add(UserSession(id=session_id, user_id=user.id, expires_at=expires_at))
    user.last_login = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(user)

    logger.info("User %s logged in", user.id)
    return LoginResponse(
        access_token=access_token,
        expires_at=expires_at,
        user=_user_info(user),
        permissions=grants_for_role(user.role),
    )


async def logout_user(db: AsyncSession, current_user: CurrentUser) -> None:
    session = await db.get(UserSession, current_user.session_id)
    if session is not None:
        await db.delete(session)
        await db.commit()
    logger.info("User %s logged out", current_user.id)


async def get_session_info(db: AsyncSession, current_user: CurrentUser) -> SessionInfo:
    user = await db.get(User, current_user.id)
    if not user:
        raise ServiceError("User not found", status.HTTP_404_NOT_FOUND)
    return SessionInfo(user=_user_info(user), permissions=grants_for_role(user.role))
