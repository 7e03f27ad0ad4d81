from datetime import datetime, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.auth.models import UserSession
from app.auth.schemas import CurrentUser
from app.auth.security import decode_access_token
from app.db.session import get_db


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login-oauth")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Resolve the authenticated user from the access token and its live session."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if not user_id or not session_id:
        raise credentials_exception

    result = await db.execute(
        select(UserSession)
        .options(joinedload(UserSession.user))
        .where(UserSession.id == session_id, UserSession.user_id == user_id)
    )
    session = result.scalar_one_or_none()
    if not session or session.user is None:
        raise credentials_exception
    if _as_utc(session.expires_at) <= datetime.now(timezone.utc):
        raise credentials_exception

    user = session.user
    return CurrentUser(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        session_id=session.id,
        last_login=user.last_login,
    )
