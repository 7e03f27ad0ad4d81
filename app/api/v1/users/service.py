import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.schemas import UserInfo
from app.auth.security import hash_password
from app.core.exceptions import ConflictError, is_unique_violation
from app.core.id_sequence import next_identifier

from .schemas import UserCreate

logger = logging.getLogger(__name__)

USER_PREFIX = "USR"
DUPLICATE_EMAIL = "User with this email already exists"


async def list_users(db: AsyncSession) -> List[UserInfo]:
    result = await db.execute(select(User).order_by(User.seq))
    return [UserInfo.model_validate(u) for u in result.scalars().all()]


async def create_user(db: AsyncSession, payload: UserCreate) -> UserInfo:
    email = payload.email.lower()
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none():
        raise ConflictError(DUPLICATE_EMAIL)
    try:
        user_id, seq = await next_identifier(db, USER_PREFIX)
        user = User(
            id=user_id,
            seq=seq,
            email=email,
            name=payload.name.strip(),
            role=payload.role,
            password_hash=hash_password(payload.password),
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
    except IntegrityError as e:
        await db.rollback()
        if not is_unique_violation(e, "users", "email"):
            raise
        raise ConflictError(DUPLICATE_EMAIL) from e
    logger.info("Created user %s with role %s", user.id, user.role)
    return UserInfo.model_validate(user)
