from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.core.enums import UserRole
from app.core.schemas import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class PermissionGrant(CamelModel):
    """One entry of the role table: a resource and the actions allowed on it."""

    resource: str
    actions: List[str]


class UserInfo(CamelModel):
    id: str
    email: EmailStr
    name: str
    role: UserRole
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserInfo
    permissions: List[PermissionGrant]


class SessionInfo(CamelModel):
    user: UserInfo
    permissions: List[PermissionGrant]


class CurrentUser(CamelModel):
    """Lightweight representation of the authenticated user for RBAC checks."""

    id: str
    email: str
    name: str
    role: str
    session_id: str
    last_login: Optional[datetime] = None
