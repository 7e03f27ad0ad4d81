from pydantic import EmailStr, Field

from app.core.enums import UserRole
from app.core.schemas import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole
    password: str = Field(..., min_length=8)
