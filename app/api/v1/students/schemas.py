from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.core.enums import Shift, StudentStatus
from app.core.schemas import CamelModel


class StudentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    enrollment_number: str = Field(..., min_length=1, max_length=50)
    class_name: str = Field(..., min_length=1, max_length=50, alias="class")
    batch: Optional[str] = Field(None, max_length=50)
    guardian_name: Optional[str] = Field(None, max_length=255)
    guardian_phone: Optional[str] = Field(None, max_length=30)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    shift: Shift = Shift.MORNING
    locker_assigned: Optional[str] = Field(None, max_length=20)
    status: StudentStatus = StudentStatus.ACTIVE
    date_of_joining: Optional[date] = None  # defaults to today
    date_of_exit: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = Field(None, max_length=30)


class StudentUpdate(CamelModel):
    """Partial update. id is never taken from the body; seatNumber is managed by seating."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    enrollment_number: Optional[str] = Field(None, min_length=1, max_length=50)
    class_name: Optional[str] = Field(None, min_length=1, max_length=50, alias="class")
    batch: Optional[str] = Field(None, max_length=50)
    guardian_name: Optional[str] = Field(None, max_length=255)
    guardian_phone: Optional[str] = Field(None, max_length=30)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    shift: Optional[Shift] = None
    locker_assigned: Optional[str] = Field(None, max_length=20)
    status: Optional[StudentStatus] = None
    date_of_joining: Optional[date] = None
    date_of_exit: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = Field(None, max_length=30)

    @field_validator("name", "enrollment_number", "class_name", "shift", "status", "date_of_joining")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class StudentResponse(CamelModel):
    id: str
    enrollment_number: str
    name: str
    class_name: str = Field(..., alias="class")
    batch: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    shift: Shift
    seat_number: Optional[str] = None
    locker_assigned: Optional[str] = None
    status: StudentStatus
    date_of_joining: date
    date_of_exit: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    created_at: Optional[datetime] = None
