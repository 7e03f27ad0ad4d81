from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.api.v1.students.schemas import StudentResponse
from app.core.enums import SeatStatus
from app.core.schemas import CamelModel


def _not_occupied(cls, v):
    # occupied is reached only through assign
    if v == SeatStatus.OCCUPIED.value:
        raise ValueError("use the assign endpoint to occupy a seat")
    return v


class SeatCreate(CamelModel):
    room: str = Field(..., min_length=1, max_length=50)
    section: str = Field(..., min_length=1, max_length=50)
    seat_number: str = Field(..., min_length=1, max_length=20)
    has_locker: bool = False
    status: SeatStatus = SeatStatus.AVAILABLE

    check_status = field_validator("status")(_not_occupied)


class SeatUpdate(CamelModel):
    room: Optional[str] = Field(None, min_length=1, max_length=50)
    section: Optional[str] = Field(None, min_length=1, max_length=50)
    seat_number: Optional[str] = Field(None, min_length=1, max_length=20)
    has_locker: Optional[bool] = None
    status: Optional[SeatStatus] = None

    @field_validator("room", "section", "seat_number", "has_locker", "status")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    check_status = field_validator("status")(_not_occupied)


class SeatAssignRequest(CamelModel):
    student_id: str = Field(..., min_length=1)


class SeatResponse(CamelModel):
    id: str
    room: str
    section: str
    seat_number: str
    has_locker: bool
    status: SeatStatus
    is_occupied: bool
    occupied_by: Optional[str] = None
    student: Optional[StudentResponse] = None
    last_modified: datetime
