import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from app.api.v1.students.schemas import StudentResponse
from app.core.schemas import CamelModel


class AttendanceCreate(CamelModel):
    student_id: str = Field(..., min_length=1)
    date: dt.date
    morning_present: bool = False
    evening_present: bool = False


class AttendanceUpdate(CamelModel):
    """Only the presence flags change; student and date identify the record."""

    morning_present: Optional[bool] = None
    evening_present: Optional[bool] = None

    @field_validator("morning_present", "evening_present")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class AttendanceResponse(CamelModel):
    id: str
    student_id: str
    student: Optional[StudentResponse] = Field(None, description="Current student record, joined at read time")
    date: dt.date
    morning_present: bool
    evening_present: bool
    marked_by: Optional[str] = None
    marked_at: dt.datetime
