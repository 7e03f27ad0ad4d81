"""Library schemas: catalogue and circulation."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from app.api.v1.students.schemas import StudentResponse
from app.core.enums import BookIssueStatus
from app.core.schemas import CamelModel


# --- Books ---
class BookCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: str = Field(..., min_length=1, max_length=20)
    edition: Optional[str] = Field(None, max_length=50)
    publisher: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    total_copies: int = Field(..., ge=1)
    purchase_date: Optional[date] = None
    price: float = Field(0, ge=0)
    description: Optional[str] = None


class BookUpdate(CamelModel):
    """totalCopies moves availableCopies by the same amount."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    isbn: Optional[str] = Field(None, min_length=1, max_length=20)
    edition: Optional[str] = Field(None, max_length=50)
    publisher: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    total_copies: Optional[int] = Field(None, ge=1)
    purchase_date: Optional[date] = None
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None

    @field_validator("title", "author", "isbn", "total_copies", "price")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class BookResponse(CamelModel):
    id: str
    title: str
    author: str
    isbn: str
    edition: Optional[str] = None
    publisher: Optional[str] = None
    category: Optional[str] = None
    total_copies: int
    available_copies: int
    purchase_date: Optional[date] = None
    price: float
    description: Optional[str] = None
    created_at: Optional[datetime] = None


# --- Issues ---
class BookIssueCreate(CamelModel):
    book_id: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)
    issue_date: Optional[date] = None  # defaults to today
    due_date: Optional[date] = None  # defaults to issue date + loan period


class BookReturnRequest(CamelModel):
    return_date: Optional[date] = None  # defaults to today


class BookIssueResponse(CamelModel):
    id: str
    book_id: str
    book: Optional[BookResponse] = None
    student_id: str
    student: Optional[StudentResponse] = None
    issue_date: date
    due_date: date
    return_date: Optional[date] = None
    fine_amount: int
    status: BookIssueStatus
    issued_by: Optional[str] = None
    returned_by: Optional[str] = None
