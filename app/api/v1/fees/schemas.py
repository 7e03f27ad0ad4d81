"""Fees schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from app.core.enums import FeeStatus, PaymentMethod
from app.core.schemas import CamelModel


# --- Fee Category ---
class FeeCategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    amount: float = Field(..., ge=0)
    is_recurring: bool = False
    due_day: Optional[int] = Field(None, ge=1, le=31, description="Day of month for recurring fees")


class FeeCategoryResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    amount: float
    is_recurring: bool
    due_day: Optional[int] = None


# --- Fee Structure (what a student owes) ---
class FeeStructureCreate(CamelModel):
    student_id: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    due_date: date
    amount: Optional[float] = Field(None, ge=0, description="Defaults to the category amount")


class FeeStructureResponse(CamelModel):
    id: str
    student_id: str
    student_name: Optional[str] = None
    category_id: str
    category: Optional[FeeCategoryResponse] = None
    amount: float
    due_date: date
    status: FeeStatus
    paid_amount: float
    remaining_amount: float


# --- Payment ---
class PaymentCreate(CamelModel):
    fee_structure_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod
    payment_date: Optional[date] = None  # defaults to today
    notes: Optional[str] = None


class PaymentResponse(CamelModel):
    id: str
    student_id: str
    fee_structure_id: str
    amount: float
    payment_date: date
    payment_method: PaymentMethod
    receipt_number: str
    notes: Optional[str] = None
    received_by: Optional[str] = None
    created_at: Optional[datetime] = None
