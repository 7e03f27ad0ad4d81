"""
Overdue rules for book issues.

Status is derived, never stored:
    returned  - return_date is set
    overdue   - not returned and today is past due_date
    issued    - otherwise
Fine is whole days past due_date times the per-day rate, counted up to the
return date (or today while the book is still out).
"""

from datetime import date
from typing import Optional

from app.core.config import settings
from app.core.enums import BookIssueStatus


def days_overdue(due_date: date, as_of: date) -> int:
    return max(0, (as_of - due_date).days)


def calculate_fine(
    due_date: date,
    return_date: Optional[date] = None,
    today: Optional[date] = None,
    per_day: Optional[int] = None,
) -> int:
    if per_day is None:
        per_day = settings.library_fine_per_day
    as_of = return_date or today or date.today()
    return days_overdue(due_date, as_of) * per_day


def issue_status(due_date: date, return_date: Optional[date], today: Optional[date] = None) -> str:
    if return_date is not None:
        return BookIssueStatus.RETURNED.value
    if due_date < (today or date.today()):
        return BookIssueStatus.OVERDUE.value
    return BookIssueStatus.ISSUED.value
