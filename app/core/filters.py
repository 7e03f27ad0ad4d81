"""Query helpers shared by the list endpoints."""

from datetime import date
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.sql.elements import ColumnElement


def search_clause(term: Optional[str], *columns) -> Optional[ColumnElement]:
    """Case-insensitive substring match of term against any of columns.

    Returns None for an empty term so callers can skip the filter.
    """
    if not term:
        return None
    needle = term.lower()
    return or_(*(func.lower(col).contains(needle, autoescape=True) for col in columns))


def parse_date_filter(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD query value. Raises ValueError when it is not a date.

    A date filter that cannot be a date matches no rows, so list services catch the
    ValueError and return an empty list instead of rejecting the request.
    """
    if not value:
        return None
    return date.fromisoformat(value)
