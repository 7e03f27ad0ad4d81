"""Unit tests for overdue status and fine calculation."""

from datetime import date

from app.api.v1.library.fines import calculate_fine, days_overdue, issue_status


DUE = date(2025, 1, 15)


def test_no_fine_on_or_before_due_date() -> None:
    assert calculate_fine(DUE, return_date=DUE, per_day=5) == 0
    assert calculate_fine(DUE, return_date=date(2025, 1, 10), per_day=5) == 0


def test_fine_per_whole_day_late() -> None:
    assert days_overdue(DUE, date(2025, 1, 20)) == 5
    assert calculate_fine(DUE, return_date=date(2025, 1, 20), per_day=5) == 25


def test_open_issue_accrues_until_today() -> None:
    assert calculate_fine(DUE, today=date(2025, 1, 17), per_day=5) == 10


def test_return_date_wins_over_today() -> None:
    assert calculate_fine(DUE, return_date=date(2025, 1, 16), today=date(2025, 3, 1), per_day=5) == 5


def test_status_is_derived_from_dates() -> None:
    assert issue_status(DUE, date(2025, 2, 1), today=date(2025, 3, 1)) == "returned"
    assert issue_status(DUE, None, today=date(2025, 1, 16)) == "overdue"
    assert issue_status(DUE, None, today=DUE) == "issued"
