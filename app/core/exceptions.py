from fastapi import status
from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ConflictError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)


class BadRequestError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


def is_unique_violation(exc: IntegrityError, table: str, *columns: str) -> bool:
    """True when exc was raised by the unique key over table(columns) and nothing else."""
    message = str(exc.orig)
    # sqlite: "UNIQUE constraint failed: attendance.student_id, attendance.date"
    if "UNIQUE constraint failed:" in message:
        failed = message.split("UNIQUE constraint failed:", 1)[1].strip().splitlines()[0]
        return [part.strip() for part in failed.split(",")] == [f"{table}.{c}" for c in columns]
    # postgres: "DETAIL:  Key (student_id, date)=(...) already exists."
    return f"Key ({', '.join(columns)})=" in message
