from app.core.models.id_sequence import IdSequence
from app.core.models.student import Student
from app.core.models.attendance import Attendance
from app.core.models.library_book import LibraryBook
from app.core.models.book_issue import BookIssue
from app.core.models.seat import Seat
from app.core.models.report import Report
from app.core.models.fee_category import FeeCategory
from app.core.models.fee_structure import FeeStructure
from app.core.models.payment import Payment

__all__ = [
    "IdSequence",
    "Student",
    "Attendance",
    "LibraryBook",
    "BookIssue",
    "Seat",
    "Report",
    "FeeCategory",
    "FeeStructure",
    "Payment",
]
