from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    ACCOUNTANT = "accountant"
    LIBRARIAN = "librarian"
    TEACHER = "teacher"
    STUDENT = "student"


class Shift(str, Enum):
    MORNING = "morning"
    EVENING = "evening"


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class BookIssueStatus(str, Enum):
    ISSUED = "issued"
    RETURNED = "returned"
    OVERDUE = "overdue"


class SeatStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    DISABLED = "disabled"


class ReportType(str, Enum):
    STUDENT_MASTER = "student_master"
    ATTENDANCE = "attendance"
    FEES = "fees"
    LIBRARY = "library"
    EXPENSES = "expenses"


class ReportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"
    CSV = "csv"


class FeeStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    PARTIAL = "partial"
    OVERDUE = "overdue"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    ONLINE = "online"
    CHEQUE = "cheque"
