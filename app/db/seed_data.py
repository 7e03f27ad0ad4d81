"""
Demo records loaded into an empty database.

Identifiers are fixed so the demo data can be referenced from docs and tests;
seed.py moves every identifier counter past the highest seeded value.
"""
from datetime import date
from typing import Any, Dict, List, Tuple

# (id, email, name, role)
USERS: List[Tuple[str, str, str, str]] = [
    ("USR0001", "admin@institute.com", "Admin User", "super_admin"),
    ("USR0002", "accountant@institute.com", "Accounts Officer", "accountant"),
    ("USR0003", "librarian@institute.com", "Head Librarian", "librarian"),
    ("USR0004", "teacher@institute.com", "Class Teacher", "teacher"),
    ("USR0005", "student@institute.com", "Demo Student", "student"),
]

STUDENTS: List[Dict[str, Any]] = [
    {
        "id": "STU0001",
        "enrollment_number": "ENR2024001",
        "name": "Rahul Sharma",
        "class_name": "10th",
        "batch": "2024-25",
        "guardian_name": "Rajesh Sharma",
        "guardian_phone": "+91-9876543210",
        "phone": "+91-9876543211",
        "email": "rahul.sharma@email.com",
        "shift": "morning",
        "seat_number": "A-01",
        "locker_assigned": "L-01",
        "status": "active",
        "date_of_joining": date(2024, 4, 1),
        "address": "12 MG Road, Pune",
    },
    {
        "id": "STU0002",
        "enrollment_number": "ENR2024002",
        "name": "Priya Patel",
        "class_name": "12th",
        "batch": "2024-25",
        "guardian_name": "Suresh Patel",
        "guardian_phone": "+91-9876543220",
        "phone": "+91-9876543221",
        "email": "priya.patel@email.com",
        "shift": "evening",
        "seat_number": "B-01",
        "locker_assigned": "L-02",
        "status": "active",
        "date_of_joining": date(2024, 4, 5),
        "address": "45 Park Street, Mumbai",
    },
    {
        "id": "STU0003",
        "enrollment_number": "ENR2024003",
        "name": "Amit Kumar",
        "class_name": "10th",
        "batch": "2024-25",
        "guardian_name": "Vijay Kumar",
        "guardian_phone": "+91-9876543230",
        "shift": "evening",
        "status": "active",
        "date_of_joining": date(2024, 5, 10),
    },
    {
        "id": "STU0004",
        "enrollment_number": "ENR2024004",
        "name": "Sneha Reddy",
        "class_name": "11th",
        "batch": "2024-25",
        "guardian_name": "Krishna Reddy",
        "guardian_phone": "+91-9876543240",
        "email": "sneha.reddy@email.com",
        "shift": "morning",
        "status": "active",
        "date_of_joining": date(2024, 6, 15),
    },
    {
        "id": "STU0005",
        "enrollment_number": "ENR2023010",
        "name": "Vikram Singh",
        "class_name": "12th",
        "batch": "2023-24",
        "guardian_name": "Harpal Singh",
        "guardian_phone": "+91-9876543250",
        "shift": "morning",
        "status": "inactive",
        "date_of_joining": date(2023, 4, 3),
        "date_of_exit": date(2024, 3, 31),
    },
]

# (id, student_id, date, morning_present, evening_present, marked_by)
ATTENDANCE: List[Tuple[str, str, date, bool, bool, str]] = [
    ("ATT0001", "STU0001", date(2025, 12, 14), True, True, "Class Teacher"),
    ("ATT0002", "STU0002", date(2025, 12, 14), False, True, "Class Teacher"),
    ("ATT0003", "STU0003", date(2025, 12, 14), True, False, "Class Teacher"),
    ("ATT0004", "STU0001", date(2025, 12, 13), True, False, "Class Teacher"),
]

BOOKS: List[Dict[str, Any]] = [
    {
        "id": "BK0001",
        "title": "Concepts of Physics",
        "author": "H.C. Verma",
        "isbn": "9788177091878",
        "publisher": "Bharati Bhawan",
        "category": "Physics",
        "total_copies": 5,
        "available_copies": 4,
        "price": 550,
    },
    {
        "id": "BK0002",
        "title": "Mathematics for Class XII",
        "author": "R.D. Sharma",
        "isbn": "9789383182275",
        "publisher": "Dhanpat Rai",
        "category": "Mathematics",
        "total_copies": 3,
        "available_copies": 2,
        "price": 720,
    },
    {
        "id": "BK0003",
        "title": "Organic Chemistry",
        "author": "Morrison and Boyd",
        "isbn": "9788131704813",
        "publisher": "Pearson",
        "category": "Chemistry",
        "total_copies": 2,
        "available_copies": 2,
        "price": 899,
    },
]

# (id, book_id, student_id, issue_date, due_date, return_date, fine_amount)
BOOK_ISSUES: List[Tuple[str, str, str, date, date, Any, int]] = [
    ("ISS0001", "BK0001", "STU0001", date(2025, 12, 1), date(2025, 12, 15), None, 0),
    ("ISS0002", "BK0002", "STU0002", date(2025, 11, 20), date(2025, 12, 4), None, 0),
    ("ISS0003", "BK0003", "STU0003", date(2025, 11, 10), date(2025, 11, 24), date(2025, 11, 26), 10),
]

# (id, room, section, seat_number, has_locker, status, occupied_by)
SEATS: List[Tuple[str, str, str, str, bool, str, Any]] = [
    ("SEAT0001", "Room A", "Section 1", "A-01", True, "occupied", "STU0001"),
    ("SEAT0002", "Room A", "Section 1", "A-02", False, "available", None),
    ("SEAT0003", "Room B", "Section 1", "B-01", True, "occupied", "STU0002"),
    ("SEAT0004", "Room B", "Section 1", "B-02", False, "disabled", None),
]

# (id, name, type, generated_at, generated_by, format)
REPORTS: List[Tuple[str, str, str, date, str, str]] = [
    ("RPT0001", "Student Master Report", "student_master", date(2025, 12, 14), "Admin", "pdf"),
    ("RPT0002", "Attendance Report", "attendance", date(2025, 12, 14), "Teacher", "excel"),
    ("RPT0003", "Fee Collection Report", "fees", date(2025, 12, 13), "Accountant", "pdf"),
    ("RPT0004", "Library Usage Report", "library", date(2025, 12, 12), "Librarian", "excel"),
    ("RPT0005", "Expenses Report", "expenses", date(2025, 12, 11), "Admin", "pdf"),
]

# (id, name, description, amount, is_recurring, due_day)
FEE_CATEGORIES: List[Tuple[str, str, str, int, bool, Any]] = [
    ("FEE0001", "Tuition Fee", "Monthly tuition", 5000, True, 5),
    ("FEE0002", "Library Fee", "Annual library membership", 500, False, None),
    ("FEE0003", "Locker Fee", "Monthly locker rent", 300, True, 5),
]

# (id, student_id, category_id, amount, due_date, paid_amount)
FEE_STRUCTURES: List[Tuple[str, str, str, int, date, int]] = [
    ("FS0001", "STU0001", "FEE0001", 5000, date(2025, 12, 5), 5000),
    ("FS0002", "STU0002", "FEE0001", 5000, date(2025, 12, 5), 2000),
    ("FS0003", "STU0003", "FEE0002", 500, date(2025, 12, 10), 0),
]

# (id, student_id, fee_structure_id, amount, payment_date, payment_method, receipt_number, received_by)
PAYMENTS: List[Tuple[str, str, str, int, date, str, str, str]] = [
    ("PAY0001", "STU0001", "FS0001", 5000, date(2025, 12, 3), "online", "REC123456A1B", "Accounts Officer"),
    ("PAY0002", "STU0002", "FS0002", 2000, date(2025, 12, 4), "cash", "REC123457X2Y", "Accounts Officer"),
]
