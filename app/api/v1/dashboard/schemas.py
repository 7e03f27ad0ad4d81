from app.core.schemas import CamelModel


class DashboardStats(CamelModel):
    total_students: int
    active_students: int
    new_admissions: int
    students_left: int
    morning_shift_count: int
    evening_shift_count: int
    total_fees_collected: float
    pending_fees: float
    pending_fees_count: int
    overdue_books: int
    books_issued_today: int
    seat_total: int
    seats_occupied: int
    locker_total: int
    lockers_assigned: int
