"""Daily attendance: one row per (student, date) with separate morning/evening flags."""

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
    )

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    student_id = Column(String(20), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    morning_present = Column(Boolean, nullable=False, default=False)
    evening_present = Column(Boolean, nullable=False, default=False)
    marked_by = Column(String(255), nullable=True)
    marked_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    # Joined on read; never copied into the row
    student = relationship("Student", back_populates="attendance_records", lazy="selectin")
