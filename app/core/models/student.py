"""Enrolled students. enrollment_number is the natural key; id is the STU#### identifier."""

from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.session import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    enrollment_number = Column(String(50), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    class_name = Column("class", String(50), nullable=False)
    batch = Column(String(50), nullable=True)
    guardian_name = Column(String(255), nullable=True)
    guardian_phone = Column(String(30), nullable=True)
    phone = Column(String(30), nullable=True)
    email = Column(String(255), nullable=True)
    shift = Column(String(20), nullable=False, default="morning")  # morning, evening
    seat_number = Column(String(20), nullable=True)
    locker_assigned = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active, inactive
    date_of_joining = Column(Date, nullable=False, default=date.today)
    date_of_exit = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    emergency_contact = Column(String(30), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    attendance_records = relationship(
        "Attendance",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    fee_structures = relationship(
        "FeeStructure",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
