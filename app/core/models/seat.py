from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base


class Seat(Base):
    """Study hall seat, identified by (room, section, seat_number)."""

    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("room", "section", "seat_number", name="uq_seat_room_section_number"),
    )

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    room = Column(String(50), nullable=False)
    section = Column(String(50), nullable=False)
    seat_number = Column(String(20), nullable=False)
    has_locker = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="available")  # available, occupied, disabled
    occupied_by = Column(String(20), ForeignKey("students.id", ondelete="SET NULL"), nullable=True, unique=True)
    last_modified = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("Student", lazy="selectin")
