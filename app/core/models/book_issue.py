"""Book circulation. Status is not stored: it follows from return_date and due_date."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class BookIssue(Base):
    __tablename__ = "book_issues"

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    book_id = Column(String(20), ForeignKey("library_books.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(20), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=True)
    # Frozen at return time; open issues compute the running fine on read
    fine_amount = Column(Integer, nullable=False, default=0)
    issued_by = Column(String(255), nullable=True)
    returned_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    book = relationship("LibraryBook", lazy="selectin")
    student = relationship("Student", lazy="selectin")
