"""Fee owed by a student for a category and due date. Status and remaining amount are derived."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base


class FeeStructure(Base):
    __tablename__ = "fee_structures"
    __table_args__ = (
        UniqueConstraint("student_id", "category_id", "due_date", name="uq_fee_structure_student_category_due"),
    )

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    student_id = Column(String(20), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(20), ForeignKey("fee_categories.id", ondelete="RESTRICT"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="fee_structures")
    category = relationship("FeeCategory", lazy="selectin")
    payments = relationship(
        "Payment",
        back_populates="fee_structure",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
