from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db.session import Base


class Payment(Base):
    """Payment against a fee structure. Partial payments are allowed."""

    __tablename__ = "payments"

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    student_id = Column(String(20), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    fee_structure_id = Column(
        String(20),
        ForeignKey("fee_structures.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    payment_date = Column(Date, nullable=False, default=date.today)
    payment_method = Column(String(20), nullable=False)  # cash, card, online, cheque
    receipt_number = Column(String(30), nullable=False, unique=True)
    notes = Column(Text, nullable=True)
    received_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    fee_structure = relationship("FeeStructure", back_populates="payments")
