from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class FeeCategory(Base):
    """Fee head (tuition, library, locker, ...) with its default amount."""

    __tablename__ = "fee_categories"

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    due_day = Column(Integer, nullable=True)  # day of month for recurring fees
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
