from sqlalchemy import Column, Integer, String

from app.db.session import Base


class IdSequence(Base):
    """Monotonic counter per identifier prefix (STU, ATT, BK, ...)."""

    __tablename__ = "id_sequences"

    prefix = Column(String(10), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
