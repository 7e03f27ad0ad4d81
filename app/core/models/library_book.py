from datetime import datetime

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class LibraryBook(Base):
    """Catalogue entry. available_copies counts copies on the shelf."""

    __tablename__ = "library_books"
    __table_args__ = (
        CheckConstraint(
            "available_copies >= 0 AND available_copies <= total_copies",
            name="ck_library_books_available_copies",
        ),
    )

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    isbn = Column(String(20), nullable=False, unique=True)
    edition = Column(String(50), nullable=True)
    publisher = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)
    total_copies = Column(Integer, nullable=False)
    available_copies = Column(Integer, nullable=False)
    purchase_date = Column(Date, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
