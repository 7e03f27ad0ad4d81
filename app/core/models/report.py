"""Generated report metadata. The artifact itself is not stored here."""

from datetime import date, datetime

from sqlalchemy import JSON, Column, Date, DateTime, Integer, String

from app.db.session import Base


class Report(Base):
    __tablename__ = "reports"

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)  # student_master, attendance, fees, library, expenses
    filters = Column(JSON, nullable=False, default=dict)
    generated_at = Column(Date, nullable=False, default=date.today)
    generated_by = Column(String(255), nullable=False)
    format = Column(String(10), nullable=False)  # pdf, excel, csv
    download_url = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
