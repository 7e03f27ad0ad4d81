from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.session import Base


class User(Base):
    """Dashboard user. role is one of the keys of the static permission table."""

    __tablename__ = "users"

    id = Column(String(20), primary_key=True)
    seq = Column(Integer, nullable=False, index=True)
    # Login key
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    # super_admin, admin, accountant, librarian, teacher, student
    role = Column(String(50), nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)

    sessions = relationship(
        "UserSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )


class UserSession(Base):
    """Server-side login session. The access token carries its id; logout deletes the row."""

    __tablename__ = "user_sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(20), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="sessions")
