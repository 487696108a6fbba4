"""
User model
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime
from .base import Base, generate_id


class User(Base):
    """Marketplace user - read by messaging for display names"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(50), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
