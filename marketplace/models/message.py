"""
Message model
"""
from sqlalchemy import Column, String, Text, DateTime, Boolean, Index
from datetime import datetime
from .base import Base, generate_id


class Message(Base):
    """Directed message between two users about one listing

    Rows are append-only: only ``read`` is ever updated, and only from
    False to True. ``listing_id``, ``sender_id`` and ``receiver_id`` are
    soft references so deleting a listing or user never touches messages.
    """
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    sender_id = Column(String(36), nullable=False, index=True)
    receiver_id = Column(String(36), nullable=False, index=True)
    listing_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        Index("idx_sender_created", "sender_id", "created_at"),
        Index("idx_receiver_created", "receiver_id", "created_at"),
        Index("idx_thread_unread", "listing_id", "sender_id", "receiver_id", "read"),
    )

    def other_party(self, user_id: str) -> str:
        """Counterpart of ``user_id`` in this message"""
        return self.receiver_id if self.sender_id == user_id else self.sender_id

    def __repr__(self):
        return f"<Message(id={self.id}, from={self.sender_id}, to={self.receiver_id}, listing={self.listing_id})>"
