"""
Listing model
"""
from sqlalchemy import Column, String, Text, DateTime, Float, JSON
from datetime import datetime
from .base import Base, generate_id


class Listing(Base):
    """Balloon-decoration listing - read by messaging for display metadata"""
    __tablename__ = "listings"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(Text, nullable=False)
    description = Column(Text)
    event_type = Column(String(50), nullable=False)
    colors = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(Text)
    creator_id = Column(String(36), index=True)
    creator_name = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    @property
    def cover_image(self):
        """First image, used as the conversation thumbnail"""
        return self.images[0] if self.images else None

    def __repr__(self):
        return f"<Listing(id={self.id}, title='{self.title}')>"
