"""
Message Pydantic schemas
"""
from typing import Optional

from .base import CamelModel, UTCDateTime


class MessageCreate(CamelModel):
    """Schema for sending a message

    Fields are optional here so that missing values reach the
    submission handler and come back as a 400 with field names.
    """
    sender_id: Optional[str] = None
    receiver_id: Optional[str] = None
    listing_id: Optional[str] = None
    content: Optional[str] = None


class MessageResponse(CamelModel):
    """Schema for a stored message"""
    id: str
    sender_id: str
    receiver_id: str
    listing_id: str
    content: str
    read: bool
    created_at: UTCDateTime


class ConversationResponse(CamelModel):
    """One row of a user's conversation list"""
    listing_id: str
    listing_title: str
    listing_image: Optional[str] = None
    other_user_id: str
    other_user_name: str
    last_message: str
    last_message_time: UTCDateTime
    unread_count: int

    @classmethod
    def from_summary(cls, summary) -> "ConversationResponse":
        return cls(
            listing_id=summary.listing_id,
            listing_title=summary.listing_title,
            listing_image=summary.listing_image,
            other_user_id=summary.other_user_id,
            other_user_name=summary.other_user_name,
            last_message=summary.last_message.content,
            last_message_time=summary.last_message.created_at,
            unread_count=summary.unread_count,
        )
