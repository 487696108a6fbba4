"""
Message submission - validate, store, invalidate cached views
"""
from typing import Optional

from sqlalchemy.orm import Session

from marketplace.models import Message
from marketplace.services.cache_service import cache_service
from marketplace.services.message_store import MessageStore


class MessageService:
    """Service for sending messages"""

    @staticmethod
    def send(
        db: Session,
        sender_id: Optional[str],
        receiver_id: Optional[str],
        listing_id: Optional[str],
        content: Optional[str],
    ) -> Message:
        """
        Send a message about a listing

        Raises:
            ValidationError: On missing/blank fields, nothing is stored
            StorageError: If the insert fails
        """
        message = MessageStore.append(db, sender_id, receiver_id, listing_id, content)

        # Both participants now have a different latest message
        cache_service.invalidate_conversations(sender_id, receiver_id)

        return message
