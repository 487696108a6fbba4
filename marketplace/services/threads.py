"""
Thread reading - opening a conversation marks incoming messages read
"""
from typing import List

from sqlalchemy.orm import Session

from marketplace.models import Message
from marketplace.services.cache_service import cache_service
from marketplace.services.message_store import MessageStore


def open_thread(db: Session, user_id: str, listing_id: str, other_user_id: str) -> List[Message]:
    """
    Return the full thread between two users about a listing

    Every unread message from other_user_id to user_id is marked read
    before the thread is loaded, so the result already shows them as read.
    Repeated calls with nothing new are no-op updates.
    """
    marked = MessageStore.mark_read(db, listing_id, from_user_id=other_user_id, to_user_id=user_id)
    if marked:
        cache_service.invalidate_conversations(user_id)

    return MessageStore.find_by_conversation(db, user_id, listing_id, other_user_id)
