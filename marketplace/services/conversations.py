"""
Conversation aggregation - one summary per (listing, counterpart)
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from marketplace.config import settings
from marketplace.models import Message
from marketplace.services.directory import ListingDirectory, UserDirectory
from marketplace.services.message_store import MessageStore

logger = logging.getLogger(__name__)


@dataclass
class ConversationSummary:
    """Derived view of a conversation for one viewing user"""
    listing_id: str
    other_user_id: str
    last_message: Message
    unread_count: int = 0
    listing_title: Optional[str] = None
    listing_image: Optional[str] = None
    other_user_name: Optional[str] = None


def aggregate_conversations(messages: Iterable[Message], user_id: str) -> List[ConversationSummary]:
    """
    Group a user's messages into conversations

    Args:
        messages: Messages newest first; ones user_id is not part of are skipped
        user_id: Viewing user

    Returns:
        Summaries in order of most recent activity
    """
    conversations: Dict[Tuple[str, str], ConversationSummary] = {}

    for msg in messages:
        if user_id not in (msg.sender_id, msg.receiver_id):
            continue

        key = (msg.listing_id, msg.other_party(user_id))

        summary = conversations.get(key)
        if summary is None:
            # Input is newest first, so the first message seen is the latest
            summary = ConversationSummary(
                listing_id=msg.listing_id,
                other_user_id=key[1],
                last_message=msg,
            )
            conversations[key] = summary

        if msg.receiver_id == user_id and not msg.read:
            summary.unread_count += 1

    return list(conversations.values())


class ConversationService:
    """Service for conversation list operations"""

    @staticmethod
    def list_conversations(db: Session, user_id: str) -> List[ConversationSummary]:
        """
        Conversation list for a user, enriched with listing and user display fields

        Deleted listings or users fall back to placeholder text instead of
        failing the request.
        """
        summaries = aggregate_conversations(MessageStore.find_by_participant(db, user_id), user_id)

        listings = {}
        users = {}
        for summary in summaries:
            if summary.listing_id not in listings:
                listings[summary.listing_id] = ListingDirectory.get(db, summary.listing_id)
            if summary.other_user_id not in users:
                users[summary.other_user_id] = UserDirectory.get(db, summary.other_user_id)

            listing = listings[summary.listing_id]
            if listing is not None:
                summary.listing_title = listing.title
                summary.listing_image = listing.cover_image
            else:
                summary.listing_title = settings.UNKNOWN_LISTING_TITLE
                summary.listing_image = None

            other_user = users[summary.other_user_id]
            summary.other_user_name = other_user.username if other_user is not None else settings.UNKNOWN_USER_NAME

        logger.debug(
            "Conversations aggregated",
            extra={"user_id": user_id, "count": len(summaries)},
        )
        return summaries
