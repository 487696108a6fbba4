"""
Message store - persistence for directed listing messages
"""
import logging
from typing import List, Optional

from sqlalchemy import and_, asc, desc, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.exceptions import StorageError, ValidationError
from marketplace.models import Message

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return not isinstance(value, str) or not value.strip()


class MessageStore:
    """Append-only store of Message rows"""

    @staticmethod
    def append(
        db: Session,
        sender_id: Optional[str],
        receiver_id: Optional[str],
        listing_id: Optional[str],
        content: Optional[str],
    ) -> Message:
        """
        Persist a new unread message

        Args:
            db: Database session
            sender_id: Sending user ID
            receiver_id: Receiving user ID
            listing_id: Listing the conversation is about
            content: Message text

        Returns:
            Stored message with generated id and created_at

        Raises:
            ValidationError: If a field is missing/blank or sender == receiver
            StorageError: If the insert fails
        """
        # Keyed by the request body names so clients can map errors to inputs
        fields = {
            "senderId": sender_id,
            "receiverId": receiver_id,
            "listingId": listing_id,
            "content": content,
        }
        missing = [name for name, value in fields.items() if _is_blank(value)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing)

        if sender_id == receiver_id:
            raise ValidationError("Cannot send message to yourself", ["receiverId"])

        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            listing_id=listing_id,
            content=content,
            read=False,
        )
        try:
            db.add(message)
            db.commit()
            db.refresh(message)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error sending message", extra={"user_id": sender_id, "listing_id": listing_id})
            raise StorageError("Failed to send message") from e

        logger.info(
            "Message stored",
            extra={"message_id": message.id, "user_id": sender_id, "listing_id": listing_id},
        )
        return message

    @staticmethod
    def find_by_participant(db: Session, user_id: str) -> List[Message]:
        """All messages sent or received by a user, newest first

        Rows sharing a timestamp are ordered by id so the latest message
        of a conversation is always the same row.
        """
        try:
            return db.query(Message).filter(
                or_(
                    Message.sender_id == user_id,
                    Message.receiver_id == user_id
                )
            ).order_by(desc(Message.created_at), desc(Message.id)).all()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error fetching conversations", extra={"user_id": user_id})
            raise StorageError("Failed to fetch conversations") from e

    @staticmethod
    def find_by_conversation(
        db: Session,
        user_id: str,
        listing_id: str,
        other_user_id: str
    ) -> List[Message]:
        """Both directions of one conversation, oldest first (ties by id)"""
        try:
            return db.query(Message).filter(
                Message.listing_id == listing_id,
                or_(
                    and_(
                        Message.sender_id == user_id,
                        Message.receiver_id == other_user_id
                    ),
                    and_(
                        Message.sender_id == other_user_id,
                        Message.receiver_id == user_id
                    )
                )
            ).order_by(asc(Message.created_at), asc(Message.id)).all()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error fetching messages", extra={"user_id": user_id, "listing_id": listing_id})
            raise StorageError("Failed to fetch messages") from e

    @staticmethod
    def mark_read(db: Session, listing_id: str, from_user_id: str, to_user_id: str) -> int:
        """
        Mark every unread message from one user to another about a listing as read

        Args:
            db: Database session
            listing_id: Listing ID
            from_user_id: Sender of the messages being marked
            to_user_id: Receiver (the reader)

        Returns:
            Number of messages that changed; 0 on repeat calls
        """
        try:
            count = db.query(Message).filter(
                Message.listing_id == listing_id,
                Message.sender_id == from_user_id,
                Message.receiver_id == to_user_id,
                Message.read == False
            ).update({"read": True}, synchronize_session="fetch")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error marking messages read", extra={"user_id": to_user_id, "listing_id": listing_id})
            raise StorageError("Failed to mark messages read") from e

        if count:
            logger.info(
                "Messages marked read",
                extra={"user_id": to_user_id, "listing_id": listing_id, "count": count},
            )
        return count

    @staticmethod
    def find_listing_participants(db: Session, listing_id: str) -> List[str]:
        """Distinct users who sent or received a message about a listing"""
        try:
            rows = db.query(Message.sender_id, Message.receiver_id).filter(
                Message.listing_id == listing_id
            ).distinct().all()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error fetching listing participants", extra={"listing_id": listing_id})
            raise StorageError("Failed to fetch messages") from e

        return sorted({user_id for row in rows for user_id in row})
