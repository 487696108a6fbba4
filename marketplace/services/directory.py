"""
Listing and user directory - collaborator lookups used for display metadata
"""
import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.exceptions import StorageError, ValidationError
from marketplace.models import Listing, User
from marketplace.schemas.listing import ListingCreate
from marketplace.services.cache_service import cache_service
from marketplace.services.message_store import MessageStore

logger = logging.getLogger(__name__)


class ListingDirectory:
    """Service for listing operations"""

    @staticmethod
    def get(db: Session, listing_id: str) -> Optional[Listing]:
        """Get listing by ID, None if it does not exist"""
        try:
            return db.query(Listing).filter(Listing.id == listing_id).first()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error fetching listing", extra={"listing_id": listing_id})
            raise StorageError("Failed to fetch listing") from e

    @staticmethod
    def list_all(db: Session) -> List[Listing]:
        """All listings, newest first"""
        try:
            return db.query(Listing).order_by(desc(Listing.created_at)).all()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error fetching listings")
            raise StorageError("Failed to fetch listings") from e

    @staticmethod
    def create(db: Session, data: ListingCreate) -> Listing:
        """Create a listing"""
        listing = Listing(**data.model_dump())
        try:
            db.add(listing)
            db.commit()
            db.refresh(listing)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error creating listing")
            raise StorageError("Failed to create listing") from e

        logger.info("Listing created", extra={"listing_id": listing.id})
        return listing

    @staticmethod
    def delete(db: Session, listing_id: str) -> bool:
        """
        Delete a listing

        Messages about the listing are kept; conversations fall back
        to the unknown-listing title, and the cached conversation lists
        of everyone who messaged about it are dropped.

        Returns:
            True if a listing was deleted
        """
        try:
            deleted = db.query(Listing).filter(Listing.id == listing_id).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error deleting listing", extra={"listing_id": listing_id})
            raise StorageError("Failed to delete listing") from e

        if deleted:
            logger.info("Listing deleted", extra={"listing_id": listing_id})
            # Cached lists still carry the old title and image
            cache_service.invalidate_conversations(*MessageStore.find_listing_participants(db, listing_id))
        return bool(deleted)


class UserDirectory:
    """Service for user operations"""

    @staticmethod
    def get(db: Session, user_id: str) -> Optional[User]:
        """Get user by ID, None if it does not exist"""
        try:
            return db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error fetching user", extra={"user_id": user_id})
            raise StorageError("Failed to fetch user") from e

    @staticmethod
    def create(db: Session, username: Optional[str]) -> User:
        """
        Create a new user

        Raises:
            ValidationError: If username is empty or already taken
        """
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("Missing required fields: username", ["username"])

        username = username.strip()
        user = User(username=username)
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as e:
            db.rollback()
            raise ValidationError("Username already exists", ["username"]) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error creating user")
            raise StorageError("Failed to create user") from e

        logger.info("User created", extra={"user_id": user.id})
        return user
