"""
Pydantic schemas
"""
from .message import MessageCreate, MessageResponse, ConversationResponse
from .listing import ListingCreate, ListingResponse
from .user import UserCreate, UserResponse

__all__ = [
    "MessageCreate",
    "MessageResponse",
    "ConversationResponse",
    "ListingCreate",
    "ListingResponse",
    "UserCreate",
    "UserResponse",
]
