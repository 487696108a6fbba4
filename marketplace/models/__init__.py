"""
Database models
"""
from .base import Base
from .user import User
from .listing import Listing
from .message import Message

__all__ = ["Base", "User", "Listing", "Message"]
