"""
Service layer - business logic
"""
from .message_store import MessageStore
from .directory import ListingDirectory, UserDirectory
from .conversations import ConversationService, ConversationSummary, aggregate_conversations
from .threads import open_thread
from .messages import MessageService
from .cache_service import CacheService, cache_service

__all__ = [
    "MessageStore",
    "ListingDirectory",
    "UserDirectory",
    "ConversationService",
    "ConversationSummary",
    "aggregate_conversations",
    "open_thread",
    "MessageService",
    "CacheService",
    "cache_service",
]
