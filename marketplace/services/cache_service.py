"""
Cache service - Redis caching of conversation lists
"""
import json
import logging
from typing import Any, List, Optional

import redis

from marketplace.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """Service for caching operations

    Any Redis failure is logged and treated as a cache miss so a missing
    cache never fails a request.
    """

    def __init__(self, client: Optional[redis.Redis] = None, enabled: Optional[bool] = None):
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self._client = client

    @property
    def redis_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
        return self._client

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        if not self.enabled:
            return None
        try:
            value = self.redis_client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache get error: {e}")
            return None

        if value is None:
            logger.debug(f"Cache miss: {key}")
            return None
        logger.debug(f"Cache hit: {key}")
        return json.loads(value)

    def set(self, key: str, value: Any, ttl: int = 60) -> bool:
        """
        Set value in cache

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Time to live in seconds

        Returns:
            True if successful
        """
        if not self.enabled:
            return False
        try:
            self.redis_client.setex(key, ttl, json.dumps(value))
            return True
        except redis.RedisError as e:
            logger.warning(f"Cache set error: {e}")
            return False

    def delete(self, *keys: str) -> int:
        """Delete keys from cache"""
        if not self.enabled or not keys:
            return 0
        try:
            return self.redis_client.delete(*keys)
        except redis.RedisError as e:
            logger.warning(f"Cache delete error: {e}")
            return 0

    @staticmethod
    def conversations_key(user_id: str) -> str:
        return f"conversations:{user_id}"

    def get_conversations(self, user_id: str) -> Optional[List[dict]]:
        """Cached conversation list for a user"""
        return self.get(self.conversations_key(user_id))

    def set_conversations(self, user_id: str, conversations: List[dict]) -> bool:
        return self.set(
            self.conversations_key(user_id),
            conversations,
            ttl=settings.CONVERSATION_CACHE_TTL,
        )

    def invalidate_conversations(self, *user_ids: str) -> int:
        """Drop cached conversation lists for the given users"""
        deleted = self.delete(*(self.conversations_key(user_id) for user_id in user_ids))
        if deleted:
            logger.info(f"Invalidated {deleted} conversation cache entries")
        return deleted

    def ping(self) -> bool:
        """Check Redis connection"""
        if not self.enabled:
            return False
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError as e:
            logger.warning(f"Cache ping failed: {e}")
            return False


# Global cache service instance
cache_service = CacheService()
