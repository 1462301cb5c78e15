"""
Redis Cache Service - secondary write-through cache for board elements

The database is always the source of truth. Every method swallows Redis
errors (logged at WARNING) so a cache outage never changes an API response.
"""

import json
from typing import Optional, Any, Type

import redis.asyncio as redis
from pydantic import BaseModel

from app.core.config import settings
from app.core.logging_config import logger


def cache_payload(schema: Type[BaseModel], obj: Any) -> dict:
    """Render an ORM object through its response schema for storage"""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


class CacheService:
    """
    Redis-based cache for components, relationships and cross-board links

    Cache Strategy:
    - Components: CACHE_TTL_COMPONENT (1 hour)
    - Relationships: CACHE_TTL_RELATIONSHIP (1 hour)
    - Cross-board links: CACHE_TTL_CROSS_BOARD_LINK (2 hours)
    """

    # Key prefixes for organization
    PREFIX_COMPONENT = "component:"
    PREFIX_RELATIONSHIP = "relationship:"
    PREFIX_CROSS_BOARD_LINK = "cross-board-link:"

    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self._pool = None
        self._redis = None

    async def _get_redis(self) -> redis.Redis:
        """Lazy initialization of Redis connection pool"""
        if self._redis is None:
            self._pool = redis.ConnectionPool.from_url(
                settings.REDIS_URL,
                db=settings.REDIS_CACHE_DB,
                max_connections=50,
                decode_responses=True
            )
            self._redis = redis.Redis(connection_pool=self._pool)
            logger.info("Redis cache connection established")
        return self._redis

    async def close(self):
        """Close Redis connection"""
        if self._redis:
            await self._redis.close()
            self._redis = None
        if self._pool:
            await self._pool.disconnect()
            self._pool = None

    # ========== Generic helpers ==========

    async def _set(self, key: str, data: Any, ttl: int) -> bool:
        if not self.enabled:
            return False
        try:
            r = await self._get_redis()
            await r.setex(key, ttl, json.dumps(data, default=str))
            logger.debug(f"Cached {key} (ttl={ttl}s)")
            return True
        except Exception as e:
            logger.warning(f"Cache error (set {key}): {e}")
            return False

    async def _delete(self, key: str) -> bool:
        if not self.enabled:
            return False
        try:
            r = await self._get_redis()
            await r.delete(key)
            logger.debug(f"Evicted {key}")
            return True
        except Exception as e:
            logger.warning(f"Cache error (delete {key}): {e}")
            return False

    # ========== Components ==========

    async def set_component(self, component_id: str, data: dict) -> bool:
        return await self._set(f"{self.PREFIX_COMPONENT}{component_id}", data, settings.CACHE_TTL_COMPONENT)

    async def delete_component(self, component_id: str) -> bool:
        return await self._delete(f"{self.PREFIX_COMPONENT}{component_id}")

    # ========== Relationships ==========

    async def set_relationship(self, relationship_id: str, data: dict) -> bool:
        return await self._set(
            f"{self.PREFIX_RELATIONSHIP}{relationship_id}", data, settings.CACHE_TTL_RELATIONSHIP
        )

    async def delete_relationship(self, relationship_id: str) -> bool:
        return await self._delete(f"{self.PREFIX_RELATIONSHIP}{relationship_id}")

    # ========== Cross-board links ==========

    async def set_cross_board_link(self, link_id: str, data: dict) -> bool:
        return await self._set(
            f"{self.PREFIX_CROSS_BOARD_LINK}{link_id}", data, settings.CACHE_TTL_CROSS_BOARD_LINK
        )

    async def delete_cross_board_link(self, link_id: str) -> bool:
        return await self._delete(f"{self.PREFIX_CROSS_BOARD_LINK}{link_id}")

    # ========== Health ==========

    async def ping(self) -> str:
        """'disabled', 'connected' or 'disconnected'"""
        if not self.enabled:
            return "disabled"
        try:
            r = await self._get_redis()
            await r.ping()
            return "connected"
        except Exception as e:
            logger.warning(f"Cache error (ping): {e}")
            return "disconnected"


# Singleton instance
cache_service = CacheService()
