"""
Cache Service Singleton - Revyn Audit Platform
revyn_audit/services/cache.py

Singleton Redis cache with key builders and TTLs. Redis being down never
fails a request: get_cache() returns None and callers skip caching.
"""
import redis
import structlog
from typing import Optional, Type, TypeVar
from pydantic import BaseModel

from revyn_audit.services.redis_cache import RedisCache
from revyn_audit.config import settings

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

TTL_SCORE_REPORT = settings.CACHE_TTL_SCORES
TTL_GENERATED_REPORT = settings.CACHE_TTL_REPORTS

_cache: Optional[RedisCache] = None


def score_report_key(submission_id) -> str:
    return f"score_report:{submission_id}"


def generated_report_key(report_id) -> str:
    return f"report:{report_id}"


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.ping()
        except (redis.RedisError, ConnectionError) as e:
            logger.warning("redis_unavailable", error=str(e))
            _cache = None
    return _cache


def reset_cache() -> None:
    """Close and drop the singleton; the next get_cache() reconnects."""
    global _cache
    if _cache is not None:
        _cache.close()
    _cache = None


def cache_get(key: str, model: Type[T]) -> Optional[T]:
    """Read through the singleton; a Redis failure is a miss."""
    cache = get_cache()
    if cache is None:
        return None
    try:
        return cache.get(key, model)
    except redis.RedisError as e:
        logger.warning("cache_read_failed", key=key, error=str(e))
        return None


def cache_set(key: str, value: BaseModel, ttl_seconds: int) -> None:
    cache = get_cache()
    if cache is None:
        return
    try:
        cache.set(key, value, ttl_seconds)
    except redis.RedisError as e:
        logger.warning("cache_write_failed", key=key, error=str(e))
