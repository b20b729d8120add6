"""
Redis Cache - Revyn Audit Platform
revyn_audit/services/redis_cache.py

Pydantic models stored as JSON strings under a namespaced key. Score
reports and generated reports never change once written, so entries are
only ever replaced by TTL expiry.
"""
import redis
from typing import Optional, Type, TypeVar
from pydantic import BaseModel

from revyn_audit.config import settings

T = TypeVar("T", bound=BaseModel)

KEY_PREFIX = "revyn"


class RedisCache:
    def __init__(self, url: Optional[str] = None, prefix: str = KEY_PREFIX):
        self.prefix = prefix
        self.client = redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=2,
        )

    def key(self, name: str) -> str:
        return f"{self.prefix}:{name}"

    def get(self, name: str, model: Type[T]) -> Optional[T]:
        """Load and validate a cached model; a miss is None."""
        raw = self.client.get(self.key(name))
        return model.model_validate_json(raw) if raw else None

    def set(self, name: str, value: BaseModel, ttl_seconds: int) -> None:
        self.client.set(self.key(name), value.model_dump_json(), ex=ttl_seconds)

    def ping(self) -> bool:
        return bool(self.client.ping())

    def close(self) -> None:
        self.client.close()
