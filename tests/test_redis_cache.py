"""
Redis Cache Tests - Revyn Audit Platform
tests/test_redis_cache.py

Cache hits, misses, invalidation, and graceful degradation when Redis
is unreachable.
"""
import pytest
import redis
from unittest.mock import patch, MagicMock
from uuid import uuid4

from revyn_audit.models.audit import ScoreReport
from revyn_audit.models.enumerations import MaturityLevel
from revyn_audit.services import cache as cache_mod
from revyn_audit.services.redis_cache import RedisCache

# Bound before the autouse fixture patches the module attribute.
from revyn_audit.services.cache import get_cache, reset_cache

FROM_URL = "revyn_audit.services.redis_cache.redis.from_url"


def sample_report() -> ScoreReport:
    return ScoreReport(
        overall_score=72,
        maturity_level=MaturityLevel.DEVELOPING,
        categories=[],
        recommendations=["Prioritize data analytics and measurement capabilities."],
    )


@pytest.fixture
def fresh_singleton():
    reset_cache()
    yield
    reset_cache()


class TestRedisCache:
    """Tests for the RedisCache class."""

    def test_init_uses_url(self):
        with patch(FROM_URL) as from_url:
            RedisCache("redis://cache:6379/2")
        assert from_url.call_args.args[0] == "redis://cache:6379/2"
        assert from_url.call_args.kwargs["decode_responses"] is True

    def test_keys_are_namespaced(self):
        with patch(FROM_URL):
            assert RedisCache().key("report:1") == "revyn:report:1"
            assert RedisCache(prefix="test").key("report:1") == "test:report:1"

    def test_set_and_get(self):
        with patch(FROM_URL) as from_url:
            client = from_url.return_value
            cache = RedisCache()
            report = sample_report()

            cache.set("score_report:1", report, 300)
            client.set.assert_called_once_with("revyn:score_report:1", report.model_dump_json(), ex=300)

            client.get.return_value = report.model_dump_json()
            assert cache.get("score_report:1", ScoreReport) == report
            client.get.assert_called_with("revyn:score_report:1")

    def test_get_miss(self):
        with patch(FROM_URL) as from_url:
            from_url.return_value.get.return_value = None
            assert RedisCache().get("missing", ScoreReport) is None

    def test_close(self):
        with patch(FROM_URL) as from_url:
            RedisCache().close()
            from_url.return_value.close.assert_called_once()


class TestCacheSingleton:
    """Tests for get_cache() and the read/write helpers."""

    def test_get_cache_connects_once(self, fresh_singleton):
        with patch(FROM_URL) as from_url:
            first = get_cache()
            second = get_cache()
        assert first is not None
        assert first is second
        from_url.assert_called_once()

    def test_get_cache_returns_none_when_redis_down(self, fresh_singleton):
        with patch(FROM_URL) as from_url:
            from_url.return_value.ping.side_effect = redis.ConnectionError("refused")
            assert get_cache() is None

    def test_reset_closes_client(self, fresh_singleton):
        with patch(FROM_URL) as from_url:
            assert get_cache() is not None
            reset_cache()
        from_url.return_value.close.assert_called_once()

    def test_key_builders(self):
        submission_id = uuid4()
        assert cache_mod.score_report_key(submission_id) == f"score_report:{submission_id}"
        assert cache_mod.generated_report_key("abc") == "report:abc"

    def test_ttls_come_from_settings(self):
        assert cache_mod.TTL_SCORE_REPORT == cache_mod.settings.CACHE_TTL_SCORES
        assert cache_mod.TTL_GENERATED_REPORT == cache_mod.settings.CACHE_TTL_REPORTS

    def test_cache_get_without_redis_is_a_miss(self):
        assert cache_mod.cache_get("score_report:1", ScoreReport) is None

    def test_cache_get_read_error_is_a_miss(self):
        broken = MagicMock()
        broken.get.side_effect = redis.TimeoutError("slow")
        with patch("revyn_audit.services.cache.get_cache", return_value=broken):
            assert cache_mod.cache_get("score_report:1", ScoreReport) is None

    def test_cache_set_write_error_is_swallowed(self):
        broken = MagicMock()
        broken.set.side_effect = redis.ConnectionError("gone")
        with patch("revyn_audit.services.cache.get_cache", return_value=broken):
            cache_mod.cache_set("score_report:1", sample_report(), 60)
        broken.set.assert_called_once()
