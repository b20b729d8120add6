"""
Health Check Router - Revyn Audit Platform
revyn_audit/routers/health.py

Live probes for Snowflake and Redis (the service cannot take submissions
without them) plus configured/not-configured flags for Stripe and OpenAI.
"""
from datetime import datetime, timezone
from typing import Dict

import redis
import snowflake.connector
from fastapi import APIRouter, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from snowflake.connector.errors import Error as SnowflakeError

from revyn_audit import __version__
from revyn_audit.config import get_settings

router = APIRouter(tags=["Health"])

CRITICAL_DEPENDENCIES = ("snowflake", "redis")
_REQUIRED_SNOWFLAKE = ("SNOWFLAKE_ACCOUNT", "SNOWFLAKE_USER", "SNOWFLAKE_PASSWORD")


class HealthStatus(BaseModel):
    status: str = Field(..., description="healthy or degraded")
    version: str
    checked_at: datetime
    dependencies: Dict[str, str]


def _truncate(error: Exception, limit: int = 100) -> str:
    text = str(error)
    return text if len(text) <= limit else text[:limit] + "..."


def _probe_snowflake() -> str:
    s = get_settings()
    missing = [name for name in _REQUIRED_SNOWFLAKE if not getattr(s, name)]
    if missing:
        return f"unhealthy: Missing env vars: {', '.join(missing)}"
    try:
        conn = snowflake.connector.connect(**s.snowflake_params)
        try:
            with conn.cursor() as cursor:
                user = cursor.execute("SELECT CURRENT_USER()").fetchone()[0]
        finally:
            conn.close()
    except SnowflakeError as e:
        return f"unhealthy: {_truncate(e)}"
    return f"healthy (User: {user})"


def _probe_redis() -> str:
    client = redis.from_url(get_settings().REDIS_URL, socket_connect_timeout=5)
    try:
        client.ping()
    except redis.RedisError as e:
        return f"unhealthy: {_truncate(e)}"
    finally:
        client.close()
    return "healthy"


async def check_snowflake() -> str:
    return await run_in_threadpool(_probe_snowflake)


async def check_redis() -> str:
    return await run_in_threadpool(_probe_redis)


def check_configured(value) -> str:
    return "configured" if value else "not configured"


@router.get(
    "/health",
    response_model=HealthStatus,
    responses={
        200: {"description": "Snowflake and Redis reachable"},
        503: {"model": HealthStatus, "description": "Snowflake or Redis unreachable"},
    },
    summary="Health check",
    description="Probes Snowflake and Redis; reports whether Stripe and OpenAI are configured.",
)
async def health_check():
    s = get_settings()
    results = {
        "snowflake": await check_snowflake(),
        "redis": await check_redis(),
        "stripe": check_configured(s.STRIPE_SECRET_KEY),
        "openai": check_configured(s.OPENAI_API_KEY),
    }
    degraded = [name for name in CRITICAL_DEPENDENCIES if not results[name].startswith("healthy")]

    body = HealthStatus(
        status="degraded" if degraded else "healthy",
        version=__version__,
        checked_at=datetime.now(timezone.utc),
        dependencies=results,
    )
    if degraded:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump(mode="json"))
    return body
