# config/cache.py
from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

_redis: Optional[Redis] = None


async def get_redis() -> Redis:
    """
    Shared async client for the outcome log. Connection is lazy; nothing is
    sent until the first command, so an unreachable Redis only surfaces on use.
    """
    global _redis
    if _redis is None:
        _redis = from_url(
            settings.REDIS_URL,
            decode_responses=False,  # outcome rows are JSON bytes
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
            socket_keepalive=True,
            health_check_interval=30,
        )
    return _redis


async def ping_redis() -> bool:
    # Startup probe only; answering questions never depends on the sink.
    try:
        return bool(await (await get_redis()).ping())
    except Exception:
        return False


async def close_redis() -> None:
    global _redis
    client, _redis = _redis, None
    if client is not None:
        await client.aclose()
