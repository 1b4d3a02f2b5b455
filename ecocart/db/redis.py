# ecocart/db/redis.py
import redis.asyncio as redis
from ecocart.core.config import get_settings

redis_client: redis.Redis | None = None


async def connect():
    """
    Connect Redis when REDIS_URL is set. Redis only backs the alternatives cache,
    so a missing or unreachable server disables caching instead of blocking startup.
    """
    global redis_client
    settings = get_settings()
    if not settings.REDIS_URL:
        print("⚠️ No REDIS_URL configured, alternatives cache disabled.")
        redis_client = None
        return

    try:
        print(f"Connecting to Redis at {settings.REDIS_URL}")
        redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        await redis_client.ping()
        print("✅ Redis connection successful")
    except Exception as e:
        print(f"⚠️ Failed to connect to Redis: {e}")
        redis_client = None


async def disconnect():
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        print("ℹ️ Redis disconnected")


def get_redis() -> redis.Redis | None:
    """Redis client, or None when not configured / unreachable. Callers must handle None."""
    return redis_client
