"""
Session store connection

Redis is connected once when the application starts. If REDIS_URL is empty
or the server does not answer, the application keeps sessions in process
memory until the next restart; requests never reconnect on their own, so a
session does not move between backends while the process runs.
"""
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shipcost.core.config import settings

logger = logging.getLogger(__name__)


async def connect_redis(url: Optional[str] = None) -> Optional[redis.Redis]:
    """
    Open the session store connection.

    Args:
        url: Redis URL, defaults to settings.REDIS_URL

    Returns:
        Connected client, or None for in-memory sessions
    """
    url = settings.REDIS_URL if url is None else url
    if not url:
        logger.info("REDIS_URL not set, sessions are kept in memory")
        return None

    client = redis.from_url(url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        logger.warning(f"Redis connection failed: {e}. Sessions are kept in memory until restart.")
        await client.aclose()
        return None

    logger.info("Redis session store connected")
    return client


async def disconnect_redis(client: Optional[redis.Redis]) -> None:
    """Close the session store connection on shutdown."""
    if client is not None:
        await client.aclose()
