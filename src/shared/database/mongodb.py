"""MongoDB connection utilities for workspace and settings records."""
import loguru
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from shared.config import settings


_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    """Get MongoDB client (singleton, created lazily on first use)."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=5000)
    return _client


def get_db() -> AsyncIOMotorDatabase:
    """Get the prompt composer database."""
    return get_client()[settings.mongodb_db]


async def ping_db() -> bool:
    """Check that MongoDB answers; used for startup diagnostics only."""
    try:
        await get_db().command("ping")
        return True
    except Exception as e:
        loguru.logger.warning(f"MongoDB ping failed url={settings.mongodb_url}: {e}")
        return False


async def close_db():
    """Close MongoDB connection."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
