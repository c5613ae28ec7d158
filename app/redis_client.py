# app/redis_client.py
import redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry
from .config import settings
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class RedisStorage:
    """
    Key-value storage on Redis with connection pooling and automatic reconnection.

    Values are written without expiry: the catalog lives in Redis for as long
    as the server keeps it. Every key is namespaced with ``key_prefix``.
    """

    def __init__(self, url: Optional[str] = None, key_prefix: Optional[str] = None):
        self.url = url or settings.REDIS_URL
        self.key_prefix = settings.REDIS_KEY_PREFIX if key_prefix is None else key_prefix
        self.redis: Optional[redis.Redis] = None
        self.pool: Optional[redis.ConnectionPool] = None

    def connect(self):
        """Initialize Redis connection with connection pooling"""
        try:
            if self.redis:
                logger.warning("⚠️ Redis already connected")
                return

            self.pool = redis.ConnectionPool.from_url(
                self.url,
                decode_responses=True,
                max_connections=20,
                socket_keepalive=True,
                socket_connect_timeout=5,
                retry_on_timeout=True,
                retry=Retry(ExponentialBackoff(cap=0.5, base=0.05), retries=2),
                health_check_interval=30,
            )

            self.redis = redis.Redis(connection_pool=self.pool)

            # Test connection
            self.redis.ping()

            logger.info("✅ Redis connected with connection pooling")

        except Exception as e:
            logger.error(f"❌ Redis connection failed: {e}")
            self.redis = None
            self.pool = None
            raise

    def disconnect(self):
        """Close Redis connection and pool"""
        try:
            if self.redis:
                self.redis.close()
                logger.info("✅ Redis connection closed")

            if self.pool:
                self.pool.disconnect()
                logger.info("✅ Redis pool disconnected")

            self.redis = None
            self.pool = None

        except Exception as e:
            logger.error(f"❌ Redis disconnect error: {e}")

    def _ensure_connected(self):
        """Ensure Redis is connected (auto-reconnect)"""
        if not self.redis:
            self.connect()

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def ping(self) -> bool:
        """Check if Redis is alive"""
        try:
            self._ensure_connected()
            return bool(self.redis.ping())
        except Exception as e:
            logger.error(f"❌ Redis ping failed: {e}")
            return False

    def get_item(self, key: str) -> Optional[str]:
        """Get raw value from Redis, None when missing or unreachable"""
        try:
            self._ensure_connected()
            return self.redis.get(self._key(key))

        except Exception as e:
            logger.error(f"❌ Redis GET error for key '{key}': {e}")
            return None

    def set_item(self, key: str, value: str) -> bool:
        """
        Set value in Redis

        Args:
            key: Storage key (prefix is added here)
            value: Serialized value

        Returns:
            True if successful, False otherwise
        """
        try:
            self._ensure_connected()
            return bool(self.redis.set(self._key(key), value))

        except Exception as e:
            logger.error(f"❌ Redis SET error for key '{key}': {e}")
            return False

    def remove_item(self, key: str) -> bool:
        """Delete key from Redis"""
        try:
            self._ensure_connected()
            self.redis.delete(self._key(key))
            return True

        except Exception as e:
            logger.error(f"❌ Redis DELETE error for key '{key}': {e}")
            return False

    def close(self):
        self.disconnect()


__all__ = ['RedisStorage']
