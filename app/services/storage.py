import logging
import threading
from typing import Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from ..config import Settings, settings
from ..database import SessionLocal, init_db
from ..models.storage_item import StorageItem
from ..redis_client import RedisStorage

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed storage; state lives as long as the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> bool:
        with self._lock:
            self._items[key] = value
        return True

    def remove_item(self, key: str) -> bool:
        with self._lock:
            self._items.pop(key, None)
        return True

    def ping(self) -> bool:
        return True

    def close(self):
        pass


class SqlStorage:
    """Key-value storage on the ``storage_items`` table"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            item = db.get(StorageItem, key)
            return item.value if item else None
        except Exception as e:
            logger.error(f"❌ SQL GET error for key '{key}': {e}")
            return None
        finally:
            db.close()

    def set_item(self, key: str, value: str) -> bool:
        db = self.session_factory()
        try:
            item = db.get(StorageItem, key)
            if item:
                item.value = value
            else:
                db.add(StorageItem(key=key, value=value))
            db.commit()
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"❌ SQL SET error for key '{key}': {e}")
            return False
        finally:
            db.close()

    def remove_item(self, key: str) -> bool:
        db = self.session_factory()
        try:
            db.query(StorageItem).filter(StorageItem.key == key).delete()
            db.commit()
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"❌ SQL DELETE error for key '{key}': {e}")
            return False
        finally:
            db.close()

    def ping(self) -> bool:
        """Check if the database is accessible and responsive"""
        db = self.session_factory()
        try:
            db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
        finally:
            db.close()

    def close(self):
        pass


def build_storage(config: Settings = settings):
    """Pick the storage backend named by STORAGE_BACKEND"""
    backend = config.storage_backend

    if backend == "memory":
        logger.warning("⚠️ Using in-memory storage, data is lost on restart")
        return MemoryStorage()

    if backend == "redis":
        logger.info(f"📦 Using Redis storage (prefix '{config.REDIS_KEY_PREFIX}')")
        return RedisStorage(config.REDIS_URL, config.REDIS_KEY_PREFIX)

    if backend == "sql":
        logger.info("📦 Using SQL storage")
        init_db()
        return SqlStorage()

    raise ValueError(f"Unknown STORAGE_BACKEND '{config.STORAGE_BACKEND}' (expected sql, redis or memory)")


__all__ = ["MemoryStorage", "SqlStorage", "RedisStorage", "build_storage"]
