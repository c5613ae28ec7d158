from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
import logging

from .config import settings

logger = logging.getLogger(__name__)

# ============================================================
# Database Engine
# ============================================================

def engine_options(url: str) -> dict:
    """
    Engine keyword arguments for the given URL.
    SQLite needs cross-thread access because FastAPI serves sync
    endpoints from a threadpool.
    """
    options = {
        "echo": settings.DB_ECHO,
        "future": True,
        "pool_pre_ping": True,
    }
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_size=5, max_overflow=10, pool_timeout=30, pool_recycle=1800)
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

# ============================================================
# Base Model
# ============================================================

Base = declarative_base()

# ============================================================
# Connection Event Listeners
# ============================================================

@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    """Log database connections"""
    logger.debug("Database connection established")


# ============================================================
# Startup/Shutdown Handlers
# ============================================================

def init_db(bind=None):
    """Create the key-value table if it does not exist yet"""
    from .models.storage_item import StorageItem  # noqa: F401  registers the table

    try:
        logger.info("🔄 Creating storage tables...")
        Base.metadata.create_all(bind=bind or engine)
        logger.info("✅ Storage tables ready")
    except Exception as e:
        logger.error(f"❌ Database init failed: {e}", exc_info=True)
        raise


def close_db():
    """
    Close database connections on shutdown.
    """
    try:
        logger.info("🔄 Closing database connections...")
        engine.dispose()
        logger.info("✅ Database connections closed")
    except Exception as e:
        logger.error(f"❌ Error closing database: {e}")


__all__ = [
    'Base',
    'engine',
    'engine_options',
    'SessionLocal',
    'init_db',
    'close_db',
]
