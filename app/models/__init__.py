from app.database import Base
from app.models.storage_item import StorageItem

# This ensures all models are registered with Base.metadata
__all__ = ["Base", "StorageItem"]
