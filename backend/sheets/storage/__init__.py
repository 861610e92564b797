from typing import Optional
from .base import SheetStore
from .memory_storage import MemoryStorage
from .file_storage import FileStorage
from .dynamodb_storage import DynamoDBStorage
from sheets.core.config import settings


_storage_backend: Optional[SheetStore] = None


def get_storage() -> SheetStore:
    """Get the configured storage backend (singleton)"""
    global _storage_backend

    if _storage_backend is None:
        if settings.DYNAMODB_ENABLED and settings.DYNAMODB_TABLE_NAME:
            _storage_backend = DynamoDBStorage()
        else:
            _storage_backend = FileStorage()

    return _storage_backend


def set_storage(storage: Optional[SheetStore]) -> None:
    """Override the storage backend (None resets to the configured default)"""
    global _storage_backend
    _storage_backend = storage


__all__ = [
    "SheetStore", "MemoryStorage", "FileStorage", "DynamoDBStorage",
    "get_storage", "set_storage"
]
