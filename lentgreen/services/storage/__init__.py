"""
Storage Services Package

Provides the abstract persistence interface and key-value implementations
(in-memory and JSON files on local disk).
"""

from typing import Optional

from lentgreen.config import StorageSettings
from lentgreen.services.storage.interface import (
    LedgerStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from lentgreen.services.storage.key_value import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    KeyValueLedgerStorage,
)


def create_storage(settings: Optional[StorageSettings] = None) -> LedgerStorageInterface:
    """Build the storage backend named in the settings."""
    settings = settings or StorageSettings()
    if settings.backend == "memory":
        return InMemoryLedgerStorage(settings)
    return JsonFileLedgerStorage(settings)


__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "KeyValueLedgerStorage",
    "create_storage",
]
