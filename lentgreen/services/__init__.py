"""Services package: the store's external collaborators."""

from lentgreen.services.reminders import (
    LocalReminderScheduler,
    ReminderRequest,
    ReminderSchedulerInterface,
)
from lentgreen.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    KeyValueLedgerStorage,
    LedgerStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
    create_storage,
)

__all__ = [
    # Reminder services
    "LocalReminderScheduler",
    "ReminderRequest",
    "ReminderSchedulerInterface",
    # Storage services
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "KeyValueLedgerStorage",
    "LedgerStorageInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "create_storage",
]
