"""
Abstract Storage Interface

DESIGN DECISION: The ledger store talks to persistence through this
interface only. This allows us to:
1. Keep the data on local disk as keyed JSON records
2. Use in-memory storage for testing
3. Swap in another key-value backend without touching the store

The interface is intentionally tiny: the whole ledger is saved after
every mutation and loaded once at startup.
"""

from abc import ABC, abstractmethod

from lentgreen.models.ledger import LedgerSnapshot


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> None:
        """
        Persist the full ledger state.

        Args:
            snapshot: Debts, people and templates to store

        Raises:
            StorageWriteError: If any record could not be written
        """
        pass

    @abstractmethod
    def load(self) -> LedgerSnapshot:
        """
        Load the full ledger state.

        Missing records load as empty collections.

        Returns:
            The stored snapshot

        Raises:
            StorageReadError: If a record exists but cannot be read or decoded
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read or decoded."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written to storage."""
    pass
