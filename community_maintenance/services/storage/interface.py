"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON file as the backend today
2. Use in-memory storage for testing
3. Move to an append-only log later without touching reporting code

The interface is intentionally small - it is exactly the set of calls the
presentation layer makes.
"""

from abc import ABC, abstractmethod
from typing import Optional

from community_maintenance.models.record import (
    Database,
    Transaction,
    TransactionType,
)


class RecordStorageInterface(ABC):
    """
    Abstract interface for transaction storage.

    Reads never fail: a missing or corrupt backend reads as an empty
    database. Writes either succeed or raise StorageError.
    """

    @abstractmethod
    def load(self) -> Database:
        """
        Load the whole database.

        Returns:
            The stored database, or a fresh empty one if nothing usable
            is stored
        """
        pass

    @abstractmethod
    def save(self, record: Transaction) -> None:
        """
        Append a record and persist.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def update(self, record: Transaction) -> bool:
        """
        Replace the first record with the same id, keeping its position.

        Returns:
            True if a record was replaced, False if no id matched
            (nothing is written in that case)

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """
        Remove the first record with this id.

        Returns:
            True if a record was removed, False if no id matched

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[Transaction]:
        """Return the first record with this id, or None."""
        pass

    @abstractmethod
    def list_records(
        self,
        record_type: Optional[TransactionType] = None,
        month: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        """
        List records with optional filters, newest date first.

        Args:
            record_type: Only income or only expense records
            month: YYYY-MM prefix the date must start with
            search: Case-insensitive substring of flat_no (income)
                    or expense_name (expense)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
