"""
Storage Services Package

Provides the abstract record storage interface and the JSON file backend,
plus the file helpers shared by the store and the report writer.
"""

from community_maintenance.services.storage.interface import (
    RecordStorageInterface,
    StorageError,
)
from community_maintenance.services.storage.files import (
    list_files,
    write_text_atomic,
)
from community_maintenance.services.storage.json_store import JsonRecordStore

__all__ = [
    # Interfaces
    "RecordStorageInterface",
    # Exceptions
    "StorageError",
    # JSON file implementation
    "JsonRecordStore",
    "list_files",
    "write_text_atomic",
]
