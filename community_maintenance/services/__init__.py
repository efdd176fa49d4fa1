"""Services package."""

from community_maintenance.services.reference import (
    EXPENSES_FALLBACK,
    FLATS_FALLBACK,
    ReferenceDataLoader,
)
from community_maintenance.services.storage import (
    JsonRecordStore,
    RecordStorageInterface,
    StorageError,
    list_files,
    write_text_atomic,
)

__all__ = [
    # Reference data
    "EXPENSES_FALLBACK",
    "FLATS_FALLBACK",
    "ReferenceDataLoader",
    # Storage services
    "JsonRecordStore",
    "RecordStorageInterface",
    "StorageError",
    "list_files",
    "write_text_atomic",
]
