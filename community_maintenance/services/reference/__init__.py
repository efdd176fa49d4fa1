"""Reference data package."""

from community_maintenance.services.reference.loader import (
    EXPENSES_FALLBACK,
    FLATS_FALLBACK,
    ReferenceDataLoader,
)

__all__ = [
    "EXPENSES_FALLBACK",
    "FLATS_FALLBACK",
    "ReferenceDataLoader",
]
