"""
Reference Data Loader

Flat numbers and standard expense categories feed the dropdowns on the
income and expense forms. Both are small JSON arrays shipped with the app.

DESIGN DECISION: A form must never show an empty dropdown.
If a list cannot be read, a fixed fallback is returned and the failure is
logged instead of raised.
"""

from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from community_maintenance.audit import AuditLogger


FLATS_FALLBACK = ["101", "102", "Error Loading"]
EXPENSES_FALLBACK = ["Maintenance", "Other"]

_STRING_LIST = TypeAdapter(list[str])


class ReferenceDataLoader:
    """Reads the bundled reference lists with graceful fallback."""

    def __init__(
        self,
        data_dir: Path,
        flats_filename: str = "flats.json",
        expenses_filename: str = "standardExpenses.json",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._data_dir = Path(data_dir)
        self._flats_filename = flats_filename
        self._expenses_filename = expenses_filename
        self._audit = audit_logger or AuditLogger()

    def _read_list(self, filename: str, fallback: list[str]) -> list[str]:
        path = self._data_dir / filename
        try:
            return _STRING_LIST.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            self._audit.log_reference_fallback(filename, str(e), fallback)
            return list(fallback)

    def get_flats(self) -> list[str]:
        return self._read_list(self._flats_filename, FLATS_FALLBACK)

    def get_standard_expenses(self) -> list[str]:
        return self._read_list(self._expenses_filename, EXPENSES_FALLBACK)
