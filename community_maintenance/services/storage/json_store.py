"""
JSON File Storage Implementation

DESIGN DECISION: The whole database is one pretty-printed JSON file because:
1. The committee can open and read it directly
2. No database setup on a single device
3. Datasets are tiny (a few hundred records a year)

TRADEOFFS:
- Every mutation rewrites the entire file (fine at this scale)
- Two processes writing the same file still race; last writer wins
- Filtering and aggregation happen in Python

Within one store instance, read-modify-write cycles are serialized by a
lock, so threads sharing a store never lose each other's updates.
"""

import json
import threading
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from community_maintenance.audit import AuditLogger
from community_maintenance.models.record import (
    DEFAULT_APP_ID,
    DEFAULT_CURRENCY,
    Database,
    LoadResult,
    Transaction,
    TransactionType,
)
from community_maintenance.services.storage.files import write_text_atomic
from community_maintenance.services.storage.interface import (
    RecordStorageInterface,
    StorageError,
)


class JsonRecordStore(RecordStorageInterface):
    """
    maintenance.json implementation of record storage.

    Records are kept in insertion order; update and delete act on the
    first record with a matching id.
    """

    def __init__(
        self,
        path: Path,
        app_id: str = DEFAULT_APP_ID,
        currency: str = DEFAULT_CURRENCY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._path = Path(path)
        self._app_id = app_id
        self._currency = currency
        self._audit = audit_logger or AuditLogger()
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _empty_database(self) -> Database:
        return Database(app=self._app_id, currency=self._currency)

    def read(self) -> LoadResult:
        """
        Read the backing file without hiding what went wrong.

        A missing file is not an error. An unreadable or malformed file
        yields an empty database with the parse error attached.
        """
        if not self._path.exists():
            return LoadResult(database=self._empty_database())

        try:
            text = self._path.read_text(encoding="utf-8")
            data = json.loads(text, parse_float=Decimal)
            database = Database.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            return LoadResult(database=self._empty_database(), error=str(e))

        return LoadResult(database=database)

    def load(self) -> Database:
        with self._lock:
            result = self.read()
        if result.recovered:
            self._audit.log_database_recovered(str(self._path), result.error)
        return result.database

    def _persist(self, database: Database) -> None:
        """Write the entire database back, or raise StorageError."""
        try:
            write_text_atomic(self._path, database.model_dump_json(indent=2))
        except OSError as e:
            self._audit.log_save_failed(str(self._path), str(e))
            raise StorageError(f"Failed to write database {self._path}: {e}") from e

    def save(self, record: Transaction) -> None:
        with self._lock:
            database = self.load()
            database.records.append(record)
            self._persist(database)
        self._audit.log_record_saved(record.id, record.type, str(record.amount))

    def update(self, record: Transaction) -> bool:
        with self._lock:
            database = self.load()
            idx = database.index_of(record.id)
            if idx == -1:
                self._audit.log_record_not_found(record.id, "update")
                return False
            database.records[idx] = record
            self._persist(database)
        self._audit.log_record_updated(record.id, idx)
        return True

    def delete(self, record_id: str) -> bool:
        with self._lock:
            database = self.load()
            idx = database.index_of(record_id)
            if idx == -1:
                self._audit.log_record_not_found(record_id, "delete")
                return False
            del database.records[idx]
            self._persist(database)
        self._audit.log_record_deleted(record_id, idx)
        return True

    def get(self, record_id: str) -> Optional[Transaction]:
        return self.load().find(record_id)

    def list_records(
        self,
        record_type: Optional[TransactionType] = None,
        month: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        needle = search.lower() if search else ""

        records = []
        for record in self.load().records:
            if record_type and record.type != record_type:
                continue
            if month and not record.in_period(month):
                continue
            if needle:
                label = record.flat_no if record.is_income else record.expense_name
                if not label or needle not in label.lower():
                    continue
            records.append(record)

        # Newest first, same-day records keep insertion order
        records.sort(key=lambda r: r.date, reverse=True)
        return records
