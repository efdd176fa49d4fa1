"""
Main Orchestrator for the Maintenance Ledger

This module ties the components together behind the one object the
presentation layer talks to:
1. Records (load / save / update / delete, plus lookups and filters)
2. Dashboard and monthly summaries
3. Yearly CSV export
4. Raw file listing and dropdown reference data

DESIGN DECISION: There is no process-wide singleton. A MaintenanceService
is constructed once per session with an explicit data directory, so every
test can run against its own temporary directory.
"""

from pathlib import Path
from typing import Optional

from community_maintenance.audit import AuditLogger, JsonLinesAuditStorage, configure_logging
from community_maintenance.config import Settings, get_settings
from community_maintenance.models.record import (
    DashboardSummary,
    Database,
    FileMeta,
    MonthSummary,
    Transaction,
    TransactionType,
)
from community_maintenance.reports import (
    YearlyReportGenerator,
    summarize,
    summarize_month,
)
from community_maintenance.services.reference import ReferenceDataLoader
from community_maintenance.services.storage import (
    JsonRecordStore,
    RecordStorageInterface,
    list_files,
)


class MaintenanceService:
    """
    Call-level interface used by the screens.

    The presentation layer owns id generation, input validation, date
    picking, photo capture and user-facing messages. Everything here is
    synchronous and bounded by local file I/O.
    """

    def __init__(
        self,
        data_dir: Path,
        store: Optional[RecordStorageInterface] = None,
        reference_loader: Optional[ReferenceDataLoader] = None,
        report_generator: Optional[YearlyReportGenerator] = None,
        audit_logger: Optional[AuditLogger] = None,
        db_filename: str = "maintenance.json",
    ):
        self._data_dir = Path(data_dir)
        self._audit = audit_logger or AuditLogger()
        self._store = store or JsonRecordStore(
            self._data_dir / db_filename,
            audit_logger=self._audit,
        )
        self._reference = reference_loader or ReferenceDataLoader(
            get_settings().reference.data_dir,
            audit_logger=self._audit,
        )
        self._reports = report_generator or YearlyReportGenerator(
            self._data_dir,
            audit_logger=self._audit,
        )

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def store(self) -> RecordStorageInterface:
        return self._store

    # -- records --------------------------------------------------------------

    def load(self) -> Database:
        return self._store.load()

    def save(self, record: Transaction) -> None:
        self._store.save(record)

    def update(self, record: Transaction) -> bool:
        return self._store.update(record)

    def delete(self, record_id: str) -> bool:
        return self._store.delete(record_id)

    def get(self, record_id: str) -> Optional[Transaction]:
        return self._store.get(record_id)

    def list_records(
        self,
        record_type: Optional[TransactionType] = None,
        month: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        return self._store.list_records(record_type=record_type, month=month, search=search)

    # -- summaries and reports ------------------------------------------------

    def summarize(self) -> DashboardSummary:
        return summarize(self._store.load())

    def summarize_month(self, month: str) -> MonthSummary:
        """Monthly preview for a YYYY-MM month."""
        return summarize_month(self._store.load(), month)

    def generate_yearly_report(self, year: str) -> Path:
        """
        Write Maintenance_Report_<year>.csv and return its path.

        Sharing the file is up to the caller.
        """
        return self._reports.generate(self._store.load(), year)

    # -- files and reference data ---------------------------------------------

    def list_files(self) -> list[FileMeta]:
        return list_files(self._data_dir, audit_logger=self._audit)

    def get_flats(self) -> list[str]:
        return self._reference.get_flats()

    def get_standard_expenses(self) -> list[str]:
        return self._reference.get_standard_expenses()


def create_service(
    data_dir: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> MaintenanceService:
    """
    Build a MaintenanceService from configuration.

    data_dir overrides MAINTENANCE_DATA_DIR; everything else comes from
    settings (environment / .env).
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    reference_settings = settings.reference
    app_settings = settings.app

    configure_logging(app_settings.log_level)

    root = Path(data_dir) if data_dir is not None else storage_settings.data_dir

    audit_storage = None
    if app_settings.audit_log_enabled:
        audit_storage = JsonLinesAuditStorage(root / app_settings.audit_log_filename)
    audit_logger = AuditLogger(storage=audit_storage)

    store = JsonRecordStore(
        root / storage_settings.db_filename,
        app_id=storage_settings.app_id,
        currency=storage_settings.currency,
        audit_logger=audit_logger,
    )
    reference_loader = ReferenceDataLoader(
        reference_settings.data_dir,
        flats_filename=reference_settings.flats_filename,
        expenses_filename=reference_settings.expenses_filename,
        audit_logger=audit_logger,
    )

    return MaintenanceService(
        root,
        store=store,
        reference_loader=reference_loader,
        audit_logger=audit_logger,
    )
