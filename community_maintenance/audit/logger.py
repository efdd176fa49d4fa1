"""
Audit Logger

DESIGN DECISION: Every significant action in the ledger is logged.
This provides:
1. Complete traceability of every record change
2. Visibility into the silent fallbacks (corrupt file, missing lists)
3. A history the committee can review

The audit logger:
- Is synchronous, like the rest of the core
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
from typing import Optional

import structlog

from community_maintenance.audit.storage import AuditStorageInterface
from community_maintenance.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output to stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("community_maintenance.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_record_saved(self, record_id: str, record_type: str, amount: str) -> None:
        self.log(AuditEventBuilder.record_saved(record_id, record_type, amount))

    def log_record_updated(self, record_id: str, position: int) -> None:
        self.log(AuditEventBuilder.record_updated(record_id, position))

    def log_record_deleted(self, record_id: str, position: int) -> None:
        self.log(AuditEventBuilder.record_deleted(record_id, position))

    def log_record_not_found(self, record_id: str, operation: str) -> None:
        """Update/delete targeted an id that is not in the database."""
        self.log(AuditEventBuilder.record_not_found(record_id, operation))

    def log_save_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(path, error_message))

    def log_database_recovered(self, path: str, error_message: str) -> None:
        """The database file was unreadable and an empty database was used."""
        self.log(AuditEventBuilder.database_recovered(path, error_message))

    def log_reference_fallback(
        self,
        filename: str,
        error_message: str,
        fallback: list[str],
    ) -> None:
        self.log(AuditEventBuilder.reference_data_fallback(filename, error_message, fallback))

    def log_file_listing_failed(self, directory: str, error_message: str) -> None:
        self.log(AuditEventBuilder.file_listing_failed(directory, error_message))

    def log_report_generated(self, year: str, filename: str, month_count: int) -> None:
        self.log(AuditEventBuilder.report_generated(year, filename, month_count))
