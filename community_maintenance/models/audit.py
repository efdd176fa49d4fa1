"""
Audit Models for the Maintenance Ledger

Every mutation, every silent recovery and every export is recorded.
The store deliberately swallows bad files and missing records, so the
audit trail is the only place those decisions become visible.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Record mutations
    RECORD_SAVED = "record_saved"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"
    RECORD_NOT_FOUND = "record_not_found"
    SAVE_FAILED = "save_failed"

    # Silent recoveries
    DATABASE_RECOVERED = "database_recovered"
    REFERENCE_DATA_FALLBACK = "reference_data_fallback"
    FILE_LISTING_FAILED = "file_listing_failed"

    # Exports
    REPORT_GENERATED = "report_generated"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_id is a plain string because record ids are caller assigned
    (INC-..., EXP-...) rather than UUIDs.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'record', 'report', 'file')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID or name of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }

    def to_json_line(self) -> str:
        """One line of the JSON-lines audit file."""
        return json.dumps(self.to_log_dict(), default=str, ensure_ascii=False)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_saved("EXP-1700000000000", "expense", "150")
        event = AuditEventBuilder.database_recovered(path, "Expecting value")
    """

    @staticmethod
    def record_saved(record_id: str, record_type: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SAVED,
            entity_type="record",
            entity_id=record_id,
            description=f"Record saved: {record_type} {amount}",
            details={
                "type": record_type,
                "amount": amount,
            },
        )

    @staticmethod
    def record_updated(record_id: str, position: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_UPDATED,
            entity_type="record",
            entity_id=record_id,
            description=f"Record updated: {record_id}",
            details={"position": position},
        )

    @staticmethod
    def record_deleted(record_id: str, position: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            entity_type="record",
            entity_id=record_id,
            description=f"Record deleted: {record_id}",
            details={"position": position},
        )

    @staticmethod
    def record_not_found(record_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="record",
            entity_id=record_id,
            description=f"{operation.capitalize()} skipped, no record with id {record_id}",
            details={"operation": operation},
        )

    @staticmethod
    def save_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="file",
            entity_id=path,
            description=f"Could not write {path}",
            error_message=error_message,
        )

    @staticmethod
    def database_recovered(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATABASE_RECOVERED,
            severity=AuditSeverity.WARNING,
            entity_type="file",
            entity_id=path,
            description="Database file unreadable, starting from an empty database",
            error_message=error_message,
        )

    @staticmethod
    def reference_data_fallback(
        filename: str,
        error_message: str,
        fallback: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REFERENCE_DATA_FALLBACK,
            severity=AuditSeverity.WARNING,
            entity_type="file",
            entity_id=filename,
            description=f"Reference list {filename} unavailable, using fallback",
            error_message=error_message,
            details={"fallback": fallback},
        )

    @staticmethod
    def file_listing_failed(directory: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILE_LISTING_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="directory",
            entity_id=directory,
            description="Data directory could not be listed",
            error_message=error_message,
        )

    @staticmethod
    def report_generated(year: str, filename: str, month_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            entity_type="report",
            entity_id=filename,
            description=f"Yearly report generated for {year}",
            details={
                "year": year,
                "months": month_count,
            },
        )
