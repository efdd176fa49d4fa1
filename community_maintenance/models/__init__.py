"""
Data Models Package

This package contains all Pydantic models used by the maintenance ledger.
Everything persisted or returned to the presentation layer is one of these.
"""

from community_maintenance.models.record import (
    DEFAULT_APP_ID,
    DEFAULT_CURRENCY,
    SCHEMA_VERSION,
    DashboardSummary,
    Database,
    FileMeta,
    IncomeStatus,
    LoadResult,
    MonthSummary,
    Transaction,
    TransactionType,
    new_expense_id,
    new_income_id,
)
from community_maintenance.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "DEFAULT_APP_ID",
    "DEFAULT_CURRENCY",
    "SCHEMA_VERSION",
    "DashboardSummary",
    "Database",
    "FileMeta",
    "IncomeStatus",
    "LoadResult",
    "MonthSummary",
    "Transaction",
    "TransactionType",
    "new_expense_id",
    "new_income_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
