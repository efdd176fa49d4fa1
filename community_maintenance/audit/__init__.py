"""Audit logging package."""

from community_maintenance.audit.logger import AuditLogger, configure_logging
from community_maintenance.audit.storage import AuditStorageInterface, JsonLinesAuditStorage

__all__ = [
    "AuditLogger",
    "AuditStorageInterface",
    "JsonLinesAuditStorage",
    "configure_logging",
]
