"""
Yearly CSV Report

Builds the export the committee shares at the end of the year: one
summary block for the whole year, then one section per month that has
any records.

The output is comma-joined lines meant for spreadsheet import, not
RFC-4180 CSV; values are written as-is.

DESIGN DECISION: Section dividers are dashes. An earlier "===" divider
was read as a formula by spreadsheet programs.
"""

import calendar
from decimal import Decimal
from pathlib import Path
from typing import Optional

from community_maintenance.audit import AuditLogger
from community_maintenance.models.record import Database
from community_maintenance.reports.summary import period_totals
from community_maintenance.services.storage import StorageError, write_text_atomic


REPORT_FILENAME_TEMPLATE = "Maintenance_Report_{year}.csv"
DIVIDER = "-" * 40
EMPTY_ROW = "None,0"

YEAR_HEADER = "Total Income (Paid),Total Expense,Total Pending,Final Balance"
MONTH_SUMMARY_HEADER = "Total Income (Paid),Total Expense,Total Pending"


def format_amount(amount: Decimal) -> str:
    """500 rather than 500.0 or 5E+2; 150.5 stays 150.5."""
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")


def report_filename(year: str) -> str:
    return REPORT_FILENAME_TEMPLATE.format(year=year)


def _month_section(database: Database, year: str, month: int) -> list[str]:
    """Lines for one month, or [] if the month has no records."""
    prefix = f"{year}-{month:02d}"
    records = [r for r in database.records if r.in_period(prefix)]
    if not records:
        return []

    lines = [
        DIVIDER,
        f"MONTHLY REPORT: {calendar.month_name[month]} {year}",
        DIVIDER,
        "",
        "PENDING INCOME",
        "Flat,Amount",
    ]
    pending = [r for r in records if r.is_pending_income]
    lines.extend(f"{r.flat_no or ''},{format_amount(r.amount)}" for r in pending)
    if not pending:
        lines.append(EMPTY_ROW)

    lines.extend(["", "MONTHLY EXPENSES", "Category,Amount"])
    expenses = [r for r in records if r.is_expense]
    lines.extend(f"{r.expense_name or ''},{format_amount(r.amount)}" for r in expenses)
    if not expenses:
        lines.append(EMPTY_ROW)

    paid, expense, pending_total = period_totals(records)
    lines.extend([
        "",
        "MONTH SUMMARY",
        MONTH_SUMMARY_HEADER,
        ",".join(format_amount(v) for v in (paid, expense, pending_total)),
        "",
    ])
    return lines


def build_yearly_report(database: Database, year: str) -> str:
    """The full report text for one year."""
    paid, expense, pending = period_totals(
        r for r in database.records if r.in_period(year)
    )
    lines = [
        f"YEARLY SUMMARY REPORT - {year}",
        YEAR_HEADER,
        ",".join(format_amount(v) for v in (paid, expense, pending, paid - expense)),
        "",
    ]
    for month in range(1, 13):
        lines.extend(_month_section(database, year, month))

    return "\n".join(lines) + "\n"


class YearlyReportGenerator:
    """
    Writes Maintenance_Report_<year>.csv into the data directory.

    A report for the same year replaces the previous file.
    """

    def __init__(
        self,
        output_dir: Path,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._output_dir = Path(output_dir)
        self._audit = audit_logger or AuditLogger()

    def report_path(self, year: str) -> Path:
        return self._output_dir / report_filename(year)

    def generate(self, database: Database, year: str) -> Path:
        """
        Build and write the report.

        Returns:
            Path of the written file, for sharing

        Raises:
            StorageError: If the file cannot be written
        """
        text = build_yearly_report(database, year)
        path = self.report_path(year)

        try:
            write_text_atomic(path, text)
        except OSError as e:
            self._audit.log_save_failed(str(path), str(e))
            raise StorageError(f"Failed to write report {path}: {e}") from e

        month_count = sum(
            1 for month in range(1, 13)
            if any(r.in_period(f"{year}-{month:02d}") for r in database.records)
        )
        self._audit.log_report_generated(year, path.name, month_count)
        return path
