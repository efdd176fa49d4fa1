"""Summary and report package."""

from community_maintenance.reports.summary import (
    period_totals,
    summarize,
    summarize_month,
)
from community_maintenance.reports.yearly import (
    DIVIDER,
    YearlyReportGenerator,
    build_yearly_report,
    format_amount,
    report_filename,
)

__all__ = [
    "DIVIDER",
    "YearlyReportGenerator",
    "build_yearly_report",
    "format_amount",
    "period_totals",
    "report_filename",
    "summarize",
    "summarize_month",
]
