"""
Summary Aggregation

Totals for the dashboard and the monthly preview.

DESIGN DECISION: Pending income is reported but never counted in the
balance. Money a flat has not paid yet is not money the committee has.
"""

from decimal import Decimal
from typing import Iterable

from community_maintenance.models.record import (
    DashboardSummary,
    Database,
    MonthSummary,
    Transaction,
)


def period_totals(records: Iterable[Transaction]) -> tuple[Decimal, Decimal, Decimal]:
    """
    Sum (paid income, expense, pending income) over records.

    Each income record lands in at most one bucket; income with no
    status is in neither.
    """
    paid = Decimal(0)
    expense = Decimal(0)
    pending = Decimal(0)

    for record in records:
        if record.is_paid_income:
            paid += record.amount
        elif record.is_pending_income:
            pending += record.amount
        elif record.is_expense:
            expense += record.amount

    return paid, expense, pending


def summarize(database: Database) -> DashboardSummary:
    """Dashboard totals over every record."""
    paid, expense, pending = period_totals(database.records)
    return DashboardSummary(
        total_income=paid,
        total_expense=expense,
        balance=paid - expense,
        pending_income=pending,
    )


def summarize_month(database: Database, month: str) -> MonthSummary:
    """
    Totals for records whose date starts with month (YYYY-MM).

    Same rules as summarize(), including the net balance shown on the
    monthly preview.
    """
    paid, expense, pending = period_totals(
        record for record in database.records if record.in_period(month)
    )
    return MonthSummary(
        month=month,
        total_income=paid,
        total_expense=expense,
        balance=paid - expense,
        pending_income=pending,
    )
