"""
Core Data Models for the Maintenance Ledger

These models define the schema of everything persisted in maintenance.json
and everything handed back to the presentation layer.

DESIGN DECISION: Validation is limited to type coercion.
The presentation layer owns input validation (numeric parsing, non-empty
checks, date picking). The store only needs records it can round-trip.
"""

import time
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    Field,
    field_serializer,
    field_validator,
)


SCHEMA_VERSION = 1
DEFAULT_APP_ID = "community-maintenance"
DEFAULT_CURRENCY = "INR"


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Kind of transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class IncomeStatus(str, Enum):
    """
    Payment status of an income record.

    Only PAID income counts toward the realized balance.
    """
    PAID = "paid"
    PENDING = "pending"


# =============================================================================
# TRANSACTION + DATABASE
# =============================================================================

class Transaction(BaseModel):
    """
    One income or expense entry.

    Income records carry flat_no and status, expense records carry
    expense_name. The id is assigned by the caller and only has to be unique.
    """
    id: str = Field(
        ...,
        description="Unique record id (caller assigned)"
    )
    type: str = Field(
        ...,
        description="income or expense; other values are kept but never counted"
    )
    date: str = Field(
        ...,
        description="YYYY-MM-DD; also matched by month/year prefix"
    )
    amount: Decimal = Field(
        ...,
        description="Amount in the database currency"
    )
    flat_no: Optional[str] = Field(
        default=None,
        description="Paying flat (income only)"
    )
    status: Optional[str] = Field(
        default=None,
        description="paid or pending (income only); other values are kept but never counted"
    )
    expense_name: Optional[str] = Field(
        default=None,
        description="Expense category label (expense only)"
    )
    photo_files: list[str] = Field(
        default_factory=list,
        description="Receipt image filenames stored next to the database"
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        """Type is matched case-insensitively ("Expense" is expense)."""
        if isinstance(v, Enum):
            v = v.value
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        """
        Status is matched case-insensitively ("Paid" is paid).

        An unrecognized status such as "partial" is kept (lowercased) and
        counts as neither paid nor pending.
        """
        if isinstance(v, Enum):
            v = v.value
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> Union[int, float]:
        # Keep amounts as JSON numbers, not strings
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_paid_income(self) -> bool:
        return self.is_income and self.status == IncomeStatus.PAID

    @property
    def is_pending_income(self) -> bool:
        return self.is_income and self.status == IncomeStatus.PENDING

    def in_period(self, prefix: str) -> bool:
        """True if the date starts with a year ("2025") or month ("2025-03") prefix."""
        return self.date.startswith(prefix)


class Database(BaseModel):
    """
    The persisted aggregate.

    CRITICAL: records are kept in insertion order. Nothing is sorted
    before writing, and the whole aggregate is rewritten on every mutation.
    """

    schema_version: int = Field(
        default=SCHEMA_VERSION,
        description="Version stamp of the file layout"
    )
    app: str = Field(
        default=DEFAULT_APP_ID,
        description="Application identifier"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        description="Currency code for every amount"
    )
    records: list[Transaction] = Field(
        default_factory=list,
        description="All transactions, insertion order"
    )

    def index_of(self, record_id: str) -> int:
        """Position of the first record with this id, or -1."""
        for idx, record in enumerate(self.records):
            if record.id == record_id:
                return idx
        return -1

    def find(self, record_id: str) -> Optional[Transaction]:
        idx = self.index_of(record_id)
        return self.records[idx] if idx != -1 else None


class LoadResult(BaseModel):
    """
    Outcome of reading the backing file.

    The store falls back to an empty Database on any failure, but the
    failure itself is kept here so it can be logged and tested.
    """

    database: Database
    error: Optional[str] = None

    @property
    def recovered(self) -> bool:
        """Did we fall back to an empty database because of a bad file?"""
        return self.error is not None


# =============================================================================
# SUMMARY + FILE MODELS
# =============================================================================

class DashboardSummary(BaseModel):
    """Totals over the full record set."""

    total_income: Decimal = Field(
        default=Decimal(0),
        description="Paid income"
    )
    total_expense: Decimal = Field(
        default=Decimal(0),
        description="All expenses"
    )
    balance: Decimal = Field(
        default=Decimal(0),
        description="Paid income minus expenses (pending excluded)"
    )
    pending_income: Decimal = Field(
        default=Decimal(0),
        description="Income not yet received"
    )


class MonthSummary(DashboardSummary):
    """Totals for one YYYY-MM month."""

    month: str = Field(
        ...,
        description="YYYY-MM prefix the totals were computed over"
    )


class FileMeta(BaseModel):
    """A file in the data directory, for the raw-file browser."""

    name: str
    size_bytes: int = Field(ge=0)
    last_modified: Optional[datetime] = None


# =============================================================================
# ID HELPERS
# =============================================================================

def new_income_id(date: str) -> str:
    """Income id in the INC-<date>-<4 chars> form used by the income screen."""
    return f"INC-{date}-{uuid4().hex[:4]}"


def new_expense_id() -> str:
    """Expense id in the EXP-<epoch millis> form used by the expense screen."""
    return f"EXP-{int(time.time() * 1000)}"
