"""Shared fixtures: every test gets its own data directory."""

from decimal import Decimal

import pytest

from community_maintenance.config import get_settings
from community_maintenance.models.record import Transaction, TransactionType
from community_maintenance.orchestrator import MaintenanceService
from community_maintenance.services.storage import JsonRecordStore


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "files"
    path.mkdir()
    return path


@pytest.fixture
def store(data_dir):
    return JsonRecordStore(data_dir / "maintenance.json")


@pytest.fixture
def service(data_dir):
    return MaintenanceService(data_dir)


@pytest.fixture
def march_records():
    """Paid income, pending income and one expense, all in March 2025."""
    return [
        Transaction(
            id="A",
            type=TransactionType.INCOME,
            date="2025-03-05",
            amount=Decimal("500"),
            flat_no="101",
            status="paid",
        ),
        Transaction(
            id="B",
            type=TransactionType.INCOME,
            date="2025-03-10",
            amount=Decimal("200"),
            status="pending",
        ),
        Transaction(
            id="C",
            type=TransactionType.EXPENSE,
            date="2025-03-12",
            amount=Decimal("150"),
            expense_name="Cleaning",
        ),
    ]
