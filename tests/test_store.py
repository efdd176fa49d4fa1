"""Tests for the JSON record store."""

import json
import threading
from decimal import Decimal

import pytest

from community_maintenance.models.record import Transaction, TransactionType
from community_maintenance.services.storage import JsonRecordStore, StorageError


def _expense(record_id, date="2025-03-12", amount="150", name="Cleaning"):
    return Transaction(
        id=record_id,
        type=TransactionType.EXPENSE,
        date=date,
        amount=Decimal(amount),
        expense_name=name,
    )


class TestLoad:
    """Tests for loading and silent recovery."""

    def test_missing_file_gives_empty_database(self, store):
        """Test that an absent file reads as a fresh database."""
        database = store.load()
        assert database.records == []
        assert database.schema_version == 1
        assert not store.path.exists()

    def test_corrupt_json_gives_empty_database(self, store):
        """Test that unparseable content is recovered, not raised."""
        store.path.write_text("{not json", encoding="utf-8")
        result = store.read()
        assert result.recovered is True
        assert result.database.records == []
        assert store.load().records == []

    def test_wrong_structure_gives_empty_database(self, store):
        """Test that valid JSON with the wrong shape is recovered."""
        store.path.write_text(json.dumps({"records": "oops"}), encoding="utf-8")
        assert store.read().recovered is True
        store.path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        assert store.load().records == []

    def test_fresh_database_uses_configured_stamp(self, data_dir):
        """Test app id and currency on a new database."""
        store = JsonRecordStore(data_dir / "db.json", app_id="tower-b", currency="USD")
        database = store.load()
        assert database.app == "tower-b"
        assert database.currency == "USD"

    def test_reads_file_written_by_older_app(self, store):
        """Test a file with float amounts and mixed-case status."""
        store.path.write_text(
            json.dumps({
                "schema_version": 1,
                "app": "community-maintenance",
                "currency": "INR",
                "records": [
                    {
                        "id": "INC-2025-01-02-ab12",
                        "type": "income",
                        "date": "2025-01-02",
                        "amount": 1500.0,
                        "flat_no": "101",
                        "status": "Paid",
                        "photo_files": [],
                    }
                ],
            }),
            encoding="utf-8",
        )
        record = store.load().records[0]
        assert record.amount == Decimal("1500")
        assert record.is_paid_income is True

    def test_odd_record_does_not_hide_the_others(self, store):
        """Test that an unknown status or a capitalized type still loads and survives a save."""
        def raw(record_id, **fields):
            return {"id": record_id, "date": "2025-03-05", "amount": 100, **fields}

        store.path.write_text(
            json.dumps({
                "schema_version": 1,
                "app": "community-maintenance",
                "currency": "INR",
                "records": [
                    raw("A", type="income", flat_no="101", status="paid"),
                    raw("B", type="income", flat_no="102", status="partial"),
                    raw("C", type="Expense", expense_name="Cleaning"),
                    raw("X", type="refund"),
                ],
            }),
            encoding="utf-8",
        )

        assert store.read().recovered is False
        records = store.load().records
        assert [r.id for r in records] == ["A", "B", "C", "X"]
        assert records[1].status == "partial"
        assert records[2].is_expense is True
        assert records[3].is_income is False and records[3].is_expense is False

        store.save(_expense("D"))

        saved = json.loads(store.path.read_text(encoding="utf-8"))["records"]
        assert [r["id"] for r in saved] == ["A", "B", "C", "X", "D"]
        assert saved[1]["status"] == "partial"


class TestSave:
    """Tests for appending records."""

    def test_save_then_load_round_trip(self, store, march_records):
        """Test that load returns prior records plus the new one."""
        for record in march_records[:2]:
            store.save(record)
        before = store.load().records

        store.save(march_records[2])

        assert store.load().records == before + [march_records[2]]

    def test_save_keeps_insertion_order(self, store):
        """Test that records are not sorted by date."""
        store.save(_expense("late", date="2025-12-01"))
        store.save(_expense("early", date="2025-01-01"))
        assert [r.id for r in store.load().records] == ["late", "early"]

    def test_persisted_file_is_pretty_printed_json(self, store, march_records):
        """Test the on-disk format."""
        store.save(march_records[0])
        text = store.path.read_text(encoding="utf-8")
        assert "\n  " in text
        data = json.loads(text)
        assert data["schema_version"] == 1
        assert data["app"] == "community-maintenance"
        assert data["currency"] == "INR"
        assert data["records"][0]["id"] == "A"
        assert data["records"][0]["amount"] == 500

    def test_non_ascii_labels_survive(self, store):
        """Test UTF-8 content round-trips."""
        store.save(_expense("E1", name="Jardinería"))
        assert store.load().records[0].expense_name == "Jardinería"

    def test_decimal_amount_round_trips(self, store):
        """Test that fractional amounts come back exactly."""
        store.save(_expense("E1", amount="99.95"))
        assert store.load().records[0].amount == Decimal("99.95")

    def test_save_over_corrupt_file_starts_fresh(self, store, march_records):
        """Test that a save after a bad file leaves a valid database."""
        store.path.write_text("garbage", encoding="utf-8")
        store.save(march_records[0])
        assert [r.id for r in store.load().records] == ["A"]

    def test_write_failure_raises_storage_error(self, tmp_path, march_records):
        """Test that an unwritable location surfaces as StorageError."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        store = JsonRecordStore(blocker / "maintenance.json")

        with pytest.raises(StorageError):
            store.save(march_records[0])

    def test_no_temp_files_left_behind(self, store, data_dir, march_records):
        """Test that the atomic write cleans up after itself."""
        for record in march_records:
            store.save(record)
        assert [p.name for p in data_dir.iterdir()] == ["maintenance.json"]


class TestUpdate:
    """Tests for replacing records by id."""

    def test_update_preserves_position(self, store, march_records):
        """Test that updating index 1 keeps length and order."""
        for record in march_records:
            store.save(record)

        changed = march_records[1].model_copy(update={"status": "paid", "flat_no": "202"})
        assert store.update(changed) is True

        records = store.load().records
        assert [r.id for r in records] == ["A", "B", "C"]
        assert records[1].flat_no == "202"
        assert records[1].is_paid_income is True

    def test_update_missing_id_is_noop(self, store, march_records):
        """Test that an unknown id changes nothing."""
        store.save(march_records[0])
        before = store.path.read_text(encoding="utf-8")

        assert store.update(_expense("nope")) is False
        assert store.path.read_text(encoding="utf-8") == before

    def test_update_touches_first_duplicate_only(self, store):
        """Test the first-match rule with duplicate ids."""
        store.save(_expense("dup", amount="1"))
        store.save(_expense("dup", amount="2"))

        store.update(_expense("dup", amount="9"))

        assert [r.amount for r in store.load().records] == [Decimal("9"), Decimal("2")]


class TestDelete:
    """Tests for removing records by id."""

    def test_delete_removes_record(self, store, march_records):
        """Test deleting the middle record."""
        for record in march_records:
            store.save(record)
        assert store.delete("B") is True
        assert [r.id for r in store.load().records] == ["A", "C"]

    def test_delete_is_idempotent(self, store, march_records):
        """Test that a second delete leaves the database unchanged."""
        for record in march_records:
            store.save(record)
        store.delete("B")
        after_first = store.load()

        assert store.delete("B") is False
        assert store.load() == after_first

    def test_delete_removes_at_most_one(self, store):
        """Test that only the first duplicate is removed."""
        store.save(_expense("dup", amount="1"))
        store.save(_expense("dup", amount="2"))

        store.delete("dup")

        records = store.load().records
        assert len(records) == 1
        assert records[0].amount == Decimal("2")


class TestLookups:
    """Tests for get and list_records."""

    def test_get_by_id(self, store, march_records):
        """Test single-record lookup."""
        for record in march_records:
            store.save(record)
        assert store.get("C").expense_name == "Cleaning"
        assert store.get("missing") is None

    def test_list_filters_by_type_and_month(self, store, march_records):
        """Test the income screen filter."""
        for record in march_records:
            store.save(record)
        store.save(_expense("april", date="2025-04-01"))

        income = store.list_records(record_type=TransactionType.INCOME, month="2025-03")
        expenses = store.list_records(record_type=TransactionType.EXPENSE, month="2025-04")

        assert [r.id for r in income] == ["B", "A"]
        assert [r.id for r in expenses] == ["april"]

    def test_list_search_is_case_insensitive(self, store):
        """Test searching expense names."""
        store.save(_expense("E1", name="Lift Maintenance"))
        store.save(_expense("E2", name="Security"))

        found = store.list_records(record_type=TransactionType.EXPENSE, search="lift")

        assert [r.id for r in found] == ["E1"]

    def test_list_search_uses_query_as_typed(self, store):
        """Test that surrounding spaces in the query are part of the match."""
        store.save(_expense("E1", name="Lift Maintenance"))

        assert [r.id for r in store.list_records(search="t m")] == ["E1"]
        assert store.list_records(search=" lift") == []

    def test_list_search_matches_flat_numbers(self, store, march_records):
        """Test searching income by flat."""
        for record in march_records:
            store.save(record)
        found = store.list_records(search="10")
        assert [r.id for r in found] == ["A"]

    def test_list_sorted_newest_first(self, store):
        """Test date-descending order with stable ties."""
        store.save(_expense("mid", date="2025-05-10"))
        store.save(_expense("old", date="2025-01-01"))
        store.save(_expense("new", date="2025-09-30"))
        store.save(_expense("mid2", date="2025-05-10"))

        assert [r.id for r in store.list_records()] == ["new", "mid", "mid2", "old"]


class TestConcurrency:
    """Tests for the single-writer guarantee of one store instance."""

    def test_threads_sharing_a_store_lose_no_updates(self, store):
        """Test concurrent saves through one store instance."""
        def writer(prefix):
            for i in range(10):
                store.save(_expense(f"{prefix}-{i}"))

        threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.load().records) == 50
