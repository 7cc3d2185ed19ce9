"""Tests for the ledger store and the storage backends."""

import json
from datetime import date
from decimal import Decimal

import pytest

from money_manager.activity import ActivityLogger
from money_manager.ledger import default_categories
from money_manager.models import (
    ExpenseTransaction,
    LedgerEventType,
    TransferTransaction,
)
from money_manager.services.storage import (
    CATEGORIES_KEY,
    TRANSACTIONS_KEY,
    CorruptRecordError,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)
from money_manager.store import LedgerStore


class FailingStorage(InMemoryStorage):
    """Storage whose writes always fail."""

    def save(self, key, value):
        raise StorageError("disk full")


def expense(amount="10"):
    return ExpenseTransaction(
        amount=Decimal(amount),
        category="Food",
        description="lunch",
        date=date(2024, 12, 1),
    )


class TestStoreLoad:
    """Tests for hydration."""

    def test_first_run_seeds_and_persists_categories(self):
        storage = InMemoryStorage()
        store = LedgerStore(storage)
        report = store.load()

        assert report.seeded_categories is True
        assert report.reset_keys == []
        assert store.transactions == []
        assert len(store.categories) == 7
        # only categories are written on first run
        assert storage.keys() == [CATEGORIES_KEY]
        stored = json.loads(storage.load(CATEGORIES_KEY))
        assert stored[0] == {
            "id": "1",
            "name": "Salary",
            "type": "income",
            "subcategories": ["Monthly", "Bonus", "Freelance"],
        }

    def test_existing_records_are_loaded(self):
        storage = InMemoryStorage({
            TRANSACTIONS_KEY: json.dumps([{
                "id": "t1", "type": "expense", "amount": 12.5, "category": "Food",
                "description": "Tea", "date": "2024-12-01",
            }]),
            CATEGORIES_KEY: json.dumps([
                {"id": "c1", "name": "Food", "type": "expense", "subcategories": []},
            ]),
        })
        store = LedgerStore(storage)
        report = store.load()

        assert report.seeded_categories is False
        assert [t.id for t in store.transactions] == ["t1"]
        assert [c.name for c in store.categories] == ["Food"]
        assert storage.write_count == 0

    def test_empty_stored_categories_are_not_reseeded(self):
        storage = InMemoryStorage({CATEGORIES_KEY: "[]"})
        store = LedgerStore(storage)
        report = store.load()
        assert report.seeded_categories is False
        assert store.categories == []

    def test_corrupt_transactions_reset_to_empty(self):
        logger = ActivityLogger()
        storage = InMemoryStorage({
            TRANSACTIONS_KEY: "{not json",
            CATEGORIES_KEY: json.dumps([]),
        })
        store = LedgerStore(storage, activity_logger=logger)
        report = store.load()

        assert report.reset_keys == [TRANSACTIONS_KEY]
        assert store.transactions == []
        assert any(e.event_type == LedgerEventType.RECORD_RESET for e in logger.recent)

    def test_schema_invalid_categories_fall_back_to_seed(self):
        storage = InMemoryStorage({
            CATEGORIES_KEY: json.dumps([{"id": "1", "name": "X", "type": "transfer"}]),
        })
        store = LedgerStore(storage)
        report = store.load()

        assert report.reset_keys == [CATEGORIES_KEY]
        assert report.seeded_categories is True
        assert [c.id for c in store.categories] == [c.id for c in default_categories()]
        # seed replaced the corrupt record
        assert json.loads(storage.load(CATEGORIES_KEY))[0]["name"] == "Salary"

    def test_long_stored_text_is_not_corrupt(self):
        long_text = "z" * 501
        storage = InMemoryStorage({
            TRANSACTIONS_KEY: json.dumps([
                {"id": "t1", "type": "expense", "amount": "5", "category": "Food",
                 "description": long_text, "date": "2024-12-01"},
                {"id": "t2", "type": "income", "amount": "9", "category": "Salary",
                 "description": "Pay", "date": "2024-11-30"},
            ]),
            CATEGORIES_KEY: json.dumps([
                {"id": "c1", "name": long_text, "type": "expense", "subcategories": []},
            ]),
        })
        store = LedgerStore(storage)
        report = store.load()

        assert report.reset_keys == []
        assert len(store.transactions) == 2
        assert store.transactions[0].description == long_text
        assert store.categories[0].name == long_text

    def test_corrupt_record_error_message(self):
        error = CorruptRecordError("categories", "2 invalid fields")
        assert error.key == "categories"
        assert "categories" in str(error)
        assert isinstance(error, StorageError)


class TestStoreCommit:
    """Tests for write-through persistence."""

    def test_commit_persists_camel_case_records(self):
        storage = InMemoryStorage()
        store = LedgerStore(storage)
        store.load()

        t = TransferTransaction(
            amount=Decimal("500"),
            from_account="Checking",
            to_account="Savings",
            description="Move",
            date=date(2024, 12, 2),
        )
        store.commit_transactions([t])

        stored = json.loads(storage.load(TRANSACTIONS_KEY))
        assert stored[0]["fromAccount"] == "Checking"
        assert Decimal(stored[0]["amount"]) == Decimal("500")
        assert stored[0]["date"] == "2024-12-02"

    def test_read_after_commit_sees_new_value(self):
        store = LedgerStore(InMemoryStorage())
        store.load()
        t = expense()
        store.commit_transactions([t])
        assert store.transactions == [t]

    def test_returned_lists_are_copies(self):
        store = LedgerStore(InMemoryStorage())
        store.load()
        store.categories.clear()
        assert len(store.categories) == 7

    def test_empty_collection_is_persisted(self):
        storage = InMemoryStorage()
        store = LedgerStore(storage)
        store.load()

        store.commit_categories([])
        assert json.loads(storage.load(CATEGORIES_KEY)) == []

        # and stays empty on the next start
        reloaded = LedgerStore(storage)
        reloaded.load()
        assert reloaded.categories == []

    def test_skip_empty_writes_keeps_previous_record(self):
        storage = InMemoryStorage()
        store = LedgerStore(storage, skip_empty_writes=True)
        store.load()
        writes = storage.write_count

        store.commit_categories([])
        assert store.categories == []
        assert storage.write_count == writes
        assert len(json.loads(storage.load(CATEGORIES_KEY))) == 7

    def test_write_failure_propagates_after_memory_commit(self):
        storage = FailingStorage({CATEGORIES_KEY: "[]"})
        logger = ActivityLogger()
        store = LedgerStore(storage, activity_logger=logger)
        store.load()

        t = expense()
        with pytest.raises(StorageError, match="disk full"):
            store.commit_transactions([t])
        assert store.transactions == [t]
        assert logger.recent[-1].event_type == LedgerEventType.PERSIST_FAILED


class TestJsonFileStorage:
    """Tests for the JSON file backend."""

    def test_missing_key_returns_none(self, tmp_path):
        assert JsonFileStorage(tmp_path).load("transactions") is None

    def test_save_and_load(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data")
        storage.save("categories", '[{"id": "1"}]')

        assert storage.load("categories") == '[{"id": "1"}]'
        assert (tmp_path / "data" / "categories.json").exists()
        # no temp files left behind
        assert sorted(p.name for p in (tmp_path / "data").iterdir()) == ["categories.json"]

    def test_save_overwrites(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.save("transactions", "[1]")
        storage.save("transactions", "[]")
        assert storage.load("transactions") == "[]"

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "with space"])
    def test_invalid_keys_rejected(self, tmp_path, key):
        with pytest.raises(StorageError):
            JsonFileStorage(tmp_path).save(key, "[]")

    def test_unicode_roundtrip(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.save("categories", '[{"name": "Café ₹"}]')
        assert "Café ₹" in storage.load("categories")

    def test_undecodable_file_raises_corrupt_record(self, tmp_path):
        (tmp_path / "transactions.json").write_bytes(b'[{"\xff\xfe bad')
        with pytest.raises(CorruptRecordError) as excinfo:
            JsonFileStorage(tmp_path).load("transactions")
        assert excinfo.value.key == "transactions"

    def test_undecodable_files_are_reset_on_load(self, tmp_path):
        (tmp_path / "transactions.json").write_bytes(b'[{"\xff\xfe bad')
        (tmp_path / "categories.json").write_bytes(b"\x80\x81\x82")
        logger = ActivityLogger()
        store = LedgerStore(JsonFileStorage(tmp_path), activity_logger=logger)
        report = store.load()

        assert report.reset_keys == [TRANSACTIONS_KEY, CATEGORIES_KEY]
        assert report.seeded_categories is True
        assert store.transactions == []
        assert len(store.categories) == 7
        assert any(e.event_type == LedgerEventType.RECORD_RESET for e in logger.recent)
        # the seed replaced the unreadable categories file
        assert json.loads((tmp_path / "categories.json").read_text(encoding="utf-8"))[0]["name"] == "Salary"

    def test_invalid_json_file_is_reset_on_load(self, tmp_path):
        (tmp_path / "transactions.json").write_text("{not json", encoding="utf-8")
        store = LedgerStore(JsonFileStorage(tmp_path))
        report = store.load()
        assert report.reset_keys == [TRANSACTIONS_KEY]
        assert store.transactions == []

    def test_store_survives_restart(self, tmp_path):
        store = LedgerStore(JsonFileStorage(tmp_path))
        store.load()
        t = expense("42.50")
        store.commit_transactions([t])

        restarted = LedgerStore(JsonFileStorage(tmp_path))
        report = restarted.load()
        assert report.seeded_categories is False
        assert restarted.transactions == [t]
        assert len(restarted.categories) == 7


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
