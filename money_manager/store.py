"""
Ledger Store

Owns the authoritative in-memory collections and writes them through to
a StoragePort after every commit.

Load policy:
- No stored transactions: start empty.
- No stored categories: install the default categories and persist them.
- A stored record that cannot be decoded is treated as absent, a warning
  is logged, and the process continues. The reset is reported in the
  LoadReport. A corrupt transactions file is overwritten by the next commit.

Commit policy: replace the collection in memory first, then persist.
Empty collections are persisted too, unless `skip_empty_writes` is set.
"""

from typing import Optional, Sequence

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from money_manager.activity import ActivityLogger
from money_manager.ledger.defaults import default_categories
from money_manager.models.activity import LedgerEventBuilder
from money_manager.models.ledger import (
    Category,
    CategoryList,
    Transaction,
    TransactionList,
)
from money_manager.services.storage import (
    CATEGORIES_KEY,
    TRANSACTIONS_KEY,
    CorruptRecordError,
    StorageError,
    StoragePort,
)


class LoadReport(BaseModel):
    """What happened during hydration."""
    seeded_categories: bool = False
    reset_keys: list[str] = Field(default_factory=list)


class LedgerStore:
    """Holds transactions (newest-first) and categories for one ledger."""

    def __init__(
        self,
        storage: StoragePort,
        activity_logger: Optional[ActivityLogger] = None,
        skip_empty_writes: bool = False,
    ):
        self._storage = storage
        self._activity = activity_logger or ActivityLogger()
        self._skip_empty_writes = skip_empty_writes
        self._transactions: list[Transaction] = []
        self._categories: list[Category] = []

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    # -------------------------------------------------------------------------
    # Hydration
    # -------------------------------------------------------------------------

    def _decode(self, key: str, adapter: TypeAdapter, raw: str) -> list:
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise CorruptRecordError(key, f"{e.error_count()} invalid fields") from e

    def _load_record(self, key: str, adapter: TypeAdapter, report: LoadReport) -> Optional[list]:
        """Load one record; None means absent or reset."""
        try:
            raw = self._storage.load(key)
            if raw is None:
                return None
            return self._decode(key, adapter, raw)
        except CorruptRecordError as e:
            self._activity.log_record_reset(key=key, reason=e.reason)
            report.reset_keys.append(key)
            return None

    def load(self) -> LoadReport:
        """
        Hydrate both collections from storage.

        Raises:
            StorageError: If the backend itself cannot be read
        """
        report = LoadReport()

        transactions = self._load_record(TRANSACTIONS_KEY, TransactionList, report)
        self._transactions = transactions or []

        categories = self._load_record(CATEGORIES_KEY, CategoryList, report)
        if categories is None:
            self._categories = default_categories()
            report.seeded_categories = True
            self._activity.log(LedgerEventBuilder.categories_seeded(len(self._categories)))
            self._persist(CATEGORIES_KEY, CategoryList, self._categories, force=True)
        else:
            self._categories = categories

        self._activity.log(LedgerEventBuilder.ledger_loaded(
            transaction_count=len(self._transactions),
            category_count=len(self._categories),
        ))
        return report

    # -------------------------------------------------------------------------
    # Commit / persist
    # -------------------------------------------------------------------------

    def _persist(
        self,
        key: str,
        adapter: TypeAdapter,
        records: Sequence,
        force: bool = False,
    ) -> None:
        if not records and self._skip_empty_writes and not force:
            self._activity.log(LedgerEventBuilder.persist_skipped(key))
            return

        payload = adapter.dump_json(list(records), by_alias=True).decode("utf-8")
        try:
            self._storage.save(key, payload)
        except StorageError as e:
            self._activity.log_persist_failed(key=key, error_message=str(e))
            raise
        self._activity.log(LedgerEventBuilder.collection_persisted(key, len(records)))

    def commit_transactions(self, transactions: Sequence[Transaction]) -> None:
        """Replace the transaction list and persist it."""
        self._transactions = list(transactions)
        self._persist(TRANSACTIONS_KEY, TransactionList, self._transactions)

    def commit_categories(self, categories: Sequence[Category]) -> None:
        """Replace the category list and persist it."""
        self._categories = list(categories)
        self._persist(CATEGORIES_KEY, CategoryList, self._categories)
