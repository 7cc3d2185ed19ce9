"""
Main Orchestrator for Money Manager

Ties the Store, the ledger operations, the validator and the activity
logger together into the single surface the view layer talks to.

Every user action follows the same path:
1. A ledger operation computes the next state from the committed state
2. The Store commits and persists it
3. Derived views (balance, filtered list) are recomputed on read

Rejected actions change nothing and write nothing.
"""

import logging
from typing import Optional, Union

from money_manager.activity import ActivityLogger
from money_manager.config import Settings, get_settings
from money_manager.ledger import (
    add_category,
    add_subcategory,
    add_transaction,
    categories_for_type,
    compute_balance,
    delete_category,
    delete_subcategory,
    filter_transactions,
    find_category,
    find_category_by_name,
)
from money_manager.models.activity import LedgerEventBuilder
from money_manager.models.forms import TransactionDraft, TransactionValidationResult
from money_manager.models.ledger import (
    BalanceSummary,
    Category,
    CategoryType,
    Transaction,
    TransactionFilter,
    TransactionType,
)
from money_manager.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    StoragePort,
)
from money_manager.store import LedgerStore, LoadReport
from money_manager.validation import TransactionValidator


class LedgerSession:
    """
    The ledger as seen by one user session.

    Holds the current filter selection alongside the Store. Reads are
    always computed from committed state, never cached.
    """

    def __init__(
        self,
        store: LedgerStore,
        validator: Optional[TransactionValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = store
        self._validator = validator or TransactionValidator()
        self._activity = activity_logger or ActivityLogger()
        self._filter = TransactionFilter()
        self.load_report: Optional[LoadReport] = None

    def load(self) -> LoadReport:
        """Hydrate the store. Call once at startup."""
        self.load_report = self._store.load()
        return self.load_report

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> list[Transaction]:
        """All transactions, newest first."""
        return self._store.transactions

    @property
    def categories(self) -> list[Category]:
        return self._store.categories

    @property
    def summary(self) -> BalanceSummary:
        return compute_balance(self._store.transactions)

    @property
    def filter(self) -> TransactionFilter:
        return self._filter

    @property
    def visible_transactions(self) -> list[Transaction]:
        """Transactions passing the current filter, newest first."""
        return filter_transactions(
            self._store.transactions,
            type_filter=self._filter.type_filter,
            category_filter=self._filter.category_filter,
        )

    def categories_for_type(self, transaction_type: Union[TransactionType, str]) -> list[Category]:
        return categories_for_type(self._store.categories, transaction_type)

    def subcategories_for(self, category_name: str) -> list[str]:
        """Subcategories of the named category, empty if it doesn't exist."""
        category = find_category_by_name(self._store.categories, category_name)
        return list(category.subcategories) if category else []

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def _update_filter(self, **changes) -> TransactionFilter:
        self._filter = TransactionFilter(**{**self._filter.model_dump(), **changes})
        self._activity.log(LedgerEventBuilder.filter_changed(
            type_filter=self._filter.type_filter,
            category_filter=self._filter.category_filter,
        ))
        return self._filter

    def set_type_filter(self, value: Union[TransactionType, str]) -> TransactionFilter:
        """
        Raises:
            ValueError: If value is not "all" or a transaction type
        """
        return self._update_filter(type_filter=value)

    def set_category_filter(self, value: str) -> TransactionFilter:
        return self._update_filter(category_filter=value)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_transaction(self, draft: TransactionDraft) -> TransactionValidationResult:
        """
        Validate a form draft and, if it passes, record it.

        Returns the validation result either way; `result.transaction` is
        the stored record when it succeeded.
        """
        result = self._validator.validate(draft, self._store.categories)

        if not result.is_valid:
            self._activity.log(LedgerEventBuilder.transaction_rejected(
                transaction_type=draft.type.value,
                issues=[
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.errors
                ],
            ))
            return result

        transaction = result.transaction
        self._store.commit_transactions(
            add_transaction(self._store.transactions, transaction)
        )
        self._activity.log(LedgerEventBuilder.transaction_added(
            transaction_id=transaction.id,
            transaction_type=transaction.type,
            amount=str(transaction.amount),
        ))
        return result

    def describe_result(self, result: TransactionValidationResult) -> str:
        """User-facing message for the outcome of add_transaction."""
        return self._validator.get_user_friendly_summary(result)

    def add_category(
        self,
        name: str,
        category_type: Union[CategoryType, str],
    ) -> Optional[Category]:
        """Create a category. Returns None when the name is blank or invalid."""
        current = self._store.categories
        try:
            updated = add_category(current, name, category_type)
        except ValueError as e:
            self._activity.log_category_change_ignored("add_category", str(e))
            return None

        if updated is current:
            self._activity.log_category_change_ignored("add_category", "blank name")
            return None

        self._store.commit_categories(updated)
        created = updated[-1]
        self._activity.log(LedgerEventBuilder.category_added(
            category_id=created.id,
            name=created.name,
            category_type=created.type.value,
        ))
        return created

    def delete_category(self, category_id: str) -> bool:
        """
        Delete a category. Transactions that use its name are left as they are.

        Returns False when no category has this id.
        """
        current = self._store.categories
        existing = find_category(current, category_id)
        updated = delete_category(current, category_id)
        if updated is current:
            self._activity.log_category_change_ignored(
                "delete_category", "not found", category_id=category_id,
            )
            return False

        self._store.commit_categories(updated)
        self._activity.log(LedgerEventBuilder.category_deleted(
            category_id=category_id,
            name=existing.name if existing else None,
        ))
        return True

    def add_subcategory(self, category_id: str, name: str) -> bool:
        current = self._store.categories
        updated = add_subcategory(current, category_id, name)
        if updated is current:
            self._activity.log_category_change_ignored(
                "add_subcategory", "blank name or unknown category", category_id=category_id,
            )
            return False

        self._store.commit_categories(updated)
        self._activity.log(LedgerEventBuilder.subcategory_added(category_id, name.strip()))
        return True

    def delete_subcategory(self, category_id: str, name: str) -> bool:
        current = self._store.categories
        updated = delete_subcategory(current, category_id, name)
        if updated is current:
            self._activity.log_category_change_ignored(
                "delete_subcategory", "nothing to remove", category_id=category_id,
            )
            return False

        self._store.commit_categories(updated)
        self._activity.log(LedgerEventBuilder.subcategory_deleted(category_id, name))
        return True


def create_storage(settings: Settings) -> StoragePort:
    """Build the storage port named in configuration."""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(storage_settings.data_dir)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[StoragePort] = None,
) -> LedgerSession:
    """
    Factory function to create a loaded ledger session.

    Args:
        settings: Configuration; defaults to the cached global settings
        storage: Storage port override, mainly for tests

    Returns:
        A LedgerSession whose store has already been hydrated
    """
    settings = settings or get_settings()
    app_settings = settings.app

    level = "DEBUG" if app_settings.debug_mode else app_settings.log_level
    logging.basicConfig(level=level, format="%(message)s")

    activity_logger = ActivityLogger()
    store = LedgerStore(
        storage=storage or create_storage(settings),
        activity_logger=activity_logger,
        skip_empty_writes=settings.storage.skip_empty_writes,
    )
    session = LedgerSession(
        store=store,
        validator=TransactionValidator(max_amount=app_settings.max_transaction_amount),
        activity_logger=activity_logger,
    )
    session.load()
    return session
