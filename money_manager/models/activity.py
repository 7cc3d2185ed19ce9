"""
Activity Models for Money Manager

Every ledger mutation, rejection and storage fallback produces an event.
Events are written to the structured log only; the ledger does not keep
a history of them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from money_manager.models.ledger import new_id


class LedgerEventType(str, Enum):
    """Types of events the ledger emits."""
    # Store lifecycle
    LEDGER_LOADED = "ledger_loaded"
    CATEGORIES_SEEDED = "categories_seeded"
    RECORD_RESET = "record_reset"
    COLLECTION_PERSISTED = "collection_persisted"
    PERSIST_SKIPPED = "persist_skipped"
    PERSIST_FAILED = "persist_failed"

    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_DELETED = "category_deleted"
    SUBCATEGORY_ADDED = "subcategory_added"
    SUBCATEGORY_DELETED = "subcategory_deleted"
    CATEGORY_CHANGE_IGNORED = "category_change_ignored"

    # View state
    FILTER_CHANGED = "filter_changed"


class LedgerSeverity(str, Enum):
    """Severity level for ledger events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerEvent(BaseModel):
    """A single ledger event."""

    event_id: str = Field(default_factory=new_id)
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: LedgerEventType
    severity: LedgerSeverity = LedgerSeverity.INFO

    # What record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of record (e.g., 'transaction', 'category')"
    )
    entity_id: Optional[str] = None

    description: str
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.transaction_added(transaction_id, "expense", "1200")
        event = LedgerEventBuilder.record_reset("categories", "invalid JSON")
    """

    @staticmethod
    def ledger_loaded(transaction_count: int, category_count: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_LOADED,
            description=(
                f"Ledger loaded: {transaction_count} transactions, "
                f"{category_count} categories"
            ),
            details={
                "transaction_count": transaction_count,
                "category_count": category_count,
            },
        )

    @staticmethod
    def categories_seeded(category_count: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORIES_SEEDED,
            entity_type="category",
            description=f"Installed {category_count} default categories",
            details={"category_count": category_count},
        )

    @staticmethod
    def record_reset(key: str, reason: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.RECORD_RESET,
            severity=LedgerSeverity.WARNING,
            description=f"Stored '{key}' record was unreadable and has been reset",
            details={"key": key},
            error_message=reason,
        )

    @staticmethod
    def collection_persisted(key: str, size: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.COLLECTION_PERSISTED,
            severity=LedgerSeverity.DEBUG,
            description=f"Persisted '{key}' ({size} records)",
            details={"key": key, "size": size},
        )

    @staticmethod
    def persist_skipped(key: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PERSIST_SKIPPED,
            severity=LedgerSeverity.DEBUG,
            description=f"Skipped writing empty '{key}' collection",
            details={"key": key},
        )

    @staticmethod
    def persist_failed(key: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PERSIST_FAILED,
            severity=LedgerSeverity.ERROR,
            description=f"Could not persist '{key}'",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        transaction_type: str,
        amount: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Added {transaction_type} of {amount}",
            details={
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_rejected(
        transaction_type: str,
        issues: list[dict],
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_REJECTED,
            severity=LedgerSeverity.WARNING,
            entity_type="transaction",
            description=f"Rejected {transaction_type} with {len(issues)} issues",
            details={
                "type": transaction_type,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def category_added(category_id: str, name: str, category_type: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            description=f"Added {category_type} category: {name}",
            details={"name": name, "type": category_type},
            is_user_action=True,
        )

    @staticmethod
    def category_deleted(category_id: str, name: Optional[str]) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_DELETED,
            entity_type="category",
            entity_id=category_id,
            description=f"Deleted category: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def subcategory_added(category_id: str, name: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SUBCATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            description=f"Added subcategory: {name}",
            details={"subcategory": name},
            is_user_action=True,
        )

    @staticmethod
    def subcategory_deleted(category_id: str, name: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SUBCATEGORY_DELETED,
            entity_type="category",
            entity_id=category_id,
            description=f"Deleted subcategory: {name}",
            details={"subcategory": name},
            is_user_action=True,
        )

    @staticmethod
    def category_change_ignored(
        action: str,
        reason: str,
        category_id: Optional[str] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_CHANGE_IGNORED,
            entity_type="category",
            entity_id=category_id,
            description=f"Ignored {action}: {reason}",
            details={"action": action, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def filter_changed(type_filter: str, category_filter: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.FILTER_CHANGED,
            severity=LedgerSeverity.DEBUG,
            description="Transaction filter changed",
            details={
                "type_filter": type_filter,
                "category_filter": category_filter,
            },
            is_user_action=True,
        )
