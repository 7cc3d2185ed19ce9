"""
Data Models Package

This package contains all Pydantic models used by Money Manager.
Everything the ledger stores or derives conforms to these schemas.
"""

from money_manager.models.ledger import (
    ALL,
    BalanceSummary,
    Category,
    CategoryList,
    CategoryType,
    ExpenseTransaction,
    IncomeTransaction,
    Transaction,
    TransactionFilter,
    TransactionList,
    TransactionType,
    TransferTransaction,
    new_id,
)
from money_manager.models.forms import (
    AmountParseResult,
    TransactionDraft,
    TransactionValidationResult,
    ValidationIssue,
)
from money_manager.models.activity import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
    LedgerSeverity,
)

__all__ = [
    # Ledger models
    "ALL",
    "BalanceSummary",
    "Category",
    "CategoryList",
    "CategoryType",
    "ExpenseTransaction",
    "IncomeTransaction",
    "Transaction",
    "TransactionFilter",
    "TransactionList",
    "TransactionType",
    "TransferTransaction",
    "new_id",
    # Form models
    "AmountParseResult",
    "TransactionDraft",
    "TransactionValidationResult",
    "ValidationIssue",
    # Activity models
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
    "LedgerSeverity",
]
