"""Balance aggregation over the transaction list."""

from decimal import Decimal
from typing import Iterable

from money_manager.models.ledger import (
    BalanceSummary,
    Transaction,
    TransactionType,
)


def sum_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    """Total amount of every transaction of one type."""
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        Decimal("0"),
    )


def compute_balance(transactions: Iterable[Transaction]) -> BalanceSummary:
    """
    Compute income, expense and balance.

    Transfers move money between accounts and never count towards either
    side. Nothing is cached; callers recompute on every read.
    """
    transactions = list(transactions)
    return BalanceSummary(
        income=sum_by_type(transactions, TransactionType.INCOME),
        expense=sum_by_type(transactions, TransactionType.EXPENSE),
    )
