"""Transaction list filtering."""

from typing import Iterable, Optional

from money_manager.models.ledger import ALL, Transaction, TransactionFilter


def transaction_category(transaction: Transaction) -> Optional[str]:
    """Category label of a transaction, None for transfers."""
    return getattr(transaction, "category", None)


def matches(transaction: Transaction, criteria: TransactionFilter) -> bool:
    """Check one transaction against the type and category criteria."""
    if criteria.type_filter != ALL and transaction.type != criteria.type_filter:
        return False
    if (
        criteria.category_filter != ALL
        and transaction_category(transaction) != criteria.category_filter
    ):
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    type_filter: str = ALL,
    category_filter: str = ALL,
) -> list[Transaction]:
    """
    Return the transactions passing both filters, in their original order.

    Transfers have no category, so any named category filter excludes them.
    """
    criteria = TransactionFilter(
        type_filter=type_filter,
        category_filter=category_filter,
    )
    return [t for t in transactions if matches(t, criteria)]
