"""Transaction list operations."""

from typing import Sequence

from money_manager.models.ledger import Transaction


def add_transaction(
    transactions: Sequence[Transaction],
    transaction: Transaction,
) -> list[Transaction]:
    """Return a new list with `transaction` first, newest-first order kept."""
    return [transaction, *transactions]
