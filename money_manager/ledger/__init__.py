"""
Ledger Operations Package

Pure functions over ledger state: balance, filtering, transaction
creation and category upkeep. Nothing here touches storage.
"""

from money_manager.ledger.balance import compute_balance, sum_by_type
from money_manager.ledger.categories import (
    add_category,
    add_subcategory,
    categories_for_type,
    delete_category,
    delete_subcategory,
    find_category,
    find_category_by_name,
)
from money_manager.ledger.defaults import DEFAULT_CATEGORIES, default_categories
from money_manager.ledger.filters import filter_transactions, transaction_category
from money_manager.ledger.transactions import add_transaction

__all__ = [
    "DEFAULT_CATEGORIES",
    "add_category",
    "add_subcategory",
    "add_transaction",
    "categories_for_type",
    "compute_balance",
    "default_categories",
    "delete_category",
    "delete_subcategory",
    "filter_transactions",
    "find_category",
    "find_category_by_name",
    "sum_by_type",
    "transaction_category",
]
