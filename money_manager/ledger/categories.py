"""
Category and subcategory operations.

Every function takes the current category list and returns the next one.
Inputs are never mutated. When an operation is rejected or finds nothing
to change, the input list itself is returned, so callers can tell a no-op
apart from a change with an identity check.

Deleting a category never touches transactions: a transaction keeps the
category label it was recorded with.
"""

from typing import Optional, Sequence, Union

from money_manager.models.ledger import (
    Category,
    CategoryType,
    TransactionType,
)


def find_category(categories: Sequence[Category], category_id: str) -> Optional[Category]:
    return next((c for c in categories if c.id == category_id), None)


def find_category_by_name(categories: Sequence[Category], name: str) -> Optional[Category]:
    """First category with this exact name, if any."""
    return next((c for c in categories if c.name == name), None)


def categories_for_type(
    categories: Sequence[Category],
    transaction_type: Union[TransactionType, str],
) -> list[Category]:
    """Categories selectable for a transaction of the given type."""
    transaction_type = TransactionType(transaction_type)
    if transaction_type == TransactionType.TRANSFER:
        return list(categories)
    return [c for c in categories if c.type.value == transaction_type.value]


def add_category(
    categories: Sequence[Category],
    name: str,
    category_type: Union[CategoryType, str],
) -> Sequence[Category]:
    """
    Append a new category with no subcategories.

    Blank names are rejected and the input is returned unchanged.
    Raises ValueError for an unknown category type.
    """
    category_type = CategoryType(category_type)
    if not name or not name.strip():
        return categories
    return [*categories, Category(name=name, type=category_type)]


def delete_category(
    categories: Sequence[Category],
    category_id: str,
) -> Sequence[Category]:
    """Remove the category with this id; unknown ids are a no-op."""
    remaining = [c for c in categories if c.id != category_id]
    if len(remaining) == len(categories):
        return categories
    return remaining


def add_subcategory(
    categories: Sequence[Category],
    category_id: str,
    name: str,
) -> Sequence[Category]:
    """Append a subcategory name to one category."""
    if not name or not name.strip():
        return categories
    if find_category(categories, category_id) is None:
        return categories

    name = name.strip()
    return [
        c.model_copy(update={"subcategories": [*c.subcategories, name]})
        if c.id == category_id
        else c
        for c in categories
    ]


def delete_subcategory(
    categories: Sequence[Category],
    category_id: str,
    name: str,
) -> Sequence[Category]:
    """Remove every exact occurrence of `name` from one category."""
    target = find_category(categories, category_id)
    if target is None or name not in target.subcategories:
        return categories

    return [
        c.model_copy(update={"subcategories": [s for s in c.subcategories if s != name]})
        if c.id == category_id
        else c
        for c in categories
    ]
