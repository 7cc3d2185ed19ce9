"""
Default categories installed on first run.

Kept separate from runtime configuration: this is content, not settings.
Ids are fixed so a fresh install always produces the same records.
"""

from money_manager.models.ledger import Category, CategoryType


DEFAULT_CATEGORIES: tuple[tuple[str, str, CategoryType, tuple[str, ...]], ...] = (
    # Income
    ("1", "Salary", CategoryType.INCOME, ("Monthly", "Bonus", "Freelance")),
    ("2", "Business", CategoryType.INCOME, ("Sales", "Investment")),

    # Expense
    ("3", "Food", CategoryType.EXPENSE, ("Groceries", "Restaurant", "Snacks")),
    ("4", "Transport", CategoryType.EXPENSE, ("Fuel", "Public Transport", "Maintenance")),
    ("5", "Shopping", CategoryType.EXPENSE, ("Clothes", "Electronics", "Others")),
    ("6", "Bills", CategoryType.EXPENSE, ("Electricity", "Water", "Internet", "Phone")),
    ("7", "Entertainment", CategoryType.EXPENSE, ("Movies", "Games", "Subscriptions")),
)


def default_categories() -> list[Category]:
    """Build a fresh copy of the seed categories."""
    return [
        Category(id=cat_id, name=name, type=cat_type, subcategories=list(subs))
        for cat_id, name, cat_type, subs in DEFAULT_CATEGORIES
    ]
