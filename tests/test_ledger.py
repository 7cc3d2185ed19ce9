"""Tests for the pure ledger operations."""

from datetime import date
from decimal import Decimal

import pytest

from money_manager.ledger import (
    add_category,
    add_subcategory,
    add_transaction,
    categories_for_type,
    compute_balance,
    default_categories,
    delete_category,
    delete_subcategory,
    filter_transactions,
    find_category_by_name,
)
from money_manager.models import (
    CategoryType,
    ExpenseTransaction,
    IncomeTransaction,
    TransactionType,
    TransferTransaction,
)


def income(amount, category="Salary", **kwargs):
    return IncomeTransaction(
        amount=Decimal(str(amount)),
        category=category,
        description=kwargs.pop("description", "income"),
        date=kwargs.pop("date", date(2024, 12, 1)),
        **kwargs,
    )


def expense(amount, category="Food", **kwargs):
    return ExpenseTransaction(
        amount=Decimal(str(amount)),
        category=category,
        description=kwargs.pop("description", "expense"),
        date=kwargs.pop("date", date(2024, 12, 1)),
        **kwargs,
    )


def transfer(amount, from_account="Checking", to_account="Savings"):
    return TransferTransaction(
        amount=Decimal(str(amount)),
        from_account=from_account,
        to_account=to_account,
        description="transfer",
        date=date(2024, 12, 1),
    )


class TestBalance:
    """Tests for compute_balance."""

    def test_no_transactions(self):
        summary = compute_balance([])
        assert summary.income == 0
        assert summary.expense == 0
        assert summary.balance == 0

    def test_income_and_expense(self):
        summary = compute_balance([income(5000), expense(1200)])
        assert summary.income == Decimal("5000")
        assert summary.expense == Decimal("1200")
        assert summary.balance == Decimal("3800")

    def test_transfers_are_excluded(self):
        summary = compute_balance([transfer(500), income(100), transfer(40)])
        assert summary.income == Decimal("100")
        assert summary.expense == 0
        assert summary.balance == Decimal("100")

    def test_no_precision_lost(self):
        summary = compute_balance([income("0.1"), income("0.2"), expense("0.005")])
        assert summary.income == Decimal("0.3")
        assert summary.balance == Decimal("0.295")

    def test_balance_can_go_negative(self):
        assert compute_balance([expense(10)]).balance == Decimal("-10")

    def test_accepts_any_iterable(self):
        summary = compute_balance(t for t in [income(1), expense(2)])
        assert summary.balance == Decimal("-1")


class TestAddTransaction:
    """Tests for prepending transactions."""

    def test_new_transaction_goes_first(self):
        first, second = income(1), expense(2)
        result = add_transaction(add_transaction([], first), second)
        assert result == [second, first]

    def test_existing_order_kept(self):
        existing = [expense(3), income(2), income(1)]
        new = transfer(9)
        result = add_transaction(existing, new)
        assert result[0] is new
        assert result[1:] == existing

    def test_input_not_mutated(self):
        existing = [income(1)]
        add_transaction(existing, expense(2))
        assert len(existing) == 1


class TestFilter:
    """Tests for filter_transactions."""

    @pytest.fixture
    def transactions(self):
        return [
            expense(20, "Food", description="lunch"),
            transfer(500),
            income(5000, "Salary", description="pay"),
            expense(60, "Transport", description="fuel"),
            expense(15, "Food", description="snacks"),
        ]

    def test_all_all_returns_everything(self, transactions):
        assert filter_transactions(transactions) == transactions

    def test_by_type(self, transactions):
        result = filter_transactions(transactions, type_filter="expense")
        assert [t.description for t in result] == ["lunch", "fuel", "snacks"]

    def test_by_type_enum(self, transactions):
        result = filter_transactions(transactions, type_filter=TransactionType.TRANSFER)
        assert len(result) == 1
        assert result[0].type == "transfer"

    def test_by_category(self, transactions):
        result = filter_transactions(transactions, category_filter="Food")
        assert [t.description for t in result] == ["lunch", "snacks"]

    def test_type_and_category(self, transactions):
        assert filter_transactions(transactions, "income", "Food") == []

    def test_transfers_never_match_named_category(self, transactions):
        result = filter_transactions(transactions, "transfer", "Salary")
        assert result == []

    def test_filtering_is_idempotent(self, transactions):
        once = filter_transactions(transactions, "expense", "Food")
        twice = filter_transactions(once, "expense", "Food")
        assert once == twice

    def test_unknown_category_returns_empty(self, transactions):
        assert filter_transactions(transactions, category_filter="Travel") == []


class TestCategories:
    """Tests for category and subcategory operations."""

    @pytest.fixture
    def categories(self):
        return default_categories()

    def test_seed_contents(self, categories):
        assert [c.name for c in categories] == [
            "Salary", "Business", "Food", "Transport",
            "Shopping", "Bills", "Entertainment",
        ]
        assert [c.id for c in categories] == ["1", "2", "3", "4", "5", "6", "7"]
        assert categories[5].subcategories == ["Electricity", "Water", "Internet", "Phone"]

    def test_seed_is_fresh_each_call(self):
        first = default_categories()
        first[0].subcategories.append("Tips")
        assert "Tips" not in default_categories()[0].subcategories

    def test_add_category(self, categories):
        result = add_category(categories, "Health", "expense")
        assert len(result) == len(categories) + 1
        assert result[-1].name == "Health"
        assert result[-1].type == CategoryType.EXPENSE
        assert result[-1].subcategories == []
        assert result[-1].id not in {c.id for c in categories}

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_add_blank_category_is_noop(self, categories, name):
        result = add_category(categories, name, "expense")
        assert result is categories
        assert len(result) == 7

    def test_add_category_bad_type(self, categories):
        with pytest.raises(ValueError):
            add_category(categories, "Travel", "transfer")

    def test_duplicate_names_allowed(self, categories):
        result = add_category(categories, "Food", "expense")
        assert [c.name for c in result].count("Food") == 2

    def test_delete_category(self, categories):
        result = delete_category(categories, "3")
        assert "Food" not in [c.name for c in result]
        assert len(result) == 6

    def test_delete_missing_category_is_noop(self, categories):
        assert delete_category(categories, "nope") is categories

    def test_add_subcategory(self, categories):
        result = add_subcategory(categories, "3", "Coffee")
        assert find_category_by_name(result, "Food").subcategories[-1] == "Coffee"
        # input untouched
        assert "Coffee" not in categories[2].subcategories

    def test_add_subcategory_strips_name(self, categories):
        result = add_subcategory(categories, "3", "  Coffee ")
        assert result[2].subcategories[-1] == "Coffee"

    def test_add_blank_subcategory_is_noop(self, categories):
        assert add_subcategory(categories, "3", "  ") is categories

    def test_add_subcategory_unknown_category_is_noop(self, categories):
        assert add_subcategory(categories, "99", "Coffee") is categories

    def test_delete_subcategory_removes_all_matches(self, categories):
        doubled = add_subcategory(categories, "3", "Snacks")
        result = delete_subcategory(doubled, "3", "Snacks")
        assert "Snacks" not in result[2].subcategories
        assert result[2].subcategories == ["Groceries", "Restaurant"]

    def test_delete_subcategory_twice_is_noop(self, categories):
        once = delete_subcategory(categories, "3", "Snacks")
        twice = delete_subcategory(once, "3", "Snacks")
        assert twice is once

    def test_delete_subcategory_exact_match_only(self, categories):
        assert delete_subcategory(categories, "3", "snacks") is categories

    def test_categories_for_type(self, categories):
        names = [c.name for c in categories_for_type(categories, "income")]
        assert names == ["Salary", "Business"]
        assert len(categories_for_type(categories, TransactionType.EXPENSE)) == 5
        assert len(categories_for_type(categories, "transfer")) == 7

    def test_find_by_name_first_match(self, categories):
        result = add_category(categories, "Food", "income")
        assert find_category_by_name(result, "Food").id == "3"
        assert find_category_by_name(result, "Nope") is None
