"""
Core Data Models for Money Manager

These models define the schemas for everything the ledger stores:
1. Transactions (income, expense, transfer)
2. Categories with their subcategories
3. Derived views (balance summary)

DESIGN DECISION: A Transaction is a discriminated union keyed by `type`.
Account fields only exist on transfers and category fields only exist on
income/expense, so an invalid combination cannot be constructed.

Field names are snake_case in Python and camelCase in storage
(`fromAccount`, `toAccount`), matching the persisted record layout.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Generate a fresh record identifier."""
    return uuid4().hex


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Kinds of money movement the ledger records."""
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class CategoryType(str, Enum):
    """
    Category kinds.

    Transfers are never categorized, so there is no TRANSFER member.
    """
    INCOME = "income"
    EXPENSE = "expense"


ALL = "all"


# =============================================================================
# TRANSACTIONS
# =============================================================================

class _LedgerRecord(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class _TransactionBase(_LedgerRecord):
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=new_id,
        description="Unique transaction ID"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount of money moved"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Free-form note"
    )
    date: date


class _CategorizedTransaction(_TransactionBase):
    category: str = Field(
        ...,
        min_length=1,
        description="Category name at the time of creation"
    )
    subcategory: Optional[str] = None


class IncomeTransaction(_CategorizedTransaction):
    type: Literal["income"] = "income"


class ExpenseTransaction(_CategorizedTransaction):
    type: Literal["expense"] = "expense"


class TransferTransaction(_TransactionBase):
    """Money moved between two named accounts. Does not affect balance."""
    type: Literal["transfer"] = "transfer"

    from_account: str = Field(..., min_length=1)
    to_account: str = Field(..., min_length=1)


Transaction = Annotated[
    Union[IncomeTransaction, ExpenseTransaction, TransferTransaction],
    Field(discriminator="type"),
]

TransactionList = TypeAdapter(list[Transaction])


# =============================================================================
# CATEGORIES
# =============================================================================

class Category(_LedgerRecord):
    """
    A user-defined classification for income or expense transactions.

    Names are not unique-enforced. Subcategories are plain strings kept in
    insertion order.
    """

    id: str = Field(
        default_factory=new_id,
        description="Unique category ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name, not required to be unique"
    )
    type: CategoryType
    subcategories: list[str] = Field(default_factory=list)


CategoryList = TypeAdapter(list[Category])


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class BalanceSummary(BaseModel):
    """Totals derived from the full transaction list."""
    model_config = ConfigDict(frozen=True)

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @computed_field
    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


class TransactionFilter(BaseModel):
    """
    Current filter selection for the transaction list.

    `type_filter` is "all" or a TransactionType value; `category_filter` is
    "all" or a category name.
    """
    model_config = ConfigDict(frozen=True)

    type_filter: str = ALL
    category_filter: str = ALL

    @field_validator("type_filter", mode="before")
    @classmethod
    def validate_type_filter(cls, v: Any) -> str:
        if isinstance(v, Enum):
            v = v.value
        if v != ALL and v not in {t.value for t in TransactionType}:
            raise ValueError(f"Unknown transaction type filter: {v}")
        return v

    @field_validator("category_filter", mode="before")
    @classmethod
    def default_blank_category_filter(cls, v: Any) -> Any:
        return v or ALL
