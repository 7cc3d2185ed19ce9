"""
Form Input and Validation Models

A TransactionDraft is the raw state of the "add transaction" form: every
field is an optional string (or date) exactly as the user typed it. The
validator turns a draft into a typed Transaction or a list of issues.
"""

import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from money_manager.models.ledger import Transaction, TransactionType


class TransactionDraft(BaseModel):
    """Unvalidated form state for a new transaction."""
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType = TransactionType.EXPENSE
    amount: str = ""
    category: str = ""
    subcategory: str = ""
    description: str = ""
    date: Optional[datetime.date] = None
    from_account: str = ""
    to_account: str = ""


class AmountParseResult(BaseModel):
    """
    Outcome of parsing a user-entered amount.

    Exactly one of `amount` or `error` is set.
    """
    model_config = ConfigDict(frozen=True)

    amount: Optional[Decimal] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_amount', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
    )


class TransactionValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Schema validation (required fields, amount parsing)
    Stage 2: Semantic validation (advisory checks against categories)
    """

    schema_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    # Only set when schema validation passed
    transaction: Optional[Transaction] = None

    @property
    def is_valid(self) -> bool:
        return self.transaction is not None

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]
