"""
Two-Stage Transaction Validation

STAGE 1 - SCHEMA VALIDATION:
- Required fields for the active transaction type
- Amount parses to a finite, positive number
- Building the typed Transaction record
A failure here blocks the transaction.

STAGE 2 - SEMANTIC VALIDATION:
- Category exists and matches the transaction type
- Subcategory belongs to the category
- Transfer accounts differ
- Amount is not absurdly large
These are advisory. They produce warnings and never block, because
category references are labels, not live foreign keys.

IMPORTANT: Validation NEVER silently fixes input. A draft either becomes
a Transaction as typed or comes back with issues.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from pydantic import ValidationError

from money_manager.config import get_settings
from money_manager.ledger.categories import find_category_by_name
from money_manager.models.forms import (
    AmountParseResult,
    TransactionDraft,
    TransactionValidationResult,
    ValidationIssue,
)
from money_manager.models.ledger import (
    Category,
    ExpenseTransaction,
    IncomeTransaction,
    Transaction,
    TransactionType,
    TransferTransaction,
)


def parse_amount(text: Optional[str]) -> AmountParseResult:
    """
    Parse a user-entered amount.

    Rejects blank input, anything that is not a number, NaN/Infinity,
    and values that are zero or negative.
    """
    if text is None or not str(text).strip():
        return AmountParseResult(error="Amount is required", error_code="missing")

    raw = str(text).strip()
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return AmountParseResult(
            error=f"'{raw}' is not a number",
            error_code="invalid_amount",
        )

    if not amount.is_finite():
        return AmountParseResult(
            error="Amount must be a finite number",
            error_code="invalid_amount",
        )
    if amount <= 0:
        return AmountParseResult(
            error="Amount must be greater than zero",
            error_code="non_positive_amount",
        )

    return AmountParseResult(amount=amount)


def _missing(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=f"{label} is required",
        severity="error",
    )


class TransactionValidator:
    """
    Validates a transaction draft through a two-stage pipeline.

    Stage 1 needs only the draft. Stage 2 checks it against the current
    category list.
    """

    def __init__(self, max_amount: Optional[float] = None):
        if max_amount is None:
            max_amount = get_settings().app.max_transaction_amount
        self._max_amount = Decimal(str(max_amount))

    def _validate_schema(
        self,
        draft: TransactionDraft,
    ) -> tuple[Optional[Transaction], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (transaction_or_none, list_of_issues)
        """
        issues = []

        parsed = parse_amount(draft.amount)
        if not parsed.ok:
            issues.append(ValidationIssue(
                field="amount",
                issue_type=parsed.error_code,
                message=parsed.error,
                severity="error",
            ))

        if not draft.description:
            issues.append(_missing("description", "Description"))
        if draft.date is None:
            issues.append(_missing("date", "Date"))

        if draft.type == TransactionType.TRANSFER:
            if not draft.from_account:
                issues.append(_missing("from_account", "From account"))
            if not draft.to_account:
                issues.append(_missing("to_account", "To account"))
        elif not draft.category:
            issues.append(_missing("category", "Category"))

        if issues:
            return None, issues

        try:
            transaction = self._build(draft, parsed.amount)
        except ValidationError as e:
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "transaction"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_format",
                    message=error["msg"],
                    severity="error",
                ))
            return None, issues

        return transaction, issues

    @staticmethod
    def _build(draft: TransactionDraft, amount: Decimal) -> Transaction:
        common = dict(
            amount=amount,
            description=draft.description,
            date=draft.date,
        )
        if draft.type == TransactionType.TRANSFER:
            return TransferTransaction(
                from_account=draft.from_account,
                to_account=draft.to_account,
                **common,
            )

        model = (
            IncomeTransaction
            if draft.type == TransactionType.INCOME
            else ExpenseTransaction
        )
        return model(
            category=draft.category,
            subcategory=draft.subcategory or None,
            **common,
        )

    def _validate_semantic(
        self,
        transaction: Transaction,
        categories: Sequence[Category],
    ) -> list[ValidationIssue]:
        """
        Stage 2: Semantic validation.

        Only warnings are produced here.
        """
        issues = []

        if transaction.type == TransactionType.TRANSFER:
            if transaction.from_account == transaction.to_account:
                issues.append(ValidationIssue(
                    field="to_account",
                    issue_type="same_account",
                    message="Transfer source and destination are the same account",
                    severity="warning",
                ))
        else:
            category = find_category_by_name(categories, transaction.category)
            if category is None:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="unknown_category",
                    message=f"No category named '{transaction.category}'",
                    severity="warning",
                ))
            else:
                if category.type.value != transaction.type:
                    issues.append(ValidationIssue(
                        field="category",
                        issue_type="category_type_mismatch",
                        message=(
                            f"'{category.name}' is an {category.type.value} category, "
                            f"not {transaction.type}"
                        ),
                        severity="warning",
                    ))
                if (
                    transaction.subcategory
                    and transaction.subcategory not in category.subcategories
                ):
                    issues.append(ValidationIssue(
                        field="subcategory",
                        issue_type="unknown_subcategory",
                        message=(
                            f"'{transaction.subcategory}' is not a subcategory "
                            f"of '{category.name}'"
                        ),
                        severity="warning",
                    ))

        if transaction.amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({transaction.amount:,}) seems unusually high",
                severity="warning",
            ))

        return issues

    def validate(
        self,
        draft: TransactionDraft,
        categories: Sequence[Category] = (),
    ) -> TransactionValidationResult:
        """
        Run the full two-stage validation pipeline.

        Args:
            draft: Raw form values
            categories: Current categories, for the advisory checks

        Returns:
            Result carrying the built Transaction when stage 1 passed
        """
        transaction, issues = self._validate_schema(draft)

        # Only run stage 2 if stage 1 passes
        if transaction is not None:
            issues.extend(self._validate_semantic(transaction, categories))

        return TransactionValidationResult(
            schema_valid=transaction is not None,
            issues=issues,
            transaction=transaction,
        )

    def get_user_friendly_summary(
        self,
        result: TransactionValidationResult,
    ) -> str:
        """Generate a short message to show next to the form."""
        if result.is_valid and not result.warnings:
            return "Transaction saved."

        lines = []

        if not result.is_valid:
            lines.append("Please fix the following:")
            for issue in result.errors:
                lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Saved, but please check:")
            for issue in result.warnings:
                lines.append(f"   • {issue.message}")

        return "\n".join(lines)
