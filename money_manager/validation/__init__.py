"""Transaction validation package."""

from money_manager.validation.validator import TransactionValidator, parse_amount

__all__ = ["TransactionValidator", "parse_amount"]
