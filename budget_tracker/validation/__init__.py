"""Input validation package."""

from budget_tracker.validation.validator import (
    INVALID_AMOUNT_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    TransactionInputValidator,
)

__all__ = [
    "INVALID_AMOUNT_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
    "TransactionInputValidator",
]
