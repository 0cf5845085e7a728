"""
Transaction Input Validation

Raw text from the name and amount fields is checked here, before it
reaches the ledger. The ledger itself assumes valid input.

Checks, in order:
1. Both fields present (after trimming whitespace)
2. Amount is a finite number greater than zero
3. Unusually large amounts get a warning that does not block

Validation never silently fixes input beyond trimming whitespace.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from budget_tracker.config import get_settings
from budget_tracker.models.validation import ValidationIssue, ValidationResult


MISSING_FIELDS_MESSAGE = "Please fill in both name and amount"
INVALID_AMOUNT_MESSAGE = "Please enter a valid amount"


class TransactionInputValidator:
    """Validates the add-transaction form."""

    def __init__(self, large_amount_warning: Optional[Decimal] = None):
        self._large_amount_warning = (
            large_amount_warning
            if large_amount_warning is not None
            else get_settings().app.large_amount_warning
        )

    def validate(self, name_text: str, amount_text: str) -> ValidationResult:
        name = (name_text or "").strip()
        amount_raw = (amount_text or "").strip()

        if not name or not amount_raw:
            missing = [
                field for field, value in (("name", name), ("amount", amount_raw))
                if not value
            ]
            return ValidationResult(
                is_valid=False,
                issues=[
                    ValidationIssue(
                        field=field,
                        issue_type="missing",
                        message=MISSING_FIELDS_MESSAGE,
                        severity="error",
                    )
                    for field in missing
                ],
            )

        amount = self._parse_amount(amount_raw)
        if amount is None or amount <= 0:
            return ValidationResult(
                is_valid=False,
                issues=[ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message=INVALID_AMOUNT_MESSAGE,
                    severity="error",
                )],
            )

        issues = []
        if amount > self._large_amount_warning:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="large_amount",
                message=f"{amount} is an unusually large amount, please double-check it",
                severity="warning",
            ))

        return ValidationResult(
            is_valid=True,
            name=name,
            amount=amount,
            issues=issues,
        )

    @staticmethod
    def _parse_amount(text: str) -> Optional[Decimal]:
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
        if not amount.is_finite():
            return None
        return amount
