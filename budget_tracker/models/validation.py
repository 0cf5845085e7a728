"""
Validation Models

Results of checking raw user input before it reaches the ledger.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Input field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'large_amount')"
    )
    message: str = Field(
        ...,
        description="Message shown to the user"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating a name/amount pair.

    ``name`` and ``amount`` are only set when the input is valid.
    Warnings never block.
    """

    validated_at: datetime = Field(
        default_factory=datetime.now
    )
    is_valid: bool
    name: Optional[str] = None
    amount: Optional[Decimal] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def user_message(self) -> Optional[str]:
        """First error message, for a single alert."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None
