"""
Data Models Package

Pydantic models for the ledger, input validation and audit events.
"""

from budget_tracker.models.ledger import (
    Ledger,
    Transaction,
    WeekBucket,
)
from budget_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from budget_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Ledger",
    "Transaction",
    "WeekBucket",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
