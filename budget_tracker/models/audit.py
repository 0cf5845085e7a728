"""
Audit Models for the Budget Tracker

Every ledger mutation, persistence outcome and rejected input is
recorded as an audit event and written to the structured log.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger lifecycle
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_INITIALIZED = "ledger_initialized"
    LEDGER_LOAD_FAILED = "ledger_load_failed"

    # Mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REMOVED = "transaction_removed"
    WEEK_ROTATED = "week_rotated"

    # Persistence
    LEDGER_SAVED = "ledger_saved"
    SAVE_FAILED = "save_failed"

    # Preferences
    PREFERENCE_SAVED = "preference_saved"
    PREFERENCE_LOAD_FAILED = "preference_load_failed"
    PREFERENCE_SAVE_FAILED = "preference_save_failed"

    # Input
    INPUT_REJECTED = "input_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'week', 'ledger')"
    )
    entity_id: Optional[str] = None

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Groups the events of one user action"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction_id, name, amount, week_start)
        event = AuditEventBuilder.save_failed(key, error)
    """

    @staticmethod
    def ledger_loaded(
        week_start: datetime,
        previous_week_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="Ledger loaded from storage",
            details={
                "current_week_start": week_start.isoformat(),
                "previous_week_count": previous_week_count,
            },
        )

    @staticmethod
    def ledger_initialized(
        week_start: datetime,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_INITIALIZED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="No stored ledger, starting an empty week",
            details={"current_week_start": week_start.isoformat()},
        )

    @staticmethod
    def ledger_load_failed(
        key: str,
        error: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="Error loading budget data, falling back to an empty ledger",
            details={"key": key},
            error_message=error,
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        name: str,
        amount: str,
        week_start: datetime,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Transaction added: {name}",
            details={
                "name": name,
                "amount": amount,
                "week_start": week_start.isoformat(),
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_removed(
        transaction_id: str,
        week_start: datetime,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REMOVED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=(
                "Transaction removed" if found
                else "Transaction not found, nothing removed"
            ),
            details={
                "week_start": week_start.isoformat(),
                "found": found,
            },
            is_user_action=True,
        )

    @staticmethod
    def week_rotated(
        archived_week_start: datetime,
        new_week_start: datetime,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WEEK_ROTATED,
            entity_type="week",
            entity_id=new_week_start.isoformat(),
            correlation_id=correlation_id,
            description="Current week archived, new week started",
            details={
                "archived_week_start": archived_week_start.isoformat(),
                "new_week_start": new_week_start.isoformat(),
            },
        )

    @staticmethod
    def ledger_saved(
        key: str,
        size: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="Ledger snapshot written",
            details={"key": key, "bytes": size},
        )

    @staticmethod
    def save_failed(
        key: str,
        error: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="Error saving budget data, keeping state in memory",
            details={"key": key},
            error_message=error,
        )

    @staticmethod
    def preference_saved(
        key: str,
        value: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PREFERENCE_SAVED,
            entity_type="preference",
            entity_id=key,
            description=f"Preference {key} set to {value}",
            details={"value": value},
            is_user_action=True,
        )

    @staticmethod
    def preference_failed(
        key: str,
        operation: str,
        error: str,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.PREFERENCE_LOAD_FAILED if operation == "load"
            else AuditEventType.PREFERENCE_SAVE_FAILED
        )
        return AuditEvent(
            event_type=event_type,
            severity=AuditSeverity.ERROR,
            entity_type="preference",
            entity_id=key,
            description=f"Error during preference {operation}",
            error_message=error,
        )

    @staticmethod
    def input_rejected(
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="input",
            correlation_id=correlation_id,
            description=f"Transaction input rejected with {len(issues)} issue(s)",
            details={"issues": issues},
            is_user_action=True,
        )
