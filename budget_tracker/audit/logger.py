"""
Audit Logger

Writes audit events to the structured log. Logging never raises into
the caller: a broken log sink must not break a ledger operation.

Supports correlation IDs so the events of one user action can be
traced together.
"""

from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from budget_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Keeps the most recent events in memory so a session can show what
    just happened.
    """

    def __init__(self, logger: Optional[Any] = None, history_size: int = 100):
        """
        Initialize audit logger.

        Args:
            logger: Bound logger to write to. Defaults to a structlog logger.
            history_size: How many recent events to keep in memory.
        """
        self._logger = logger or structlog.get_logger("budget_tracker.audit")
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Recent events, newest last."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        self._history.append(event)
        del self._history[:-self._history_size]

        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Last resort; the event is still in recent_events
            structlog.get_logger(__name__).error("audit_log_failed", error=str(e))

    def log_save_failed(
        self,
        key: str,
        error: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.save_failed(key, error, correlation_id))

    def log_load_failed(
        self,
        key: str,
        error: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.ledger_load_failed(key, error, correlation_id))

    def log_input_rejected(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.input_rejected(issues, correlation_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action and pass it through.
    """
    return uuid4()
