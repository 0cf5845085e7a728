"""
Ledger Service

Composes the pure bucketing functions with persistence:

    load → (add | remove)* → save after every mutation

Persistence failures never escape this class. A failed read yields an
empty ledger for the present week; a failed write is logged and the
in-memory ledger is returned anyway, to be caught up by the next
successful save.

The service does not validate user input. Callers run
``TransactionInputValidator`` first and pass on the parsed name and
amount. The ``Transaction`` model still rejects an empty name or a
non-positive amount with a pydantic ``ValidationError``; that is a
programming error, not a user-facing path, and nothing is saved.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from budget_tracker.audit import AuditLogger
from budget_tracker.config import get_settings
from budget_tracker.dates import now as current_instant
from budget_tracker.ledger.bucketing import (
    append_transaction,
    drop_transaction,
    empty_ledger,
    find_bucket,
    new_transaction,
    refresh_totals,
)
from budget_tracker.ledger.codec import (
    LedgerDeserializationError,
    deserialize_ledger,
    serialize_ledger,
)
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.models.ledger import Ledger
from budget_tracker.services.storage import KeyValueStore, StorageError


class LedgerService:
    """Loads, mutates and saves the ledger through a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
        ledger_key: Optional[str] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()
        self._key = ledger_key or get_settings().storage.ledger_key

    @property
    def key(self) -> str:
        return self._key

    async def load(
        self,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Ledger:
        """
        Load the stored ledger.

        Bucket totals are recomputed on load, so ``daily_total`` always
        reflects the day of the load.
        """
        now = now or current_instant()
        try:
            raw = await self._store.get(self._key)
            if raw is None:
                ledger = empty_ledger(now)
                self._audit_logger.log(AuditEventBuilder.ledger_initialized(
                    ledger.current_week.week_start, correlation_id
                ))
                return ledger
            ledger = refresh_totals(deserialize_ledger(raw), now)
        except (StorageError, LedgerDeserializationError) as e:
            self._audit_logger.log_load_failed(self._key, str(e), correlation_id)
            return empty_ledger(now)

        self._audit_logger.log(AuditEventBuilder.ledger_loaded(
            ledger.current_week.week_start,
            len(ledger.previous_weeks),
            correlation_id,
        ))
        return ledger

    async def save(
        self,
        ledger: Ledger,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Write a full snapshot of the ledger.

        Returns:
            True if the write succeeded
        """
        payload = serialize_ledger(ledger)
        try:
            await self._store.set(self._key, payload)
        except StorageError as e:
            self._audit_logger.log_save_failed(self._key, str(e), correlation_id)
            return False

        self._audit_logger.log(AuditEventBuilder.ledger_saved(
            self._key, len(payload), correlation_id
        ))
        return True

    async def add_transaction(
        self,
        name: str,
        amount: Decimal,
        ledger: Ledger,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Ledger:
        """
        Record a transaction for the present week and persist.

        Archives the current week first if the real-world week has
        moved on.

        Raises:
            ValidationError: If ``name`` is empty or ``amount`` is not
                positive. The ledger and the store are left unchanged.
        """
        now = now or current_instant()
        transaction = new_transaction(name, amount, now)
        updated = append_transaction(ledger, transaction, now)

        if len(updated.previous_weeks) > len(ledger.previous_weeks):
            self._audit_logger.log(AuditEventBuilder.week_rotated(
                archived_week_start=ledger.current_week.week_start,
                new_week_start=updated.current_week.week_start,
                correlation_id=correlation_id,
            ))
        self._audit_logger.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction.id,
            name=transaction.name,
            amount=str(transaction.amount),
            week_start=updated.current_week.week_start,
            correlation_id=correlation_id,
        ))

        await self.save(updated, correlation_id)
        return updated

    async def remove_transaction(
        self,
        ledger: Ledger,
        transaction_id: str,
        target_week_start: datetime,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Ledger:
        """
        Remove a transaction from one week's bucket and persist.

        Removing an unknown id is not an error; the ledger is saved
        unchanged.
        """
        now = now or current_instant()
        bucket = find_bucket(ledger, target_week_start)
        found = bucket is not None and bucket.get_transaction(transaction_id) is not None

        updated = drop_transaction(ledger, transaction_id, target_week_start, now)
        self._audit_logger.log(AuditEventBuilder.transaction_removed(
            transaction_id=transaction_id,
            week_start=bucket.week_start if bucket else target_week_start,
            found=found,
            correlation_id=correlation_id,
        ))

        await self.save(updated, correlation_id)
        return updated
