"""
Budget Session Orchestrator

Headless state for the single budget screen:

1. Start → load ledger and dark mode preference together
2. Add → validate input → add through the ledger service
3. Delete → remove from the selected week, keep that week selected
4. Week picker → list archived weeks, select one, or go home

Rendering is left to whatever front end drives this class. Everything
it needs to draw (totals, rows, labels) is exposed as plain data.
"""

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from budget_tracker.audit import AuditLogger, create_correlation_id
from budget_tracker.config import Settings, get_settings
from budget_tracker.dates import format_date_time, is_same_week, week_label
from budget_tracker.ledger import LedgerService, find_bucket
from budget_tracker.models.ledger import Ledger, Transaction, WeekBucket
from budget_tracker.models.validation import ValidationResult
from budget_tracker.services import (
    JsonFileKeyValueStore,
    KeyValueStore,
    PreferenceService,
)
from budget_tracker.validation import TransactionInputValidator


class WeekOption(BaseModel):
    """One row of the week picker."""
    week_start: datetime
    label: str
    weekly_total: Decimal
    display_total: str


class TransactionRow(BaseModel):
    """One row of the transaction list."""
    id: str
    name: str
    when: str
    display_amount: str


class SessionNotStartedError(Exception):
    """The session was used before ``start()``."""
    pass


class BudgetSession:
    """
    State behind the budget screen.

    The ledger is replaced, never mutated, on every add and delete.
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        preference_service: PreferenceService,
        validator: Optional[TransactionInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: Optional[str] = None,
    ):
        self._ledger_service = ledger_service
        self._preference_service = preference_service
        self._validator = validator or TransactionInputValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._currency_symbol = (
            currency_symbol if currency_symbol is not None
            else get_settings().app.currency_symbol
        )

        self._ledger: Optional[Ledger] = None
        self._selected_start: Optional[datetime] = None
        self.is_menu_open = False
        self.is_dark_mode = False

    # =========================================================================
    # State
    # =========================================================================

    @property
    def is_loaded(self) -> bool:
        return self._ledger is not None

    @property
    def ledger(self) -> Ledger:
        if self._ledger is None:
            raise SessionNotStartedError("Call start() before using the session")
        return self._ledger

    @property
    def selected_week(self) -> WeekBucket:
        """The selected bucket, or the current week if it no longer exists."""
        ledger = self.ledger
        if self._selected_start is not None:
            bucket = find_bucket(ledger, self._selected_start)
            if bucket is not None:
                return bucket
        return ledger.current_week

    @property
    def is_viewing_current_week(self) -> bool:
        return is_same_week(self.selected_week.week_start, self.ledger.current_week.week_start)

    async def start(self, now: Optional[datetime] = None) -> None:
        ledger, dark_mode = await asyncio.gather(
            self._ledger_service.load(now=now),
            self._preference_service.load_dark_mode(),
        )
        self._ledger = ledger
        self._selected_start = ledger.current_week.week_start
        self.is_dark_mode = dark_mode

    # =========================================================================
    # Actions
    # =========================================================================

    async def submit_transaction(
        self,
        name_text: str,
        amount_text: str,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Validate the form and add the transaction.

        On success the current week becomes selected. On failure the
        ledger is untouched and the result carries the user message.
        """
        correlation_id = create_correlation_id()
        result = self._validator.validate(name_text, amount_text)
        if not result.is_valid:
            self._audit_logger.log_input_rejected(
                [issue.model_dump() for issue in result.issues],
                correlation_id,
            )
            return result

        self._ledger = await self._ledger_service.add_transaction(
            result.name,
            result.amount,
            self.ledger,
            now=now,
            correlation_id=correlation_id,
        )
        self._selected_start = self._ledger.current_week.week_start
        return result

    async def delete_transaction(
        self,
        transaction_id: str,
        now: Optional[datetime] = None,
    ) -> None:
        """Remove a transaction from the selected week."""
        target = self.selected_week.week_start
        self._ledger = await self._ledger_service.remove_transaction(
            self.ledger,
            transaction_id,
            target,
            now=now,
            correlation_id=create_correlation_id(),
        )
        if find_bucket(self._ledger, target) is None:
            self._selected_start = self._ledger.current_week.week_start

    async def toggle_dark_mode(self) -> bool:
        self.is_dark_mode = not self.is_dark_mode
        await self._preference_service.save_dark_mode(self.is_dark_mode)
        return self.is_dark_mode

    def open_menu(self) -> None:
        self.is_menu_open = True

    def close_menu(self) -> None:
        self.is_menu_open = False

    def select_week(self, week_start: datetime) -> WeekBucket:
        """Select a week from the picker and close it."""
        bucket = find_bucket(self.ledger, week_start)
        self._selected_start = (bucket or self.ledger.current_week).week_start
        self.is_menu_open = False
        return self.selected_week

    def go_home(self) -> WeekBucket:
        """Jump back to the current week and close the picker."""
        self._selected_start = self.ledger.current_week.week_start
        self.is_menu_open = False
        return self.selected_week

    # =========================================================================
    # Display data
    # =========================================================================

    def format_amount(self, value: Decimal) -> str:
        return f"{self._currency_symbol}{value:.2f}"

    def week_options(self) -> list[WeekOption]:
        """Picker rows for archived weeks, in stored order."""
        return [
            WeekOption(
                week_start=bucket.week_start,
                label=week_label(bucket.week_start),
                weekly_total=bucket.weekly_total,
                display_total=self.format_amount(bucket.weekly_total),
            )
            for bucket in self.ledger.previous_weeks
        ]

    def transaction_rows(self) -> list[TransactionRow]:
        return [
            TransactionRow(
                id=t.id,
                name=t.name,
                when=format_date_time(t.timestamp),
                display_amount=self.format_amount(t.amount),
            )
            for t in self.selected_week.transactions
        ]

    def delete_prompt(self, transaction: Transaction) -> str:
        return f'Remove "{transaction.name}" for {self.format_amount(transaction.amount)}?'


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
) -> BudgetSession:
    """
    Factory function to wire up a session.

    Args:
        settings: Settings to use. Defaults to the cached settings.
        store: Key-value store to use. Defaults to the JSON file store
               at the configured path.

    Returns:
        An unstarted BudgetSession
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    store = store or JsonFileKeyValueStore(
        path=storage_settings.store_path,
        write_attempts=storage_settings.write_attempts,
    )
    audit_logger = AuditLogger()

    return BudgetSession(
        ledger_service=LedgerService(
            store,
            audit_logger=audit_logger,
            ledger_key=storage_settings.ledger_key,
        ),
        preference_service=PreferenceService(
            store,
            audit_logger=audit_logger,
            dark_mode_key=storage_settings.dark_mode_key,
        ),
        validator=TransactionInputValidator(app_settings.large_amount_warning),
        audit_logger=audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )
