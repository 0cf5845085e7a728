"""
Core Data Models for the Budget Tracker

Transactions are grouped into week buckets, and a ledger holds the
current week plus the archived previous weeks.

All models are frozen. Changing a ledger means building a new snapshot
with ``model_copy``; existing buckets are shared between snapshots.

Field names are snake_case in Python and camelCase on the wire, so a
stored ledger reads as ``{"currentWeek": ..., "previousWeeks": [...]}``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from budget_tracker.dates import to_local, week_start as normalize_week_start


ZERO = Decimal("0")


class Transaction(BaseModel):
    """A single named cash outflow."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque identifier, derived from the creation instant"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent"
    )
    timestamp: datetime = Field(
        ...,
        description="When the transaction was recorded (local time)"
    )

    @field_validator("timestamp")
    @classmethod
    def localize_timestamp(cls, v: datetime) -> datetime:
        return to_local(v)


class WeekBucket(BaseModel):
    """
    Transactions and derived totals for one calendar week.

    ``daily_total`` is computed against the instant the bucket was last
    rebuilt, not against the bucket's own week, so an archived bucket
    usually reports zero here.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    week_start: datetime = Field(
        ...,
        description="Monday 00:00 local of this week"
    )
    transactions: tuple[Transaction, ...] = Field(
        default=(),
        description="Transactions in insertion order"
    )
    daily_total: Decimal = Field(
        default=ZERO,
        description="Sum of today's transactions at rebuild time"
    )
    weekly_total: Decimal = Field(
        default=ZERO,
        description="Sum of transactions inside the week"
    )

    @field_validator("week_start")
    @classmethod
    def normalize_start(cls, v: datetime) -> datetime:
        return normalize_week_start(v)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self.transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    @property
    def is_empty(self) -> bool:
        return not self.transactions


class Ledger(BaseModel):
    """The whole budget: one active week and the archived ones."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    current_week: WeekBucket
    previous_weeks: tuple[WeekBucket, ...] = Field(
        default=(),
        description="Archived weeks, oldest rotation first"
    )

    @property
    def buckets(self) -> tuple[WeekBucket, ...]:
        """Current week followed by previous weeks."""
        return (self.current_week, *self.previous_weeks)
