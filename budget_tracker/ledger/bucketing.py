"""
Week Bucketing and Totals

Pure functions that decide which bucket a transaction lands in and
keep bucket totals consistent with bucket contents. Nothing here
touches storage; ``LedgerService`` wraps these with persistence.

Functions that depend on "now" take it as an optional argument and
fall back to the wall clock.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from budget_tracker.dates import (
    DateLike,
    is_same_day,
    is_same_week,
    now as current_instant,
    to_local,
    week_end,
    week_start,
)
from budget_tracker.models.ledger import ZERO, Ledger, Transaction, WeekBucket


def daily_total(transactions: Iterable[Transaction], day: datetime) -> Decimal:
    """Sum of amounts recorded on the same calendar day as ``day``."""
    return sum(
        (t.amount for t in transactions if is_same_day(t.timestamp, day)),
        ZERO,
    )


def weekly_total(transactions: Iterable[Transaction], week_start_date: DateLike) -> Decimal:
    """Sum of amounts inside ``[week_start_date, week_end(week_start_date)]``."""
    start = to_local(week_start_date)
    end = week_end(start)
    return sum(
        (t.amount for t in transactions if start <= t.timestamp <= end),
        ZERO,
    )


def rebuild_bucket(
    start: datetime,
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> WeekBucket:
    """
    Build a bucket with fresh totals.

    The daily total is measured against ``now``, not against ``start``.
    """
    now = now or current_instant()
    items = tuple(transactions)
    bucket_start = week_start(start)
    return WeekBucket(
        week_start=bucket_start,
        transactions=items,
        daily_total=daily_total(items, now),
        weekly_total=weekly_total(items, bucket_start),
    )


def empty_ledger(now: Optional[datetime] = None) -> Ledger:
    """A ledger holding one empty bucket for the present week."""
    now = now or current_instant()
    return Ledger(current_week=rebuild_bucket(week_start(now), (), now))


def new_transaction(name: str, amount: Decimal, now: Optional[datetime] = None) -> Transaction:
    """
    Create a transaction stamped with ``now``.

    The id is the creation instant in epoch milliseconds. Two
    transactions created in the same millisecond share an id.
    """
    now = now or current_instant()
    return Transaction(
        id=str(int(now.timestamp() * 1000)),
        name=name,
        amount=amount,
        timestamp=now,
    )


def append_transaction(
    ledger: Ledger,
    transaction: Transaction,
    now: Optional[datetime] = None,
) -> Ledger:
    """
    Add a transaction to the bucket for the present week.

    If the real-world week has moved past the current bucket, that
    bucket is archived at the end of ``previous_weeks`` and a new bucket
    holding only ``transaction`` becomes current.
    """
    now = now or current_instant()
    this_week = week_start(now)

    if is_same_week(ledger.current_week.week_start, this_week):
        current = rebuild_bucket(
            this_week,
            (*ledger.current_week.transactions, transaction),
            now,
        )
        return ledger.model_copy(update={"current_week": current})

    return Ledger(
        current_week=rebuild_bucket(this_week, (transaction,), now),
        previous_weeks=(*ledger.previous_weeks, ledger.current_week),
    )


def drop_transaction(
    ledger: Ledger,
    transaction_id: str,
    target_week_start: datetime,
    now: Optional[datetime] = None,
) -> Ledger:
    """
    Remove a transaction from the bucket of one week.

    Only the targeted bucket is rebuilt; every other bucket is carried
    over as the same object. An unknown id leaves every bucket
    untouched. Buckets are never removed, even when empty.
    """
    now = now or current_instant()
    target = week_start(target_week_start)

    def update(bucket: WeekBucket) -> WeekBucket:
        if not is_same_week(bucket.week_start, target):
            return bucket
        remaining = [t for t in bucket.transactions if t.id != transaction_id]
        if len(remaining) == len(bucket.transactions):
            return bucket
        return rebuild_bucket(bucket.week_start, remaining, now)

    return Ledger(
        current_week=update(ledger.current_week),
        previous_weeks=tuple(update(bucket) for bucket in ledger.previous_weeks),
    )


def refresh_totals(ledger: Ledger, now: Optional[datetime] = None) -> Ledger:
    """Recompute the totals of every bucket against ``now``."""
    now = now or current_instant()
    return Ledger(
        current_week=rebuild_bucket(
            ledger.current_week.week_start, ledger.current_week.transactions, now
        ),
        previous_weeks=tuple(
            rebuild_bucket(bucket.week_start, bucket.transactions, now)
            for bucket in ledger.previous_weeks
        ),
    )


def find_bucket(ledger: Ledger, start: datetime) -> Optional[WeekBucket]:
    """The current or archived bucket for the week containing ``start``."""
    for bucket in ledger.buckets:
        if is_same_week(bucket.week_start, start):
            return bucket
    return None


def all_transactions(ledger: Ledger) -> list[Transaction]:
    """Every transaction in the ledger, oldest bucket first."""
    ordered = (*ledger.previous_weeks, ledger.current_week)
    return [t for bucket in ordered for t in bucket.transactions]
