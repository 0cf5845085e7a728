"""Budget ledger package: bucketing, serialization and the persisting service."""

from budget_tracker.ledger.bucketing import (
    all_transactions,
    append_transaction,
    daily_total,
    drop_transaction,
    empty_ledger,
    find_bucket,
    new_transaction,
    rebuild_bucket,
    refresh_totals,
    weekly_total,
)
from budget_tracker.ledger.codec import (
    LedgerDeserializationError,
    deserialize_ledger,
    serialize_ledger,
)
from budget_tracker.ledger.service import LedgerService

__all__ = [
    # Bucketing
    "all_transactions",
    "append_transaction",
    "daily_total",
    "drop_transaction",
    "empty_ledger",
    "find_bucket",
    "new_transaction",
    "rebuild_bucket",
    "refresh_totals",
    "weekly_total",
    # Serialization
    "LedgerDeserializationError",
    "deserialize_ledger",
    "serialize_ledger",
    # Service
    "LedgerService",
]
