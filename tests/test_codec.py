"""Tests for ledger serialization."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from budget_tracker.ledger import (
    LedgerDeserializationError,
    deserialize_ledger,
    rebuild_bucket,
    serialize_ledger,
)
from budget_tracker.models import Ledger, Transaction

from tests.conftest import MONDAY, WEDNESDAY


@pytest.fixture
def ledger():
    last_monday = MONDAY - timedelta(weeks=1)
    previous = rebuild_bucket(
        last_monday,
        [Transaction(id="1760000000000", name="Books", amount=Decimal("15.25"),
                     timestamp=last_monday + timedelta(days=2, hours=14, microseconds=123000))],
        now=WEDNESDAY,
    )
    current = rebuild_bucket(
        MONDAY,
        [
            Transaction(id="1760400000000", name="Coffee", amount=Decimal("4.50"), timestamp=WEDNESDAY),
            Transaction(id="1760400001000", name="Lunch", amount=Decimal("12.00"),
                        timestamp=WEDNESDAY + timedelta(hours=3)),
        ],
        now=WEDNESDAY,
    )
    return Ledger(current_week=current, previous_weeks=(previous,))


class TestSerialize:
    """Tests for the stored JSON layout."""

    def test_camel_case_layout(self, ledger):
        data = json.loads(serialize_ledger(ledger))
        assert set(data) == {"currentWeek", "previousWeeks"}
        assert set(data["currentWeek"]) == {"weekStart", "transactions", "dailyTotal", "weeklyTotal"}
        assert set(data["currentWeek"]["transactions"][0]) == {"id", "name", "amount", "timestamp"}

    def test_instants_are_iso_strings(self, ledger):
        data = json.loads(serialize_ledger(ledger))
        assert data["currentWeek"]["weekStart"] == "2026-10-12T00:00:00"
        assert data["currentWeek"]["transactions"][0]["timestamp"] == "2026-10-14T09:30:00"

    def test_amounts_are_exact(self, ledger):
        data = json.loads(serialize_ledger(ledger))
        assert Decimal(data["currentWeek"]["transactions"][0]["amount"]) == Decimal("4.50")
        assert Decimal(data["currentWeek"]["weeklyTotal"]) == Decimal("16.50")


class TestRoundTrip:
    """Tests for serialize → deserialize."""

    def test_round_trip_preserves_ledger(self, ledger):
        """Test transactions, week starts and totals survive a round trip."""
        restored = deserialize_ledger(serialize_ledger(ledger))
        assert restored == ledger

    def test_round_trip_preserves_buckets(self, ledger):
        restored = deserialize_ledger(serialize_ledger(ledger))
        for original, copy in zip(ledger.buckets, restored.buckets):
            assert copy.week_start == original.week_start
            assert copy.transactions == original.transactions
            assert copy.weekly_total == original.weekly_total

    def test_empty_ledger_round_trip(self):
        ledger = Ledger(current_week=rebuild_bucket(MONDAY, [], now=WEDNESDAY))
        assert deserialize_ledger(serialize_ledger(ledger)) == ledger


class TestDeserialize:
    """Tests for reading stored data, including older blobs."""

    def test_numeric_amounts_and_utc_instants(self):
        """Test the shape written by the mobile app is accepted."""
        monday_utc = MONDAY.astimezone(timezone.utc)
        raw = json.dumps({
            "currentWeek": {
                "weekStart": monday_utc.isoformat(),
                "transactions": [{
                    "id": "1760400000000",
                    "name": "Coffee",
                    "amount": 4.5,
                    "timestamp": WEDNESDAY.astimezone(timezone.utc).isoformat(),
                }],
                "dailyTotal": 4.5,
                "weeklyTotal": 4.5,
            },
            "previousWeeks": [],
        })
        ledger = deserialize_ledger(raw)
        assert ledger.current_week.week_start == MONDAY
        assert ledger.current_week.transactions[0].amount == Decimal("4.5")
        assert ledger.current_week.transactions[0].timestamp == WEDNESDAY
        assert ledger.current_week.transactions[0].timestamp.tzinfo is None

    def test_invalid_json(self):
        with pytest.raises(LedgerDeserializationError):
            deserialize_ledger("{not json")

    def test_missing_current_week(self):
        with pytest.raises(LedgerDeserializationError):
            deserialize_ledger(json.dumps({"previousWeeks": []}))

    def test_wrong_types(self):
        """Test a non-date timestamp is rejected instead of coerced."""
        raw = json.dumps({
            "currentWeek": {
                "weekStart": "2026-10-12T00:00:00",
                "transactions": [{"id": "1", "name": "Coffee", "amount": "4.50", "timestamp": "yesterday"}],
            },
            "previousWeeks": [],
        })
        with pytest.raises(LedgerDeserializationError):
            deserialize_ledger(raw)

    def test_non_positive_amount_rejected(self):
        raw = json.dumps({
            "currentWeek": {
                "weekStart": "2026-10-12T00:00:00",
                "transactions": [{"id": "1", "name": "Coffee", "amount": "-4.50",
                                  "timestamp": "2026-10-14T09:30:00"}],
            },
            "previousWeeks": [],
        })
        with pytest.raises(LedgerDeserializationError):
            deserialize_ledger(raw)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
