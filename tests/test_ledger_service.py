"""
Tests for LedgerService

Storage is an in-memory store; failures are switched on with its
fail_reads / fail_writes flags. No files are touched.
"""

import json
from datetime import timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from budget_tracker.ledger import deserialize_ledger, empty_ledger, serialize_ledger
from budget_tracker.models import AuditEventType, Ledger

from tests.conftest import MONDAY, WEDNESDAY


class TestLoad:
    """Tests for LedgerService.load."""

    @pytest.mark.asyncio
    async def test_missing_key_gives_empty_ledger(self, ledger_service, recording_logger):
        ledger = await ledger_service.load(now=WEDNESDAY)
        assert ledger.current_week.week_start == MONDAY
        assert ledger.current_week.transactions == ()
        assert ledger.previous_weeks == ()
        assert AuditEventType.LEDGER_INITIALIZED.value in recording_logger.event_types()

    @pytest.mark.asyncio
    async def test_loads_stored_ledger(self, ledger_service, store):
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), empty_ledger(WEDNESDAY), now=WEDNESDAY)
        loaded = await ledger_service.load(now=WEDNESDAY)
        assert loaded == ledger

    @pytest.mark.asyncio
    async def test_daily_total_recomputed_on_load(self, ledger_service):
        """Test a load on a later day reflects that day."""
        await ledger_service.add_transaction("Coffee", Decimal("4.50"), empty_ledger(WEDNESDAY), now=WEDNESDAY)
        loaded = await ledger_service.load(now=WEDNESDAY + timedelta(days=1))
        assert loaded.current_week.daily_total == Decimal("0")
        assert loaded.current_week.weekly_total == Decimal("4.50")

    @pytest.mark.asyncio
    async def test_read_failure_gives_empty_ledger(self, ledger_service, store, recording_logger):
        store.fail_reads = True
        ledger = await ledger_service.load(now=WEDNESDAY)
        assert ledger == empty_ledger(WEDNESDAY)
        assert AuditEventType.LEDGER_LOAD_FAILED.value in recording_logger.event_types("error")

    @pytest.mark.asyncio
    async def test_corrupt_data_gives_empty_ledger(self, ledger_service, store, recording_logger):
        await store.set("budget_data", json.dumps({"currentWeek": "garbage"}))
        ledger = await ledger_service.load(now=WEDNESDAY)
        assert ledger == empty_ledger(WEDNESDAY)
        assert AuditEventType.LEDGER_LOAD_FAILED.value in recording_logger.event_types("error")


class TestAdd:
    """Tests for LedgerService.add_transaction."""

    @pytest.mark.asyncio
    async def test_coffee_then_lunch_persisted(self, ledger_service, store):
        """Test the Wednesday scenario and that each add is saved."""
        ledger = await ledger_service.load(now=WEDNESDAY)
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), ledger, now=WEDNESDAY)
        assert [t.name for t in ledger.current_week.transactions] == ["Coffee"]
        assert ledger.current_week.weekly_total == Decimal("4.50")
        assert ledger.current_week.daily_total == Decimal("4.50")

        lunch_time = WEDNESDAY + timedelta(hours=3)
        ledger = await ledger_service.add_transaction("Lunch", Decimal("12.00"), ledger, now=lunch_time)
        assert [t.name for t in ledger.current_week.transactions] == ["Coffee", "Lunch"]
        assert ledger.current_week.weekly_total == Decimal("16.50")

        stored = deserialize_ledger(store.snapshot()["budget_data"])
        assert stored == ledger
        assert store.write_count == 2

    @pytest.mark.asyncio
    async def test_rotation_logged(self, ledger_service, recording_logger):
        stale = empty_ledger(WEDNESDAY - timedelta(weeks=3))
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), stale, now=WEDNESDAY)
        assert len(ledger.previous_weeks) == 1
        assert ledger.previous_weeks[0] is stale.current_week
        assert ledger.current_week.week_start == MONDAY
        assert len(ledger.current_week.transactions) == 1
        assert AuditEventType.WEEK_ROTATED.value in recording_logger.event_types()

    @pytest.mark.asyncio
    async def test_write_failure_keeps_memory_state(self, ledger_service, store, recording_logger):
        """Test a failed save is swallowed and the new ledger returned."""
        store.fail_writes = True
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), empty_ledger(WEDNESDAY), now=WEDNESDAY)
        assert ledger.current_week.weekly_total == Decimal("4.50")
        assert "budget_data" not in store.snapshot()
        assert AuditEventType.SAVE_FAILED.value in recording_logger.event_types("error")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name, amount", [("", Decimal("4.50")), ("Coffee", Decimal("0"))])
    async def test_unvalidated_input_is_rejected_before_saving(self, ledger_service, store, name, amount):
        """Test input that skipped the validator raises and nothing is stored."""
        with pytest.raises(ValidationError):
            await ledger_service.add_transaction(name, amount, empty_ledger(WEDNESDAY), now=WEDNESDAY)
        assert store.write_count == 0
        assert "budget_data" not in store.snapshot()

    @pytest.mark.asyncio
    async def test_next_save_catches_up(self, ledger_service, store):
        store.fail_writes = True
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), empty_ledger(WEDNESDAY), now=WEDNESDAY)
        store.fail_writes = False
        later = WEDNESDAY + timedelta(minutes=5)
        ledger = await ledger_service.add_transaction("Lunch", Decimal("12.00"), ledger, now=later)
        stored = deserialize_ledger(store.snapshot()["budget_data"])
        assert [t.name for t in stored.current_week.transactions] == ["Coffee", "Lunch"]


class TestRemove:
    """Tests for LedgerService.remove_transaction."""

    @pytest.mark.asyncio
    async def test_remove_and_persist(self, ledger_service, store):
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), empty_ledger(WEDNESDAY), now=WEDNESDAY)
        coffee_id = ledger.current_week.transactions[0].id

        ledger = await ledger_service.remove_transaction(ledger, coffee_id, WEDNESDAY, now=WEDNESDAY)
        assert ledger.current_week.transactions == ()
        assert ledger.current_week.weekly_total == Decimal("0")
        assert deserialize_ledger(store.snapshot()["budget_data"]) == ledger

    @pytest.mark.asyncio
    async def test_remove_unknown_id(self, ledger_service, recording_logger):
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), empty_ledger(WEDNESDAY), now=WEDNESDAY)
        updated = await ledger_service.remove_transaction(ledger, "nope", MONDAY, now=WEDNESDAY)
        assert updated == ledger
        removed = [
            kwargs for _, _, kwargs in recording_logger.records
            if kwargs["event_type"] == AuditEventType.TRANSACTION_REMOVED.value
        ]
        assert removed[-1]["details"]["found"] is False

    @pytest.mark.asyncio
    async def test_remove_from_archived_week(self, ledger_service):
        """Test removal in an archived week leaves the current week alone."""
        last_week = WEDNESDAY - timedelta(weeks=1)
        ledger = await ledger_service.add_transaction("Books", Decimal("15.00"), empty_ledger(last_week), now=last_week)
        ledger = await ledger_service.add_transaction("Coffee", Decimal("4.50"), ledger, now=WEDNESDAY)
        books_id = ledger.previous_weeks[0].transactions[0].id

        updated = await ledger_service.remove_transaction(ledger, books_id, last_week, now=WEDNESDAY)
        assert updated.current_week is ledger.current_week
        assert updated.previous_weeks[0].transactions == ()
        assert len(updated.previous_weeks) == 1


class TestSave:
    """Tests for LedgerService.save."""

    @pytest.mark.asyncio
    async def test_save_returns_status(self, ledger_service, store):
        ledger = empty_ledger(WEDNESDAY)
        assert await ledger_service.save(ledger) is True
        assert store.snapshot()["budget_data"] == serialize_ledger(ledger)

        store.fail_writes = True
        assert await ledger_service.save(ledger) is False

    @pytest.mark.asyncio
    async def test_full_snapshot_overwrite(self, ledger_service, store):
        await ledger_service.save(empty_ledger(WEDNESDAY))
        replacement = Ledger(current_week=empty_ledger(WEDNESDAY + timedelta(weeks=1)).current_week)
        await ledger_service.save(replacement)
        assert deserialize_ledger(store.snapshot()["budget_data"]) == replacement


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
