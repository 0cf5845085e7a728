"""
Ledger Serialization

The stored form is a JSON object:

    {
      "currentWeek": {"weekStart": "...", "transactions": [...],
                      "dailyTotal": "...", "weeklyTotal": "..."},
      "previousWeeks": [ ... ]
    }

Transactions carry ``id``, ``name``, ``amount`` and ``timestamp``.
Instants are ISO-8601 strings and amounts are decimal strings; JSON
numbers are accepted for amounts when reading.

Decoding is strict: anything that does not match the schema raises
``LedgerDeserializationError`` instead of producing a partial ledger.
"""

from pydantic import ValidationError

from budget_tracker.models.ledger import Ledger


class LedgerDeserializationError(Exception):
    """Stored ledger data does not match the schema."""
    pass


def serialize_ledger(ledger: Ledger) -> str:
    return ledger.model_dump_json(by_alias=True)


def deserialize_ledger(raw: str) -> Ledger:
    """
    Parse a stored ledger.

    Raises:
        LedgerDeserializationError: On invalid JSON, missing fields or
            wrongly typed values
    """
    try:
        return Ledger.model_validate_json(raw)
    except ValidationError as e:
        raise LedgerDeserializationError(
            f"Invalid ledger data ({e.error_count()} error(s)): {e}"
        ) from e
