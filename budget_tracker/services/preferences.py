"""Display preferences stored next to the ledger."""

from typing import Optional

from budget_tracker.audit import AuditLogger
from budget_tracker.config import get_settings
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.services.storage import KeyValueStore, StorageError


class PreferenceService:
    """
    Reads and writes the dark mode flag.

    The flag is stored as the string ``"true"`` or ``"false"``. Anything
    else, including a missing key or a failed read, means light mode.
    """

    def __init__(
        self,
        store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
        dark_mode_key: Optional[str] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()
        self._dark_mode_key = dark_mode_key or get_settings().storage.dark_mode_key

    async def load_dark_mode(self) -> bool:
        try:
            value = await self._store.get(self._dark_mode_key)
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.preference_failed(
                self._dark_mode_key, "load", str(e)
            ))
            return False
        return value == "true"

    async def save_dark_mode(self, enabled: bool) -> bool:
        value = "true" if enabled else "false"
        try:
            await self._store.set(self._dark_mode_key, value)
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.preference_failed(
                self._dark_mode_key, "save", str(e)
            ))
            return False
        self._audit_logger.log(AuditEventBuilder.preference_saved(self._dark_mode_key, value))
        return True
