"""
Append-only log of past audit submissions, kept in the key/value store.
"""
import json
import logging
from typing import Any, List

from pydantic import ValidationError as PydanticValidationError

from .errors import PersistenceCorruption
from .models import AuditEntry
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "gbp-audit-history"


class HistoryLog:
    """
    Submission history stored as one JSON array under HISTORY_KEY.

    Writes are read-modify-write; two processes appending at once can lose
    an entry.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read_raw(self) -> List[Any]:
        """The stored array as-is. Unparseable history reads as empty."""
        raw = self.store.get(HISTORY_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Ignoring audit history: %s", PersistenceCorruption(HISTORY_KEY, str(e)))
            return []
        if not isinstance(data, list):
            reason = f"expected a list, got {type(data).__name__}"
            logger.warning("Ignoring audit history: %s", PersistenceCorruption(HISTORY_KEY, reason))
            return []
        return data

    def _read(self) -> List[AuditEntry]:
        entries = []
        for i, item in enumerate(self._read_raw()):
            try:
                entries.append(AuditEntry.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("Skipping audit history entry %d: %s", i,
                               PersistenceCorruption(HISTORY_KEY, str(e)))
        return entries

    def append(self, entry: AuditEntry):
        # Unreadable rows are carried over untouched; only list() skips them
        items = self._read_raw()
        items.append(entry.to_payload())
        self.store.set(HISTORY_KEY, json.dumps(items))
        logger.info("Recorded audit for %r (%d in history)", entry.business_name, len(items))

    def list(self) -> List[AuditEntry]:
        """Readable entries, most recent first. Bad rows are skipped and logged."""
        return sorted(self._read(), key=lambda e: e.timestamp, reverse=True)

    def clear(self):
        """Delete every entry. Cannot be undone; confirm with the user first."""
        self.store.remove(HISTORY_KEY)
        logger.info("Audit history cleared")

    def __len__(self) -> int:
        return len(self._read())
