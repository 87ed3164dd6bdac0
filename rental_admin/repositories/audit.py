"""
Append-only audit log of moderation actions.
"""

from typing import List
from rental_admin.models.audit import AuditEntry
import logging

logger = logging.getLogger(__name__)


class AuditLog:
    """
    In-memory, append-only audit log.

    Entries are kept newest-insertion-first. Reads return them ordered by
    timestamp descending; entries sharing a timestamp keep insertion order
    with the most recent insertion first. Nothing is ever removed or changed.
    Callers are responsible for serializing writes; the listing repository
    owns the log and records into it under its own lock.
    """

    def __init__(self):
        self._entries: List[AuditEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, entry: AuditEntry) -> None:
        """Insert an entry at the head of the log."""
        self._entries.insert(0, entry)
        logger.debug(f"Audit entry recorded for listing {entry.listing_id}: {entry.action}")

    def read_all(self) -> List[AuditEntry]:
        """Return all entries, most recent timestamp first."""
        # sorted() is stable under reverse=True, so equal timestamps keep head-first order
        return sorted(self._entries, key=lambda entry: entry.timestamp, reverse=True)
