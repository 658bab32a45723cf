"""Local mirror of the backend's record list for the selected part.

Fetches can overlap (e.g. fast part switching). Each one gets a ticket
from begin_fetch(); only the most recently issued ticket may write.
A slower, older response is dropped instead of overwriting a newer one.

CRITICAL: This module must have NO UI dependencies.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from .models import Part, Record

logger = logging.getLogger(__name__)


class RecordCache:
    """Records from the last applied fetch, replaced wholesale each time.

    Attributes:
        records: Records in server order (read-only tuple)
        part: Part the records belong to, None before the first fetch
    """

    def __init__(self) -> None:
        self.records: Tuple[Record, ...] = ()
        self.part: Optional[Part] = None
        self._issued = 0
        self._applied = 0

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def is_loading(self) -> bool:
        """True while the latest issued fetch has not completed."""
        return self._applied < self._issued

    @property
    def latest_ticket(self) -> int:
        return self._issued

    def begin_fetch(self, part: Optional[Part] = None) -> int:
        """Issue a ticket for a new fetch.

        Fetching a part other than the cached one empties the cache right
        away, so rows of the old part are never shown under the new one.
        """
        if part is not None and part is not self.part:
            if self.records:
                logger.debug(f"Clearing {len(self.records)} cached records on switch to '{part.value}'")
            self.records = ()
            self.part = part
        self._issued += 1
        return self._issued

    def is_current(self, ticket: int) -> bool:
        return ticket == self._issued

    def commit(self, ticket: int, part: Part, records: Iterable[Record]) -> bool:
        """Replace the cache with a fetch result.

        Returns:
            False if a newer fetch was issued meanwhile (result discarded)
        """
        if not self.is_current(ticket):
            logger.debug(f"Discarding stale fetch #{ticket} (latest is #{self._issued})")
            return False
        self.records = tuple(records)
        self.part = part
        self._applied = ticket
        return True

    def fail(self, ticket: int, part: Part) -> bool:
        """Empty the cache after a failed fetch.

        Returns:
            False if a newer fetch was issued meanwhile (failure ignored)
        """
        if not self.is_current(ticket):
            logger.debug(f"Ignoring failure of stale fetch #{ticket} (latest is #{self._issued})")
            return False
        self.records = ()
        self.part = part
        self._applied = ticket
        return True

    def get(self, record_id: int) -> Optional[Record]:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def __len__(self) -> int:
        return len(self.records)
