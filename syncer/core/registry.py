"""
Pending registry

Deduplicating index from operation handle to its record
"""

import logging
import time
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Union

from .counter import IdSource
from .errors import NotTracked
from .record import OperationRecord, Outcome

logger = logging.getLogger(__name__)


class _Registration(Enum):
    ALREADY_TRACKED = "already_tracked"


ALREADY_TRACKED = _Registration.ALREADY_TRACKED


class PendingRegistry:
    """
    Pending registry

    Guarantees at most one record per handle while the handle is pending.
    The check-then-insert in try_register is not locked; callers keep all
    mutations on one thread.
    """

    def __init__(self, ids: IdSource):
        """
        Initialize the registry

        Args:
            ids: Id source that numbers new records
        """
        self._ids = ids
        self._records: Dict[Any, OperationRecord] = {}

    def try_register(self, handle: Any) -> Union[int, _Registration]:
        """
        Register a handle unless it is already tracked

        Args:
            handle: Operation handle

        Returns:
            The new record's id, or ALREADY_TRACKED if the handle already
            has a record (which is left unchanged)
        """
        if handle in self._records:
            return ALREADY_TRACKED

        record = OperationRecord(id=self._ids.next(), handle=handle)
        self._records[handle] = record
        logger.debug(f"Registered operation {record.id}")
        return record.id

    def settle(self, handle: Any, outcome: Outcome) -> OperationRecord:
        """
        Record the terminal outcome of a handle and stop tracking it

        Args:
            handle: Operation handle
            outcome: Succeeded or failed outcome

        Returns:
            The settled record

        Raises:
            NotTracked: The handle is not registered
            ValueError: The outcome is still pending
        """
        if not outcome.is_terminal():
            raise ValueError("cannot settle with a pending outcome")

        record = self._records.pop(handle, None)
        if record is None:
            raise NotTracked(handle)

        record.outcome = outcome
        record.settled_at = time.monotonic()
        logger.debug(f"Settled operation {record.id}: {outcome.status.value}")
        return record

    def lookup(self, handle: Any) -> Optional[OperationRecord]:
        return self._records.get(handle)

    def records(self) -> Iterator[OperationRecord]:
        """Iterate over a snapshot of the tracked records"""
        return iter(list(self._records.values()))

    def __contains__(self, handle: Any) -> bool:
        return handle in self._records

    def __len__(self) -> int:
        return len(self._records)
