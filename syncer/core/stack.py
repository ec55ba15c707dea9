"""
Ordered stack

Sparse id-indexed view of pending records. Settled slots are kept as
tombstones so iteration by id preserves issuance order.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from .errors import DuplicateId
from .record import OperationRecord

logger = logging.getLogger(__name__)


class OrderedStack:
    """Id-indexed slots holding a live record or a tombstone (None)"""

    def __init__(self):
        self._slots: Dict[int, Optional[OperationRecord]] = {}
        self._tombstones = 0

    def place(self, id: int, record: OperationRecord) -> None:
        """
        Put a record in the slot for id

        Raises:
            DuplicateId: The slot already holds a live record
        """
        if self._slots.get(id) is not None:
            raise DuplicateId(id, {"record": self._slots[id].id})
        if id in self._slots:
            self._tombstones -= 1
        self._slots[id] = record

    def clear(self, id: int) -> None:
        """Empty the slot for id, no-op if it is already empty or unknown"""
        if self._slots.get(id) is None:
            return
        self._slots[id] = None
        self._tombstones += 1

    def pending(self) -> Iterator[OperationRecord]:
        """
        Live records in ascending id order

        Each call takes a fresh snapshot. Records settling while the
        caller iterates may or may not appear.
        """
        for _, record in self.slots():
            if record is not None:
                yield record

    def slots(self) -> Iterator[Tuple[int, Optional[OperationRecord]]]:
        """All slots in ascending id order, tombstones included"""
        snapshot = sorted(self._slots.items(), key=lambda item: item[0])
        return iter(snapshot)

    def compact(self) -> int:
        """Drop tombstones, returns the number removed"""
        removed = self._tombstones
        if removed:
            self._slots = {
                id: record for id, record in self._slots.items() if record is not None
            }
            self._tombstones = 0
            logger.debug(f"Compacted {removed} tombstones")
        return removed

    @property
    def tombstones(self) -> int:
        return self._tombstones

    def __len__(self) -> int:
        return len(self._slots) - self._tombstones
