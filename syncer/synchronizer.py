"""
Synchronizer

Tracks asyncio operations that are already running and reports which of
them are still pending, in registration order.
"""

import asyncio
import functools
import logging
from collections import OrderedDict
from typing import Any, Dict, Iterator, List, Optional

from .config import SyncerConfig, get_default_config
from .core.counter import IdSource
from .core.record import OperationRecord, Outcome, Status
from .core.registry import ALREADY_TRACKED, PendingRegistry
from .core.stack import OrderedStack

logger = logging.getLogger(__name__)


class Synchronizer:
    """
    Synchronizer

    Ties together:
    - an id source numbering operations in registration order
    - a pending registry deduplicating handles
    - an ordered stack listing pending records by id

    sync() never decides when an operation runs; it only watches the
    handle. All mutations happen on the event loop thread, either in sync()
    or in a done-callback, so no two mutations of one record interleave.
    """

    def __init__(self, config: Optional[SyncerConfig] = None):
        """
        Create a synchronizer

        Args:
            config: Synchronizer configuration, defaults if None
        """
        self.config = config or get_default_config()
        self._ids = IdSource()
        self._registry = PendingRegistry(self._ids)
        self._stack = OrderedStack()
        self._history: "OrderedDict[Any, OperationRecord]" = OrderedDict()
        self._counts = {"registered": 0, "succeeded": 0, "failed": 0}

    def sync(self, handle: Any) -> None:
        """
        Start tracking an operation handle

        Values that are not asyncio futures (or tasks) are ignored, as is a
        handle that is already pending. The outcome is never returned here;
        poll lookup() or pending() to observe it.

        Args:
            handle: asyncio.Future or asyncio.Task
        """
        if not asyncio.isfuture(handle):
            logger.debug(f"Ignoring non-future value of type {type(handle).__name__}")
            return

        op_id = self._registry.try_register(handle)
        if op_id is ALREADY_TRACKED:
            return

        self._stack.place(op_id, self._registry.lookup(handle))
        self._counts["registered"] += 1

        # asyncio schedules done-callbacks with call_soon, so even a handle
        # that is already done stays pending until the loop runs again
        handle.add_done_callback(functools.partial(self._on_done, op_id))

    def _on_done(self, op_id: int, handle: "asyncio.Future[Any]") -> None:
        # the watcher only settles the record it was attached for; a manual
        # settle (and any later re-sync) leaves it with nothing to do
        record = self._registry.lookup(handle)
        if record is None or record.id != op_id:
            logger.debug(f"Operation {op_id} already settled, ignoring completion")
            return
        self.settle(handle, Outcome.from_future(handle))

    def settle(self, handle: Any, outcome: Outcome) -> OperationRecord:
        """
        Record the terminal outcome of a tracked handle

        Called by the completion watcher, or by the host to record an
        outcome by hand before the future completes. The record leaves the registry,
        the id source advances one tick and the stack slot becomes a
        tombstone.

        Args:
            handle: Tracked handle
            outcome: Succeeded or failed outcome

        Returns:
            The settled record

        Raises:
            NotTracked: The handle is not pending
        """
        record = self._registry.settle(handle, outcome)
        self._ids.next()
        self._stack.clear(record.id)

        if record.status == Status.SUCCEEDED:
            self._counts["succeeded"] += 1
        else:
            self._counts["failed"] += 1
            logger.debug(f"Operation {record.id} failed: {record.cause!r}")

        self._remember(record)

        threshold = self.config.compact_threshold
        if threshold and self._stack.tombstones >= threshold:
            self._stack.compact()

        return record

    def _remember(self, record: OperationRecord) -> None:
        size = self.config.history_size
        if size <= 0:
            return
        self._history[record.handle] = record
        self._history.move_to_end(record.handle)
        while len(self._history) > size:
            self._history.popitem(last=False)

    def pending(self) -> Iterator[OperationRecord]:
        """Pending records in registration order, freshly computed per call"""
        return self._stack.pending()

    def lookup(self, handle: Any) -> Optional[OperationRecord]:
        """
        Find the record for a handle

        Returns the live record while pending, then the terminal record as
        long as it is within the settled history.
        """
        try:
            record = self._registry.lookup(handle)
            if record is None:
                record = self._history.get(handle)
        except TypeError:
            # unhashable values are never tracked
            return None
        return record

    async def drain(self) -> None:
        """
        Wait until every operation pending now has settled

        Operations registered while waiting are not waited for. Failures
        are recorded, not raised, and the tracked operations are never
        cancelled by this call.
        """
        handles: List[Any] = [record.handle for record in self.pending()]
        if not handles:
            return
        await asyncio.wait(handles)
        # let any watcher scheduled behind the wait callbacks run
        await asyncio.sleep(0)

    def stats(self) -> Dict[str, int]:
        """Get synchronizer statistics"""
        return {
            **self._counts,
            "pending": len(self._registry),
            "last_id": self._ids.current,
        }

    def __contains__(self, handle: Any) -> bool:
        try:
            return handle in self._registry
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._registry)
