"""
Syncer Exception Definitions

Errors raised by the synchronizer's bookkeeping. Failures of the tracked
operations themselves are never raised; they are stored on the record.
"""

from typing import Any, Dict, Optional


class SyncerError(Exception):
    """Syncer base exception"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotTracked(SyncerError):
    """
    Handle not tracked error

    Raised when settling a handle that is not currently registered, either
    because it was never registered or because it has already been settled.
    Indicates a wiring bug in the completion watcher and must not be retried.
    """

    def __init__(self, handle: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Operation handle is not tracked: {handle!r}", details)
        self.handle = handle


class DuplicateId(SyncerError):
    """
    Duplicate id error

    Raised when placing a record into an occupied stack slot. Only an id
    source that reissues ids can cause this.
    """

    def __init__(self, id: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Stack slot already occupied: {id}", details)
        self.id = id
