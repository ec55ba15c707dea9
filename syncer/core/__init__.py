"""Syncer core bookkeeping structures"""

from .errors import SyncerError, NotTracked, DuplicateId
from .counter import IdSource
from .record import Status, Outcome, OperationRecord
from .registry import PendingRegistry, ALREADY_TRACKED
from .stack import OrderedStack

__all__ = [
    # Errors
    "SyncerError",
    "NotTracked",
    "DuplicateId",
    # Ids
    "IdSource",
    # Records
    "Status",
    "Outcome",
    "OperationRecord",
    # Indexes
    "PendingRegistry",
    "ALREADY_TRACKED",
    "OrderedStack",
]
