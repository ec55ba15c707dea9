"""
Syncer - tracks in-flight asyncio operations

Register running futures and tasks, observe which are still pending in
registration order, and read back their outcomes once settled.
"""

__version__ = "0.1.0"

from .core import (
    # Errors
    SyncerError,
    NotTracked,
    DuplicateId,
    # Core classes
    IdSource,
    Status,
    Outcome,
    OperationRecord,
    PendingRegistry,
    ALREADY_TRACKED,
    OrderedStack,
)
from .config import (
    SyncerConfig,
    get_default_config,
    load_config_from_file,
    load_config_from_env,
    validate_config,
    configure_logging,
)
from .synchronizer import Synchronizer

__all__ = [
    "__version__",
    # Errors
    "SyncerError",
    "NotTracked",
    "DuplicateId",
    # Core
    "IdSource",
    "Status",
    "Outcome",
    "OperationRecord",
    "PendingRegistry",
    "ALREADY_TRACKED",
    "OrderedStack",
    # Config
    "SyncerConfig",
    "get_default_config",
    "load_config_from_file",
    "load_config_from_env",
    "validate_config",
    "configure_logging",
    # Synchronizer
    "Synchronizer",
]
