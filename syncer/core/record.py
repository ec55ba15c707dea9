"""
Operation records

Value objects describing one tracked asynchronous operation and its outcome
"""

import asyncio
import time
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Status(str, Enum):
    """Outcome status"""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Outcome(BaseModel):
    """
    Outcome of an operation

    Exactly one of value or cause is meaningful once terminal:
    - succeeded: value holds the result, cause is None
    - failed: cause holds the exception
    - pending: neither is set
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Status = Status.PENDING
    value: Optional[Any] = None
    cause: Optional[BaseException] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "Outcome":
        if self.status == Status.FAILED and self.cause is None:
            raise ValueError("failed outcome requires a cause")
        if self.status == Status.SUCCEEDED and self.cause is not None:
            raise ValueError("succeeded outcome cannot carry a cause")
        if self.status == Status.PENDING and (
            self.value is not None or self.cause is not None
        ):
            raise ValueError("pending outcome carries neither value nor cause")
        return self

    @classmethod
    def pending(cls) -> "Outcome":
        return cls()

    @classmethod
    def succeeded(cls, value: Any = None) -> "Outcome":
        return cls(status=Status.SUCCEEDED, value=value)

    @classmethod
    def failed(cls, cause: BaseException) -> "Outcome":
        return cls(status=Status.FAILED, cause=cause)

    @classmethod
    def from_future(cls, future: "asyncio.Future[Any]") -> "Outcome":
        """
        Build the terminal outcome of a done future

        Cancellation counts as failure, with the CancelledError as cause.

        Args:
            future: A future for which done() is True

        Returns:
            Succeeded or failed outcome
        """
        if future.cancelled():
            return cls.failed(asyncio.CancelledError())
        exception = future.exception()
        if exception is not None:
            return cls.failed(exception)
        return cls.succeeded(future.result())

    def is_terminal(self) -> bool:
        return self.status != Status.PENDING


class OperationRecord(BaseModel):
    """
    Tracked operation

    Owned by one Synchronizer for its whole lifetime. The outcome moves
    from pending to terminal exactly once, when the handle settles.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: int
    handle: Any
    outcome: Outcome = Field(default_factory=Outcome.pending)

    # Monotonic timestamps in seconds
    registered_at: float = Field(default_factory=time.monotonic)
    settled_at: Optional[float] = None

    def is_pending(self) -> bool:
        return self.outcome.status == Status.PENDING

    def is_terminal(self) -> bool:
        return self.outcome.is_terminal()

    @property
    def status(self) -> Status:
        return self.outcome.status

    @property
    def value(self) -> Any:
        return self.outcome.value

    @property
    def cause(self) -> Optional[BaseException]:
        return self.outcome.cause

    @property
    def duration(self) -> Optional[float]:
        """Seconds between registration and settlement, None while pending"""
        if self.settled_at is None:
            return None
        return self.settled_at - self.registered_at

    def summary(self) -> dict:
        """Plain dict view used for reporting"""
        data = {"id": self.id, "status": self.status.value}
        if self.status == Status.SUCCEEDED:
            data["value"] = self.value
        elif self.status == Status.FAILED:
            data["cause"] = repr(self.cause)
        if self.duration is not None:
            data["duration"] = round(self.duration, 6)
        return data
