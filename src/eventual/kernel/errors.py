"""Error types for eventual references.

Inside the reference system a failure is a value carrying an opaque reason.
These exceptions are the reasons the built-in operations produce, and the
faults raised when a caller leaves the reference system via ``throw``.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any


class EventualError(Exception):
    """Base error for the eventual package."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedOperation(EventualError):
    """A reference was sent an operation it has no handler for."""

    def __init__(self, op: str, target: str = "reference") -> None:
        super().__init__(
            f"{target} does not support operation: {op}",
            {"op": op, "target": target},
        )
        self.op = op


class InvalidTargetError(EventualError):
    """An operation was applied to None, a missing member, or a non-method."""


class CycleError(EventualError):
    """A deferred was resolved with its own reference."""


class Rejection(EventualError):
    """Raised by ``throw`` for a failure reason that is not an exception."""

    def __init__(self, reason: Any) -> None:
        super().__init__(str(reason), {"reason": reason})
        self.reason = reason

    def __repr__(self) -> str:
        return f"Rejection({self.reason!r})"


class JoinError(EventualError):
    """Composite failure of ``join``.

    Attributes:
        reasons: Failure reason per failing index. Succeeded indices are absent.
        trace: Traceback of the first reason, in index order, that carries one.
    """

    def __init__(self, reasons: dict[int, Any]) -> None:
        self.reasons = dict(sorted(reasons.items()))
        self.trace = _first_trace(self.reasons)
        text = "; ".join(str(reason) for reason in self.reasons.values())
        super().__init__(f"Can't join. {text}", {"reasons": self.reasons})


def _first_trace(reasons: dict[int, Any]) -> TracebackType | None:
    for reason in reasons.values():
        if isinstance(reason, JoinError) and reason.trace is not None:
            return reason.trace
        if isinstance(reason, BaseException) and reason.__traceback__ is not None:
            return reason.__traceback__
    return None
