"""Port protocols for eventual - pure abstractions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

Task = Callable[[], Any]


class Scheduler(Protocol):
    """Future-turn execution port.

    ``schedule`` must return before ``task`` runs. No ordering against other
    host work is promised beyond FIFO among tasks given to the same scheduler.
    """

    def schedule(self, task: Task) -> None: ...


class FailureReporter(Protocol):
    """Sink for exceptions raised by observer callbacks."""

    def report(self, error: BaseException) -> None: ...


Adapter = Callable[[Any, Callable[[Any], Any], Callable[[Any], Any]], Any]


class Adapters(Protocol):
    """Recognizes foreign asynchronous values."""

    def match(self, obj: Any) -> Adapter | None:
        """Return the adapter that subscribes resolve/reject to ``obj``, if any."""
        ...
