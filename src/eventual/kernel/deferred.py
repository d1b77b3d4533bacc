"""Deferred - the one-shot resolution authority paired with a pending reference."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any

from eventual.kernel.env import get_env
from eventual.kernel.errors import CycleError, UnsupportedOperation
from eventual.kernel.ref import (
    DescriptorRef,
    Reference,
    RefState,
    Resolver,
    fail,
    forward,
    make_ref,
)
from eventual.kernel.values import near

logger = logging.getLogger(__name__)


class PendingRef(Reference):
    """Reference side of a Deferred.

    Operations sent before settlement are queued and replayed in order
    against the resolution; later operations are forwarded directly.
    """

    def __init__(self, deferred: Deferred) -> None:
        self._deferred = deferred

    def dispatch(self, op: str, resolve: Resolver | None, *args: Any) -> None:
        self._deferred._dispatch(op, resolve, args)

    def inspect(self) -> RefState:
        target = self._deferred._target
        if target is None:
            return RefState.Pending()
        return target.inspect()


class Deferred:
    """A pending reference plus its resolve/reject authority.

    Only the first of any number of ``resolve``/``reject`` calls has effect.

    Attributes:
        ref: The reference handed out to consumers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: list[tuple[str, Resolver | None, tuple[Any, ...]]] | None = []
        self._target: Reference | None = None
        # Operations owed to the target that have not been scheduled yet.
        self._unsent: deque[tuple[str, Resolver | None, tuple[Any, ...]]] = deque()
        self.ref = PendingRef(self)

    @property
    def settled(self) -> bool:
        """Whether resolution authority has been used."""
        return self._queue is None

    def resolve(self, value: Any) -> None:
        """Settle to ``value``, or follow it if it is a reference.

        Non-reference values become near references; references and
        assimilated foreign async values are adopted and settle this
        deferred when they settle.

        If the scheduler raises while queued operations are replayed, the
        error propagates and the operations not yet scheduled are kept; they
        are retried, in order, ahead of the next operation sent.
        """
        if self._queue is None:
            return
        target = to_ref(value)
        if self._follows_self(target):
            target = fail(CycleError("Cannot resolve a reference with itself"))
        with self._lock:
            if self._queue is None:
                return
            self._unsent.extend(self._queue)
            self._queue = None
            self._target = target
            # Replayed under the lock so later sends cannot overtake the queue.
            self._flush()

    def reject(self, reason: Any) -> None:
        """Settle to a failure carrying ``reason``."""
        self.resolve(fail(reason))

    def _follows_self(self, target: Reference) -> bool:
        while isinstance(target, PendingRef):
            if target is self.ref:
                return True
            target = target._deferred._target
        return False

    def _dispatch(self, op: str, resolve: Resolver | None, args: tuple[Any, ...]) -> None:
        with self._lock:
            if self._queue is not None:
                self._queue.append((op, resolve, args))
                return
            self._unsent.append((op, resolve, args))
            self._flush()

    def _flush(self) -> None:
        # Caller holds the lock. An entry is dropped only once scheduled.
        while self._unsent:
            op, resolve, args = self._unsent[0]
            forward(self._target, op, resolve, *args)
            self._unsent.popleft()

    def __repr__(self) -> str:
        return f"Deferred({self.ref!r})"


def defer() -> Deferred:
    """Create a fresh Deferred."""
    return Deferred()


def to_ref(value: Any) -> Reference:
    """Coerce ``value`` into a reference.

    References pass through unchanged. Foreign async values recognized by the
    installed adapters are assimilated. Anything else becomes a near reference.
    """
    if isinstance(value, Reference):
        return value
    adapter = get_env().adapters.match(value)
    if adapter is None:
        return near(value)
    deferred = Deferred()
    try:
        adapter(value, deferred.resolve, deferred.reject)
    except Exception as exc:
        logger.debug("Assimilating %s raised %r", type(value).__name__, exc)
        deferred.reject(exc)
    return _assimilated(deferred, type(value).__name__)


def _assimilated(deferred: Deferred, kind: str) -> DescriptorRef:
    def when(on_failure: Resolver | None = None) -> Reference:
        return deferred.ref

    def fallback(op: str, *args: Any) -> DescriptorRef:
        logger.debug("Assimilated %s does not support %r", kind, op)
        return fail(UnsupportedOperation(op, f"assimilated {kind}"))

    return make_ref({"when": when}, fallback, deferred.ref.inspect)
