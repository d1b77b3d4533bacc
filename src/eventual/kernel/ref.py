"""Reference abstractions - descriptor dispatch and failure values."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Any, Literal

from eventual.kernel.env import get_env
from eventual.kernel.errors import UnsupportedOperation

logger = logging.getLogger(__name__)

Resolver = Callable[[Any], Any]
Handler = Callable[..., Any]
Fallback = Callable[..., Any]


@dataclass(frozen=True)
class RefState:
    """
    Synchronous snapshot of a reference's settlement.

    Kinds:
    - pending: Not settled yet, or settled to another unsettled reference
    - succeeded: Settled to ``value``
    - failed: Settled to a failure carrying ``reason``
    """

    kind: Literal["pending", "succeeded", "failed"]
    value: Any | None = None
    reason: Any | None = None

    @staticmethod
    def Pending() -> RefState:
        return RefState(kind="pending")

    @staticmethod
    def Succeeded(value: Any) -> RefState:
        return RefState(kind="succeeded", value=value)

    @staticmethod
    def Failed(reason: Any) -> RefState:
        return RefState(kind="failed", reason=reason)


Inspector = Callable[[], RefState]


class Reference(ABC):
    """An eventual handle to a value that may not be known yet."""

    @abstractmethod
    def dispatch(self, op: str, resolve: Resolver | None, *args: Any) -> None:
        """Deliver ``op`` now, passing its outcome to ``resolve``.

        Callers outside the kernel go through ``forward`` so delivery always
        happens in a later turn.
        """

    @abstractmethod
    def inspect(self) -> RefState:
        """Report current settlement without deferring."""

    def supports(self, op: str) -> bool:
        """Whether ``op`` has a dedicated handler on this reference."""
        return False

    def then(
        self,
        on_win: Callable[[Any], Any] | None = None,
        on_lose: Callable[[Any], Any] | None = None,
    ) -> Reference:
        """Observe this reference. See ``eventual.combinators.observe``."""
        from eventual.combinators.observe import observe

        return observe(self, on_win, on_lose)

    def __repr__(self) -> str:
        state = self.inspect()
        if state.kind == "succeeded":
            return f"<{type(self).__name__} succeeded {state.value!r}>"
        if state.kind == "failed":
            return f"<{type(self).__name__} failed {state.reason!r}>"
        return f"<{type(self).__name__} pending>"


def forward(ref: Reference, op: str, resolve: Resolver | None, *args: Any) -> None:
    """Schedule delivery of ``op`` to ``ref`` in a future turn."""
    get_env().schedule(partial(ref.dispatch, op, resolve, *args))


@dataclass(frozen=True, eq=False, repr=False)
class DescriptorRef(Reference):
    """Reference backed by a fixed table of operation handlers.

    Attributes:
        descriptor: Operation name to handler.
        fallback: Called as ``fallback(op, *args)`` for unlisted operations.
        inspector: Reports settlement; without one the reference is pending.
    """

    descriptor: Mapping[str, Handler] = field(default_factory=dict)
    fallback: Fallback | None = None
    inspector: Inspector | None = None

    def dispatch(self, op: str, resolve: Resolver | None, *args: Any) -> None:
        handler = self.descriptor.get(op)
        try:
            if handler is not None:
                result = handler(*args)
            elif self.fallback is not None:
                result = self.fallback(op, *args)
            else:
                result = fail(UnsupportedOperation(op))
        except Exception as exc:
            logger.debug("Handler for %r raised %r", op, exc)
            result = fail(exc)
        if resolve is not None:
            resolve(result)

    def inspect(self) -> RefState:
        if self.inspector is None:
            return RefState.Pending()
        return self.inspector()

    def supports(self, op: str) -> bool:
        return op in self.descriptor


def make_ref(
    descriptor: Mapping[str, Handler],
    fallback: Fallback | None = None,
    inspect: Inspector | None = None,
) -> DescriptorRef:
    """Build a custom reference from an operation table.

    Args:
        descriptor: Handlers keyed by operation name, e.g. ``"get"``
        fallback: Handler for any other operation, called with the name first.
            Defaults to failing with UnsupportedOperation.
        inspect: Optional synchronous settlement accessor

    Returns:
        A reference usable anywhere references are accepted
    """
    return DescriptorRef(
        descriptor=MappingProxyType(dict(descriptor)),
        fallback=fallback,
        inspector=inspect,
    )


def fail(reason: Any) -> DescriptorRef:
    """Construct a settled failure carrying ``reason``.

    Only ``when`` is meaningful: it hands the reason to the failure
    continuation when one is given. Every other operation fails the same way.
    """

    def when(on_failure: Resolver | None = None) -> Any:
        if on_failure is not None:
            return on_failure(reason)
        return failure

    def fallback(op: str, *args: Any) -> DescriptorRef:
        return failure

    failure = make_ref(
        {"when": when},
        fallback,
        lambda: RefState.Failed(reason),
    )
    return failure
