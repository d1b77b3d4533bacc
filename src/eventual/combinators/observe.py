"""Observer combinator."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from eventual.kernel.deferred import Deferred, to_ref
from eventual.kernel.env import get_env
from eventual.kernel.ref import Reference, fail, forward

Callback = Callable[[Any], Any]


def observe(
    value: Any,
    on_win: Callback | None = None,
    on_lose: Callback | None = None,
) -> Reference:
    """Register callbacks for the settlement of ``value``.

    Guarantees:
    - exactly one of on_win / on_lose is called, and only once, however the
      underlying reference behaves
    - neither is called in the current turn
    - an exception raised by a callback is reported to the Env's failure
      reporter and becomes the failure of the returned reference

    Args:
        value: Reference or plain value to observe
        on_win: Called with the settled value. Defaults to passing it through.
        on_lose: Called with the failure reason. Defaults to propagating it.

    Returns:
        Reference to the return value of whichever callback ran
    """
    deferred = Deferred()
    once = threading.Lock()

    def winning(result: Any) -> Any:
        try:
            return on_win(result) if on_win is not None else result
        except Exception as exc:
            get_env().reporter.report(exc)
            return fail(exc)

    def losing(reason: Any) -> Any:
        try:
            return on_lose(reason) if on_lose is not None else fail(reason)
        except Exception as exc:
            get_env().reporter.report(exc)
            return fail(exc)

    def on_value(result: Any) -> None:
        if not once.acquire(blocking=False):
            return
        if isinstance(result, Reference):
            # `when` answered with another reference; wait for that one.
            deferred.resolve(observe(result, on_win, on_lose))
        else:
            deferred.resolve(winning(result))

    def on_reason(reason: Any) -> None:
        if not once.acquire(blocking=False):
            return
        deferred.resolve(losing(reason))

    forward(to_ref(value), "when", on_value, on_reason)
    return deferred.ref


def recover(
    value: Any,
    on_lose: Callback | None = None,
    on_win: Callback | None = None,
) -> Reference:
    """``observe`` with the failure callback first."""
    return observe(value, on_win, on_lose)
