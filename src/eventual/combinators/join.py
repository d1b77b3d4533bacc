"""Join combinator."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from eventual.combinators.observe import observe
from eventual.kernel.deferred import Deferred
from eventual.kernel.errors import JoinError
from eventual.kernel.ref import Reference, fail

logger = logging.getLogger(__name__)


def _as_list(*values: Any) -> list[Any]:
    return list(values)


def join(*refs: Any, combine: Callable[..., Any] | None = None) -> Reference:
    """Wait for every reference, then combine their values.

    All references are allowed to settle; a failure does not short-circuit.
    ``combine`` is keyword-only: a trailing positional callable is joined as
    a value like any other, so write ``join(a, b, combine=f)``.

    Args:
        *refs: References or plain values to wait for
        combine: Called with the values in order. Defaults to building a list.

    Returns:
        Reference to ``combine(*values)``, or a failure carrying a JoinError
        whose ``reasons`` maps every failing index to its reason
    """
    combine = combine or _as_list
    values: list[Any] = [None] * len(refs)
    reasons: dict[int, Any] = {}
    remaining = len(refs)
    lock = threading.Lock()
    completion = Deferred()
    # Rejected by the first failure; later rejections are no-ops.
    tripped = Deferred()

    def settled_one() -> None:
        nonlocal remaining
        with lock:
            remaining -= 1
            last = remaining == 0
        if last:
            completion.resolve(None)

    def watch(index: int, ref: Any) -> None:
        def on_win(value: Any) -> None:
            values[index] = value
            settled_one()

        def on_lose(reason: Any) -> None:
            with lock:
                reasons[index] = reason
            if not tripped.settled:
                logger.debug("Join failed first at index %d: %r", index, reason)
            tripped.reject(reason)
            settled_one()

        observe(ref, on_win, on_lose)

    for index, ref in enumerate(refs):
        watch(index, ref)
    if not refs:
        completion.resolve(None)

    def finish(_: Any) -> Any:
        if tripped.settled:
            return fail(JoinError(reasons))
        return combine(*values)

    return observe(completion.ref, finish)
