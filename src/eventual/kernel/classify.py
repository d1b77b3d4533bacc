"""Classifiers - synchronous predicates over current settlement.

None and other non-reference values count as settled and succeeded.
"""

from __future__ import annotations

from typing import Any

from eventual.kernel.ref import Reference, RefState


def state_of(obj: Any) -> RefState:
    """Snapshot ``obj`` without deferring."""
    if isinstance(obj, Reference):
        return obj.inspect()
    return RefState.Succeeded(obj)


def is_reference(obj: Any) -> bool:
    """Whether ``obj`` can be dispatched to."""
    return isinstance(obj, Reference)


def is_settled(obj: Any) -> bool:
    """Whether ``obj`` has settled to a terminal value or failure."""
    return state_of(obj).kind != "pending"


def is_succeeded(obj: Any) -> bool:
    return state_of(obj).kind == "succeeded"


def is_failed(obj: Any) -> bool:
    return state_of(obj).kind == "failed"
