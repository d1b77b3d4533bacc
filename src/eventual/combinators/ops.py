"""Eventual send operations.

Each operation is delivered to its target in a future turn and returns a
reference for the outcome immediately.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, NoReturn

from eventual.kernel.deferred import Deferred, to_ref
from eventual.kernel.errors import Rejection
from eventual.kernel.ref import Reference, forward


def send(obj: Any, op: str, *args: Any) -> Reference:
    """Send the operation ``op`` to ``obj`` in a future turn.

    Args:
        obj: Reference or plain value receiving the operation
        op: Operation name, e.g. ``"get"`` or a custom one
        *args: Further arguments for the operation handler

    Returns:
        Reference for the result of the operation
    """
    deferred = Deferred()
    forward(to_ref(obj), op, deferred.resolve, *args)
    return deferred.ref


def method(op: str) -> Callable[..., Reference]:
    """Build a sender for the operation ``op``, e.g. ``method("propfind")``."""

    def operation(obj: Any, *args: Any) -> Reference:
        return send(obj, op, *args)

    operation.__name__ = op
    operation.__qualname__ = op
    operation.__doc__ = f"Send {op!r} to a reference in a future turn."
    return operation


def get(obj: Any, name: Any) -> Reference:
    """Get the property ``name`` in a future turn."""
    return send(obj, "get", name)


def put(obj: Any, name: Any, value: Any) -> Reference:
    """Set the property ``name`` to ``value`` in a future turn."""
    return send(obj, "put", name, value)


def delete(obj: Any, name: Any) -> Reference:
    """Delete the property ``name`` in a future turn."""
    return send(obj, "del", name)


def post(
    obj: Any,
    name: Any,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> Reference:
    """Invoke the method ``name`` with an argument list in a future turn.

    Near references apply the arguments directly. Custom references may
    accept any payload here, e.g. a serializable request body. Keyword
    arguments are sent as a third argument only when there are some, so
    two-argument ``post(name, value)`` handlers keep working.
    """
    if kwargs:
        return send(obj, "post", name, args, kwargs)
    return send(obj, "post", name, args)


def invoke(obj: Any, name: Any, *args: Any, **kwargs: Any) -> Reference:
    """Invoke the method ``name`` with the given arguments in a future turn."""
    return post(obj, name, args, kwargs)


def keys(obj: Any) -> Reference:
    """List the own keys of the eventual value in a future turn."""
    return send(obj, "keys")


def throw(reason: Any) -> NoReturn:
    """Raise ``reason`` outside the reference system.

    Exceptions are raised as they are; other reasons are wrapped in Rejection.
    """
    if isinstance(reason, BaseException):
        raise reason
    raise Rejection(reason)
