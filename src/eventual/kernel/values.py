"""Immediate-value references.

A near reference wraps a plain local object and answers the built-in
operations directly against it. Mappings are addressed by key, sequences by
integer index, anything else by attribute.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

from eventual.kernel.errors import InvalidTargetError
from eventual.kernel.ref import DescriptorRef, RefState, Resolver, fail, make_ref

_MISSING = object()


def _by_item(obj: Any, name: Any) -> bool:
    if isinstance(obj, Mapping):
        return True
    return (
        isinstance(obj, Sequence)
        and not isinstance(obj, (str, bytes))
        and isinstance(name, int)
    )


def _invalid(op: str, message: str, **details: Any) -> DescriptorRef:
    return fail(InvalidTargetError(message, {"op": op, **details}))


def near(obj: Any) -> DescriptorRef:
    """Construct a settled reference to the local object ``obj``.

    No coercion happens here; use ``to_ref`` to accept references and
    foreign async values as well.
    """

    def when(on_failure: Resolver | None = None) -> Any:
        return obj

    def get(name: Any) -> Any:
        if obj is None:
            return _invalid("get", f"Cannot access property {name!r} of None", name=name)
        try:
            if _by_item(obj, name):
                return obj[name]
            return getattr(obj, name)
        except (KeyError, IndexError, AttributeError, TypeError) as exc:
            return _invalid(
                "get", f"No property {name!r} on {obj!r}", name=name, error=exc
            )

    def put(name: Any, value: Any) -> Any:
        if obj is None:
            return _invalid(
                "put", f"Cannot set property {name!r} of None to {value!r}", name=name
            )
        try:
            if isinstance(obj, (MutableMapping, MutableSequence)) and _by_item(obj, name):
                obj[name] = value
            else:
                setattr(obj, name, value)
        except (IndexError, AttributeError, TypeError) as exc:
            return _invalid(
                "put",
                f"Cannot set property {name!r} of {obj!r} to {value!r}",
                name=name,
                error=exc,
            )
        return None

    def delete(name: Any) -> Any:
        if obj is None:
            return _invalid("del", f"Cannot delete property {name!r} of None", name=name)
        try:
            if isinstance(obj, (MutableMapping, MutableSequence)) and _by_item(obj, name):
                del obj[name]
            else:
                delattr(obj, name)
        except (KeyError, IndexError, AttributeError, TypeError) as exc:
            return _invalid(
                "del",
                f"Cannot delete property {name!r} of {obj!r}",
                name=name,
                error=exc,
            )
        return None

    def post(
        name: Any,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        if obj is None:
            return _invalid("post", "None has no methods", name=name)
        method = _MISSING
        if isinstance(obj, Mapping):
            method = obj.get(name, _MISSING)
        if method is _MISSING and isinstance(name, str):
            method = getattr(obj, name, _MISSING)
        if method is _MISSING:
            return _invalid("post", f"No such method {name!r} on object {obj!r}", name=name)
        if not callable(method):
            return _invalid(
                "post",
                f"Property {name!r} on object {obj!r} is not a method",
                name=name,
            )
        return method(*args, **(kwargs or {}))

    def keys() -> Any:
        if obj is None:
            return _invalid("keys", "Cannot list keys of None")
        if isinstance(obj, Mapping):
            return list(obj.keys())
        if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
            return list(range(len(obj)))
        try:
            return list(vars(obj))
        except TypeError:
            return []

    return make_ref(
        {
            "when": when,
            "get": get,
            "put": put,
            "del": delete,
            "post": post,
            "keys": keys,
        },
        inspect=lambda: RefState.Succeeded(obj),
    )
