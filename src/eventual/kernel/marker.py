"""Local-only marker.

A remote-serialization layer asks references for ``isDef``; a reference
that answers it must never be sent across a channel. The wrapper answers the
query itself and forwards every other operation to the wrapped object.
"""

from __future__ import annotations

from typing import Any

from eventual.kernel.deferred import Deferred, to_ref
from eventual.kernel.ref import DescriptorRef, Reference, forward, make_ref

IS_DEF = "isDef"


def local_only(obj: Any) -> DescriptorRef:
    """Wrap ``obj`` so that it is never transferred away from this process."""
    target = to_ref(obj)

    def is_def() -> None:
        return None

    def fallback(op: str, *args: Any) -> Reference:
        deferred = Deferred()
        forward(target, op, deferred.resolve, *args)
        return deferred.ref

    return make_ref({IS_DEF: is_def}, fallback, target.inspect)


def is_local_only(obj: Any) -> bool:
    return isinstance(obj, Reference) and obj.supports(IS_DEF)
