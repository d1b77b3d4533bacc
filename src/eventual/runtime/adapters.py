"""Adapter registry for assimilating foreign asynchronous values."""

from __future__ import annotations

import asyncio
import concurrent.futures
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from eventual.kernel.ports import Adapter

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class AdapterEntry:
    name: str
    predicate: Predicate
    adapter: Adapter


class AdapterRegistry:
    """Ordered registry of foreign async shapes. The first match wins."""

    def __init__(self) -> None:
        self._entries: list[AdapterEntry] = []

    def register(self, name: str, predicate: Predicate, adapter: Adapter) -> None:
        """Register an adapter, replacing any previous one with the same name."""
        self._entries = [e for e in self._entries if e.name != name]
        self._entries.append(AdapterEntry(name, predicate, adapter))

    def unregister(self, name: str) -> None:
        self._entries = [e for e in self._entries if e.name != name]

    @property
    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def match(self, obj: Any) -> Adapter | None:
        for entry in self._entries:
            if entry.predicate(obj):
                return entry.adapter
        return None


def _is_future(obj: Any) -> bool:
    return asyncio.isfuture(obj) or isinstance(obj, concurrent.futures.Future)


def adopt_future(future: Any, resolve: Callable[[Any], Any], reject: Callable[[Any], Any]) -> None:
    """Settle through ``future.add_done_callback``.

    Works for asyncio and concurrent.futures futures alike.
    """

    def done(f: Any) -> None:
        if f.cancelled():
            reject(asyncio.CancelledError())
            return
        error = f.exception()
        if error is not None:
            reject(error)
        else:
            resolve(f.result())

    future.add_done_callback(done)


def _is_thenable(obj: Any) -> bool:
    return callable(getattr(obj, "then", None))


def adopt_thenable(obj: Any, resolve: Callable[[Any], Any], reject: Callable[[Any], Any]) -> None:
    """Settle through a two-callback ``then(on_success, on_failure)``."""
    obj.then(resolve, reject)


def default_adapters() -> AdapterRegistry:
    """Create a registry with the future and thenable adapters."""
    registry = AdapterRegistry()
    registry.register("future", _is_future, adopt_future)
    registry.register("thenable", _is_thenable, adopt_thenable)
    return registry
