"""Ambient environment for eventual - aggregates the ports."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from eventual.kernel.ports import Adapters, FailureReporter, Scheduler, Task


@dataclass
class Env:
    """Environment aggregation - combines all ports."""

    scheduler: Scheduler
    reporter: FailureReporter
    adapters: Adapters

    def schedule(self, task: Task) -> None:
        """Run ``task`` in a future turn."""
        self.scheduler.schedule(task)


_current: Env | None = None
_lock = threading.Lock()


def get_env() -> Env:
    """Return the installed Env, building the default one on first use."""
    global _current
    if _current is None:
        with _lock:
            if _current is None:
                # Deferred import: the default Env is built from config,
                # which depends on the runtime package.
                from eventual.config import build_env

                _current = build_env()
    return _current


def set_env(env: Env | None) -> Env | None:
    """Install ``env`` process-wide and return the previous one.

    Passing None drops the installed Env so the default is rebuilt lazily.
    """
    global _current
    with _lock:
        previous, _current = _current, env
    return previous


@contextmanager
def use_env(env: Env) -> Iterator[Env]:
    """Install ``env`` for the duration of a ``with`` block."""
    previous = set_env(env)
    try:
        yield env
    finally:
        set_env(previous)


def schedule(task: Task) -> None:
    """Run ``task`` in a future turn on the installed Env's scheduler."""
    get_env().schedule(task)
