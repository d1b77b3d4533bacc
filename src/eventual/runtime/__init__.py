"""Runtime layer - default implementations of the kernel ports."""

from eventual.runtime.adapters import AdapterRegistry, default_adapters
from eventual.runtime.reporting import LoggingReporter
from eventual.runtime.scheduling import AsyncioScheduler, QueueScheduler, ThreadScheduler

__all__ = [
    "AdapterRegistry",
    "default_adapters",
    "LoggingReporter",
    "QueueScheduler",
    "ThreadScheduler",
    "AsyncioScheduler",
]
