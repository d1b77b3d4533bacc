"""Scheduler implementations."""

from __future__ import annotations

import asyncio
import logging
import queue
import threading
from collections import deque

from eventual.kernel.ports import Task

logger = logging.getLogger(__name__)


def _run_task(task: Task) -> None:
    try:
        task()
    except Exception:
        # Keep the loop alive; a failing task must not stall other references.
        logger.exception("Scheduled task %r raised", task)


class QueueScheduler:
    """Deterministic scheduler stepped by hand.

    A turn runs the tasks that were queued when it started. Tasks scheduled
    during a turn wait for the next one, which makes turn boundaries
    observable in tests.
    """

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()

    def schedule(self, task: Task) -> None:
        self._tasks.append(task)

    @property
    def pending(self) -> int:
        """Number of tasks waiting for a turn."""
        return len(self._tasks)

    def run_turn(self) -> int:
        """Run one turn and return how many tasks ran."""
        count = len(self._tasks)
        for _ in range(count):
            _run_task(self._tasks.popleft())
        return count

    def run(self, max_turns: int = 10_000) -> int:
        """Run turns until idle.

        Args:
            max_turns: Upper bound on turns (must be > 0)

        Returns:
            Total number of tasks run

        Raises:
            RuntimeError: If tasks are still queued after max_turns
        """
        if max_turns <= 0:
            raise ValueError("max_turns must be positive")
        total = 0
        for _ in range(max_turns):
            if not self._tasks:
                return total
            total += self.run_turn()
        if self._tasks:
            raise RuntimeError(f"Scheduler still busy after {max_turns} turns")
        return total


class ThreadScheduler:
    """Runs tasks in FIFO order on one daemon worker thread.

    The worker starts on the first ``schedule`` call and needs no teardown;
    ``close`` stops it explicitly.
    """

    def __init__(self, name: str = "eventual-scheduler") -> None:
        self.name = name
        self._queue: queue.Queue[Task | None] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._closed = False

    def schedule(self, task: Task) -> None:
        if self._closed:
            raise RuntimeError(f"Scheduler {self.name!r} is closed")
        self._ensure_started()
        self._queue.put(task)

    def wait_idle(self) -> None:
        """Block until every scheduled task, including follow-ups, has run."""
        self._queue.join()

    def close(self, timeout: float | None = None) -> None:
        """Stop the worker after the tasks already queued."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
        if thread is not None:
            self._queue.put(None)
            thread.join(timeout)

    def _ensure_started(self) -> None:
        if self._thread is not None:
            return
        with self._lock:
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._work, name=self.name, daemon=True
                )
                self._thread.start()
                logger.debug("Started scheduler thread %s", self.name)

    def _work(self) -> None:
        while True:
            task = self._queue.get()
            try:
                if task is None:
                    return
                _run_task(task)
            finally:
                self._queue.task_done()


class AsyncioScheduler:
    """Runs tasks as callbacks on an asyncio event loop.

    Without an explicit loop, the loop running at construction is bound, or
    failing that the loop running at the first ``schedule`` call. Once bound,
    tasks may be scheduled from any thread.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def schedule(self, task: Task) -> None:
        if self._loop is None:
            # Raises outside a running loop; nothing is queued in that case.
            self._loop = asyncio.get_running_loop()
        self._loop.call_soon_threadsafe(_run_task, task)
