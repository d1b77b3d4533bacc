from __future__ import annotations

import logging
import threading

import pytest

from eventual import Env, observe, use_env
from eventual.runtime import QueueScheduler, ThreadScheduler, default_adapters

from fakes import CollectingReporter


class TestQueueScheduler:
    def test_tasks_scheduled_during_a_turn_wait(self):
        scheduler = QueueScheduler()
        order = []
        scheduler.schedule(lambda: scheduler.schedule(lambda: order.append("second")))
        scheduler.schedule(lambda: order.append("first"))

        assert scheduler.run_turn() == 2
        assert order == ["first"]
        assert scheduler.pending == 1
        assert scheduler.run() == 1
        assert order == ["first", "second"]

    def test_failing_task_does_not_stop_the_turn(self, caplog):
        scheduler = QueueScheduler()
        ran = []

        def explode():
            raise RuntimeError("task")

        scheduler.schedule(explode)
        scheduler.schedule(lambda: ran.append(True))
        with caplog.at_level(logging.ERROR, logger="eventual.runtime.scheduling"):
            scheduler.run()
        assert ran == [True]
        assert "raised" in caplog.text

    def test_run_limits_turns(self):
        scheduler = QueueScheduler()

        def again():
            scheduler.schedule(again)

        scheduler.schedule(again)
        with pytest.raises(RuntimeError):
            scheduler.run(max_turns=3)

    def test_run_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            QueueScheduler().run(max_turns=0)


class TestThreadScheduler:
    def test_runs_on_worker_thread(self):
        scheduler = ThreadScheduler("test-worker")
        env = Env(scheduler, CollectingReporter(), default_adapters())
        names = []
        try:
            with use_env(env):
                result = observe(1, lambda v: names.append(threading.current_thread().name) or v + 1)
                scheduler.wait_idle()
            assert names == ["test-worker"]
            assert result.inspect().value == 2
        finally:
            scheduler.close(timeout=1)

    def test_closed_scheduler_refuses_tasks(self):
        scheduler = ThreadScheduler()
        scheduler.schedule(lambda: None)
        scheduler.close(timeout=1)
        with pytest.raises(RuntimeError):
            scheduler.schedule(lambda: None)
