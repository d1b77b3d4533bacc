from __future__ import annotations

import threading

import pytest

from eventual import Deferred, Env, defer, fail, make_ref, observe, send, use_env
from eventual.kernel import CycleError
from eventual.runtime import ThreadScheduler, default_adapters

from fakes import CollectingReporter, make_flaky_env, settle


def test_observer_runs_in_a_later_turn(env):
    seen = []
    deferred = defer()
    deferred.resolve(5)

    observe(deferred.ref, seen.append)
    assert seen == []

    # The settled deferred forwards `when` to its value in one more turn.
    env.scheduler.run_turn()
    assert seen == []
    env.scheduler.run()
    assert seen == [5]


def test_plain_value_observed_after_one_turn(env):
    seen = []
    observe("ready", seen.append)
    assert seen == []
    assert env.scheduler.run_turn() == 1
    assert seen == ["ready"]


def test_first_resolution_wins(env):
    deferred = Deferred()
    deferred.resolve("first")
    deferred.resolve("second")
    deferred.reject("too late")

    state = settle(env, observe(deferred.ref))
    assert state.kind == "succeeded"
    assert state.value == "first"


def test_reject_settles_to_failure(env):
    deferred = Deferred()
    deferred.reject("boom")

    state = settle(env, observe(deferred.ref))
    assert state.kind == "failed"
    assert state.reason == "boom"


def test_chaining_through_three_levels(env):
    outer, middle, inner = Deferred(), Deferred(), Deferred()
    outer.resolve(middle.ref)
    middle.resolve(inner.ref)

    result = observe(outer.ref)
    env.scheduler.run()
    assert result.inspect().kind == "pending"
    assert outer.settled
    assert outer.ref.inspect().kind == "pending"

    inner.resolve(42)
    env.scheduler.run()
    assert result.inspect().value == 42
    assert outer.ref.inspect().value == 42


def test_chained_failure_is_adopted(env):
    outer, inner = Deferred(), Deferred()
    outer.resolve(inner.ref)
    inner.reject("lost")

    state = settle(env, observe(outer.ref))
    assert state.kind == "failed"
    assert state.reason == "lost"


def test_queued_operations_replay_in_order(env):
    received = []

    def record(op, *args):
        received.append(op)
        return op

    recorder = make_ref({}, record)
    deferred = Deferred()
    results = [send(deferred.ref, op) for op in ("op1", "op2", "op3")]
    env.scheduler.run()
    assert received == []

    deferred.resolve(recorder)
    env.scheduler.run()
    assert received == ["op1", "op2", "op3"]
    assert [r.inspect().value for r in results] == ["op1", "op2", "op3"]


def test_operations_after_settlement_are_not_queued(env):
    deferred = Deferred()
    deferred.resolve({"a": 1})
    assert deferred.settled

    state = settle(env, send(deferred.ref, "get", "a"))
    assert state.value == 1


def test_resolving_with_own_reference_fails(env):
    deferred = Deferred()
    deferred.resolve(deferred.ref)

    state = settle(env, observe(deferred.ref))
    assert state.kind == "failed"
    assert isinstance(state.reason, CycleError)


def test_resolving_into_a_cycle_fails(env):
    first, second = Deferred(), Deferred()
    first.resolve(second.ref)
    second.resolve(first.ref)

    assert isinstance(second.ref.inspect().reason, CycleError)
    assert settle(env, observe(first.ref)).kind == "failed"


def test_resolving_with_failure_reference(env):
    deferred = Deferred()
    deferred.resolve(fail(ValueError("bad")))

    assert deferred.ref.inspect().kind == "failed"
    state = settle(env, observe(deferred.ref))
    assert isinstance(state.reason, ValueError)


def test_replay_keeps_operations_the_scheduler_refused():
    env = make_flaky_env()
    received = []
    recorder = make_ref({}, lambda op, *args: received.append(op) or op)
    with use_env(env):
        deferred = Deferred()
        results = [send(deferred.ref, op) for op in ("op1", "op2", "op3")]
        env.scheduler.run()

        env.scheduler.failures = 1
        with pytest.raises(RuntimeError):
            deferred.resolve(recorder)
        assert deferred.settled

        late = send(deferred.ref, "op4")
        env.scheduler.run()

    assert received == ["op1", "op2", "op3", "op4"]
    assert [r.inspect().value for r in results + [late]] == ["op1", "op2", "op3", "op4"]


def test_racing_resolvers_on_thread_scheduler():
    scheduler = ThreadScheduler("race-worker")
    env = Env(scheduler, CollectingReporter(), default_adapters())
    recorders = []
    for index in range(5):
        seen: list[str] = []
        recorders.append((seen, make_ref({}, lambda op, *args, seen=seen: seen.append(op))))

    deferred = Deferred()
    ops = [f"op{i}" for i in range(50)]
    barrier = threading.Barrier(len(recorders) + 1)

    def resolver(recorder):
        barrier.wait()
        deferred.resolve(recorder)

    def sender():
        barrier.wait()
        for op in ops:
            deferred.ref.dispatch(op, None)

    try:
        with use_env(env):
            threads = [threading.Thread(target=resolver, args=(r,)) for _, r in recorders[1:]]
            threads.append(threading.Thread(target=sender))
            threads.append(threading.Thread(target=resolver, args=(recorders[0][1],)))
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=5)
            scheduler.wait_idle()
    finally:
        scheduler.close(timeout=1)

    delivered = [seen for seen, _ in recorders if seen]
    assert len(delivered) == 1
    assert delivered[0] == ops
