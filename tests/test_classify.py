from __future__ import annotations

import pytest

from eventual import Deferred, fail, is_failed, is_reference, is_settled, is_succeeded, make_ref, near
from eventual.kernel import RefState, state_of


@pytest.mark.parametrize("value", [None, 0, "text", {"a": 1}])
def test_plain_values_are_settled_successes(value):
    assert not is_reference(value)
    assert is_settled(value)
    assert is_succeeded(value)
    assert not is_failed(value)


def test_near_reference():
    ref = near(3)
    assert is_reference(ref)
    assert is_succeeded(ref)
    assert state_of(ref) == RefState.Succeeded(3)


def test_failure_reference():
    ref = fail("x")
    assert is_settled(ref)
    assert is_failed(ref)
    assert not is_succeeded(ref)


def test_pending_and_forwarded_deferreds():
    outer, inner = Deferred(), Deferred()
    assert not is_settled(outer.ref)

    outer.resolve(inner.ref)
    assert not is_settled(outer.ref)

    inner.resolve("v")
    assert is_settled(outer.ref)
    assert is_succeeded(outer.ref)


def test_rejected_deferred_is_failed():
    deferred = Deferred()
    deferred.reject("no")
    assert is_failed(deferred.ref)


def test_custom_reference_without_inspector_is_pending():
    ref = make_ref({"when": lambda on_failure=None: 1})
    assert is_reference(ref)
    assert not is_settled(ref)
    assert repr(ref) == "<DescriptorRef pending>"


def test_classifiers_never_schedule(env):
    deferred = Deferred()
    is_settled(deferred.ref)
    is_failed(deferred.ref)
    assert env.scheduler.pending == 0
