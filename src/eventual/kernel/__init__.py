"""Kernel layer - pure abstractions for eventual references."""

from eventual.kernel.classify import (
    is_failed,
    is_reference,
    is_settled,
    is_succeeded,
    state_of,
)
from eventual.kernel.deferred import Deferred, PendingRef, defer, to_ref
from eventual.kernel.env import Env, get_env, schedule, set_env, use_env
from eventual.kernel.errors import (
    CycleError,
    EventualError,
    InvalidTargetError,
    JoinError,
    Rejection,
    UnsupportedOperation,
)
from eventual.kernel.marker import IS_DEF, is_local_only, local_only
from eventual.kernel.ports import Adapter, Adapters, FailureReporter, Scheduler
from eventual.kernel.ref import (
    DescriptorRef,
    Reference,
    RefState,
    fail,
    forward,
    make_ref,
)
from eventual.kernel.values import near

__all__ = [
    "Reference",
    "RefState",
    "DescriptorRef",
    "PendingRef",
    "Deferred",
    "defer",
    "make_ref",
    "near",
    "fail",
    "to_ref",
    "forward",
    "local_only",
    "is_local_only",
    "IS_DEF",
    # Classifiers
    "state_of",
    "is_reference",
    "is_settled",
    "is_succeeded",
    "is_failed",
    # Env & Ports
    "Env",
    "get_env",
    "set_env",
    "use_env",
    "schedule",
    "Scheduler",
    "FailureReporter",
    "Adapters",
    "Adapter",
    # Errors
    "EventualError",
    "UnsupportedOperation",
    "InvalidTargetError",
    "CycleError",
    "JoinError",
    "Rejection",
]
