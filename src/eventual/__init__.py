from .combinators import (
    delete,
    get,
    invoke,
    join,
    keys,
    method,
    observe,
    post,
    put,
    recover,
    send,
    throw,
)
from .config import EventualConfig, build_env, configure, load_config_from_env
from .kernel import (
    Deferred,
    Env,
    EventualError,
    JoinError,
    Reference,
    RefState,
    Rejection,
    UnsupportedOperation,
    defer,
    fail,
    get_env,
    is_failed,
    is_local_only,
    is_reference,
    is_settled,
    is_succeeded,
    local_only,
    make_ref,
    near,
    schedule,
    set_env,
    to_ref,
    use_env,
)


__all__ = [
    # Core
    "Reference",
    "RefState",
    "Deferred",
    "defer",
    "to_ref",
    "near",
    "fail",
    "make_ref",
    "local_only",
    # Eventual send
    "send",
    "method",
    "get",
    "put",
    "delete",
    "post",
    "invoke",
    "keys",
    "throw",
    # Combinators
    "observe",
    "recover",
    "join",
    # Classifiers
    "is_reference",
    "is_settled",
    "is_succeeded",
    "is_failed",
    "is_local_only",
    # Env & Config
    "Env",
    "get_env",
    "set_env",
    "use_env",
    "schedule",
    "EventualConfig",
    "build_env",
    "configure",
    "load_config_from_env",
    # Errors
    "EventualError",
    "UnsupportedOperation",
    "JoinError",
    "Rejection",
]
