"""Combinators - observation, eventual send and join."""

from eventual.combinators.join import join
from eventual.combinators.observe import observe, recover
from eventual.combinators.ops import (
    delete,
    get,
    invoke,
    keys,
    method,
    post,
    put,
    send,
    throw,
)

__all__ = [
    "observe",
    "recover",
    "join",
    "send",
    "method",
    "get",
    "put",
    "delete",
    "post",
    "invoke",
    "keys",
    "throw",
]
