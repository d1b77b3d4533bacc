"""A custom reference standing in for a remote object.

Operations are answered from a local table here; a real proxy would
serialize them onto a channel. The session object is marked local-only so
such a layer would refuse to send it.
"""

from __future__ import annotations

import asyncio
from typing import Any

from eventual import (
    Env,
    fail,
    get,
    is_local_only,
    local_only,
    make_ref,
    method,
    observe,
    use_env,
)
from eventual.kernel import InvalidTargetError
from eventual.runtime import AsyncioScheduler, LoggingReporter, default_adapters

propfind = method("propfind")


def make_remote(files: dict[str, dict[str, Any]]):
    def remote_get(path: str) -> Any:
        if path not in files:
            return fail(InvalidTargetError(f"404 {path}"))
        return files[path]

    def remote_propfind(path: str) -> list[str]:
        return sorted(files.get(path, {}))

    return make_ref({"get": remote_get, "propfind": remote_propfind})


async def main() -> None:
    loop = asyncio.get_running_loop()
    env = Env(AsyncioScheduler(loop), LoggingReporter(), default_adapters())
    with use_env(env):
        remote = make_remote({"/readme": {"size": 12, "owner": "root"}})
        session = local_only({"token": "secret"})
        print("session local only:", is_local_only(session))

        props = loop.create_future()
        observe(propfind(remote, "/readme"), props.set_result, props.set_exception)
        print("props:", await props)

        missing = loop.create_future()
        observe(get(remote, "/nope"), missing.set_result, missing.set_result)
        print("missing:", await missing)


if __name__ == "__main__":
    asyncio.run(main())
