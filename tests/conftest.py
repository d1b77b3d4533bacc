import pytest

from eventual.kernel import use_env

from fakes import make_queue_env


@pytest.fixture(autouse=True)
def env():
    """Install a manually stepped Env so turn boundaries are assertable."""
    with use_env(make_queue_env()) as installed:
        yield installed
