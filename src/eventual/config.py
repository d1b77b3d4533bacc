"""Configuration for eventual.

Builds the ambient Env (scheduler, failure reporter, adapters) from an
``EventualConfig`` and installs it process-wide.
"""

from __future__ import annotations

import logging
import os
from typing import Literal

from pydantic import BaseModel, Field

from eventual.kernel.env import Env, set_env
from eventual.runtime import (
    AsyncioScheduler,
    LoggingReporter,
    QueueScheduler,
    ThreadScheduler,
    default_adapters,
)

SchedulerKind = Literal["thread", "asyncio", "queue"]


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class EventualConfig(BaseModel):
    """Runtime settings."""

    scheduler: SchedulerKind = "thread"
    thread_name: str = "eventual-scheduler"
    reporter_logger: str = "eventual"
    log_level: str = "WARNING"
    log_format: str = Field(default=DEFAULT_LOG_FORMAT)


def load_config_from_env() -> EventualConfig:
    """Load configuration from ``EVENTUAL_*`` environment variables."""
    values: dict[str, str] = {}
    for key, var in (
        ("scheduler", "EVENTUAL_SCHEDULER"),
        ("log_level", "EVENTUAL_LOG_LEVEL"),
        ("thread_name", "EVENTUAL_THREAD_NAME"),
    ):
        if var in os.environ:
            values[key] = os.environ[var]
    return EventualConfig.model_validate(values)


def setup_logging(level: str = "WARNING", fmt: str = DEFAULT_LOG_FORMAT) -> logging.Logger:
    """Set the package logger level and attach a stream handler once."""
    logger = logging.getLogger("eventual")
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    return logger


def build_env(config: EventualConfig | None = None) -> Env:
    """Construct an Env for ``config``, read from the environment if omitted."""
    config = config or load_config_from_env()
    if config.scheduler == "queue":
        scheduler = QueueScheduler()
    elif config.scheduler == "asyncio":
        # Binds the running loop when called from inside one.
        scheduler = AsyncioScheduler()
    else:
        scheduler = ThreadScheduler(config.thread_name)
    return Env(
        scheduler=scheduler,
        reporter=LoggingReporter(config.reporter_logger),
        adapters=default_adapters(),
    )


def configure(config: EventualConfig | None = None) -> Env:
    """Build an Env from ``config``, set up logging and install it."""
    config = config or load_config_from_env()
    setup_logging(config.log_level, config.log_format)
    env = build_env(config)
    set_env(env)
    return env
