"""Failure reporter implementations."""

from __future__ import annotations

import logging


class LoggingReporter:
    """Logs observer failures at ERROR with their traceback."""

    def __init__(self, logger_name: str = "eventual") -> None:
        self.logger = logging.getLogger(logger_name)

    def report(self, error: BaseException) -> None:
        self.logger.error(
            "Unhandled failure in observer: %r",
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
