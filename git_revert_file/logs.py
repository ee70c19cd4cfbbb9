"""Logging setup and the structured event sink used by batch runs."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

EVENT_LOGGER = "git_revert_file.events"


def configure_logging(verbose: bool, level: str = "WARNING") -> None:
    """Send package logs to stderr through rich. ``verbose`` forces DEBUG."""

    resolved = logging.DEBUG if verbose else LOG_LEVEL_MAP.get(level.upper(), logging.WARNING)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("git_revert_file")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(resolved)
    package_logger.propagate = False


class EventSink(Protocol):
    def __call__(self, event: str, **fields: Any) -> None: ...


class LoggingEventSink:
    """Forward events to a logger as ``event key=value ...`` lines."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(EVENT_LOGGER)

    def __call__(self, event: str, **fields: Any) -> None:
        level = logging.WARNING if event.endswith(".failed") else logging.INFO
        details = " ".join(f"{key}={value}" for key, value in fields.items())
        self.logger.log(level, "%s %s", event, details, extra={"event": event, "fields": fields})


__all__ = ["LOG_LEVEL_MAP", "configure_logging", "EventSink", "LoggingEventSink"]
