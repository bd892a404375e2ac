"""Progress and status reporting abstraction.

The streaming layer reports what it is doing (stream started, sampling
complete, producer overran its budget) through a ``Reporter`` so it never
depends on a particular UI. ``NullReporter`` keeps tests and batch runs
silent, ``LoggingReporter`` forwards to :mod:`logging`, and the rich-based
``ConsoleReporter`` lives in :mod:`tracelens.ui.reporter`.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Protocol for progress and status reporting.

    Methods take plain strings so implementations are free to style them.
    """

    def action(self, message: str) -> None:
        """Report an action being performed (e.g. 'Streaming 1000 draws...')."""
        ...

    def info(self, message: str) -> None:
        """Report informational message."""
        ...

    def warning(self, message: str) -> None:
        """Report a non-fatal issue the user should be aware of."""
        ...

    def error(self, message: str) -> None:
        """Report an error."""
        ...

    def success(self, message: str) -> None:
        """Report successful completion."""
        ...


class NullReporter:
    """Silent reporter that discards all messages."""

    def action(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass


class LoggingReporter:
    """Reporter that writes to Python logging.

    Example:
        >>> reporter = LoggingReporter("tracelens.stream")
        >>> reporter.action("Streaming 500 draws")  # INFO level
        >>> reporter.warning("done(480) disagrees with 500 received draws")
    """

    def __init__(self, logger_name: str = "tracelens") -> None:
        self._logger = logging.getLogger(logger_name)

    def action(self, message: str) -> None:
        """Log action at INFO level with prefix."""
        self._logger.info("[ACTION] %s", message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def success(self, message: str) -> None:
        """Log success at INFO level with prefix."""
        self._logger.info("[SUCCESS] %s", message)


class CompositeReporter:
    """Reporter that fans every message out to several reporters."""

    def __init__(self, reporters: list[Reporter]) -> None:
        self._reporters = reporters

    def action(self, message: str) -> None:
        for reporter in self._reporters:
            reporter.action(message)

    def info(self, message: str) -> None:
        for reporter in self._reporters:
            reporter.info(message)

    def warning(self, message: str) -> None:
        for reporter in self._reporters:
            reporter.warning(message)

    def error(self, message: str) -> None:
        for reporter in self._reporters:
            reporter.error(message)

    def success(self, message: str) -> None:
        for reporter in self._reporters:
            reporter.success(message)
