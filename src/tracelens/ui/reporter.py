"""Console-based reporter implementation using rich."""

from __future__ import annotations

from tracelens.core.shared.reporter import Reporter
from tracelens.ui.console import console, icon


class ConsoleReporter:
    """Reporter that prints styled status lines to the shared console.

    Example:
        >>> reporter = ConsoleReporter()
        >>> reporter.action("Streaming 1000 draws")
        >>> reporter.success("Sampling complete: 1000 draws")
    """

    def action(self, message: str) -> None:
        console.print(f"[action]{icon('play')}[/action] {message}", highlight=False)

    def info(self, message: str) -> None:
        console.print(f"[info]{icon('info')}[/info] {message}", highlight=False)

    def warning(self, message: str) -> None:
        console.print(f"[warning]{icon('warn')}[/warning]  {message}", highlight=False)

    def error(self, message: str) -> None:
        console.print(f"[error]{icon('error')}[/error] {message}", highlight=False)

    def success(self, message: str) -> None:
        console.print(f"[success]{icon('check')}[/success] {message}", highlight=False)


# Verify protocol compliance at import time
if not isinstance(ConsoleReporter(), Reporter):
    raise TypeError("ConsoleReporter must satisfy Reporter protocol")
