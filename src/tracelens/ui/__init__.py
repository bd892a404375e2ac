"""Terminal output for tracelens: rich console, logging setup, console reporter."""

from tracelens.ui.console import TRACELENS_THEME, console, icon
from tracelens.ui.logging import close_logging, setup_logging, setup_logging_from_config
from tracelens.ui.reporter import ConsoleReporter

__all__ = [
    "TRACELENS_THEME",
    "ConsoleReporter",
    "close_logging",
    "console",
    "icon",
    "setup_logging",
    "setup_logging_from_config",
]
