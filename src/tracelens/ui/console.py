"""Shared rich console and theme."""

import os
import sys

from rich.console import Console
from rich.theme import Theme

TRACELENS_THEME = Theme(
    {
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "action": "bold white",
        "neutral": "dim white",
        "metric": "bold green",
    }
)

# Single console instance for the whole package
console = Console(theme=TRACELENS_THEME, stderr=True)

_EMOJI_DISABLED = os.getenv("TRACELENS_NO_EMOJI", "").lower() in {"1", "true", "yes"}


def _supports_emoji() -> bool:
    """Best-effort detection if the terminal supports Unicode symbols."""
    if _EMOJI_DISABLED:
        return False
    enc = getattr(console, "encoding", None) or sys.getdefaultencoding()
    return enc is None or "utf" in enc.lower()


def icon(name: str) -> str:
    """Return a status icon, falling back to ASCII on limited terminals.

    Names: check, warn, error, info, play
    """
    use_emoji = _supports_emoji()
    mapping = {
        "check": "✓" if use_emoji else "+",
        "warn": "⚠" if use_emoji else "!",
        "error": "✗" if use_emoji else "x",
        "info": "▸" if use_emoji else ">",
        "play": "▶" if use_emoji else ">",
    }
    return mapping.get(name, mapping["info"])


__all__ = ["TRACELENS_THEME", "console", "icon"]
