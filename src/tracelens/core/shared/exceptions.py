"""Exception taxonomy for tracelens.

A small hierarchy so callers can tell bad input to the statistics layer
apart from protocol mistakes made by a sample producer.
"""

from __future__ import annotations


class TraceLensError(Exception):
    """Base class for all tracelens-specific exceptions."""


class InvalidInputError(TraceLensError, ValueError):
    """Input rejected by a statistics function (empty samples, bad bin count...)."""


class StreamError(TraceLensError):
    """Errors raised by the streaming coordinator."""


class StreamOverrunError(StreamError):
    """A producer sent more draws than the coordinator was told to expect."""


class StreamStateError(StreamError):
    """A message arrived that is not valid in the coordinator's current state."""


__all__ = [
    "InvalidInputError",
    "StreamError",
    "StreamOverrunError",
    "StreamStateError",
    "TraceLensError",
]
