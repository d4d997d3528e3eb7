"""Exception types raised by the musicality engine."""

from __future__ import annotations


class MusicalityError(Exception):
    """Base class for engine errors."""


class InvalidNoteError(MusicalityError, ValueError):
    """A note event was rejected before any state was touched."""


class InvalidParameterError(MusicalityError, ValueError):
    """A tunable parameter is unknown or out of range."""


class WindowInvariantError(MusicalityError, AssertionError):
    """A bounded window grew past its capacity or lost sync with its peers.

    Indicates a logic fault inside the engine, never bad caller input.
    """
