"""Exception hierarchy.

Interactive editing operations never raise for user mistakes (unknown ids,
missing tracks); they return the snapshot unchanged. The errors below signal
programming mistakes at the API boundary instead.
"""

from __future__ import annotations

__all__ = [
    "ReelcutError",
    "UnknownPropertyError",
    "InvalidPropertyError",
    "InvalidTimeError",
    "ClockStateError",
    "TrackMembershipError",
]


class ReelcutError(Exception):
    """Base class for all reelcut errors."""


class UnknownPropertyError(ReelcutError, KeyError):
    def __init__(self, names):
        self.names = tuple(sorted(names))
        super().__init__(f"unknown clip properties: {', '.join(self.names)}")


class InvalidPropertyError(ReelcutError, ValueError):
    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f"invalid value for clip property {name}: {value!r}")


class InvalidTimeError(ReelcutError, ValueError):
    pass


class ClockStateError(ReelcutError, RuntimeError):
    pass


class TrackMembershipError(ReelcutError, ValueError):
    """A clip's ``track_id`` does not name the track holding it."""
