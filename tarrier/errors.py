from __future__ import annotations


class TarrierError(Exception):
    """Base class for everything tarrier raises on purpose."""


class InvalidYear(TarrierError, ValueError):
    pass


class OutOfRange(TarrierError, ValueError):
    pass


class UnsortedInput(TarrierError, ValueError):
    pass


class InvalidHabitName(TarrierError, ValueError):
    pass


class StoreError(TarrierError):
    """The completion store could not be read or written."""
