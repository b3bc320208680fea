from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence, Union

from tarrier.errors import UnsortedInput


@dataclass(frozen=True)
class StreakResult:
    current: int
    maximum: int


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def check_ascending(dates: Sequence[date]) -> None:
    for previous, day in zip(dates, dates[1:]):
        if day <= previous:
            raise UnsortedInput(
                f"completion dates must be strictly ascending: {day} follows {previous}"
            )


def compute(
    dates: Sequence[Union[date, datetime]], now: Union[date, datetime]
) -> StreakResult:
    """Current and longest run of consecutive completed days.

    Consecutive means one calendar day apart. A run whose last completion is
    older than yesterday counts as broken, so ``current`` drops to 0.
    Datetimes are reduced to their calendar date first.
    """
    if not dates:
        return StreakResult(current=0, maximum=0)
    days = [_as_date(value) for value in dates]
    check_ascending(days)

    run = 0
    longest = 0
    previous = None
    for day in days:
        if previous is not None and (day - previous).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day

    if (_as_date(now) - days[-1]).days > 1:
        run = 0
    return StreakResult(current=run, maximum=longest)
