from __future__ import annotations

from dataclasses import dataclass


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def day_count(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def first_weekday_offset(year: int) -> int:
    """Weekday of January 1st, Monday=0 through Sunday=6.

    Proleptic Gregorian arithmetic, so any integer year works, not only the
    years ``datetime.date`` can represent.
    """
    prev = year - 1
    sunday_first = (prev + prev // 4 - prev // 100 + prev // 400 + 1) % 7
    return (sunday_first + 6) % 7


@dataclass(frozen=True)
class YearGeometry:
    year: int
    day_count: int
    leading_pad: int

    @classmethod
    def of(cls, year: int) -> "YearGeometry":
        return cls(
            year=year,
            day_count=day_count(year),
            leading_pad=first_weekday_offset(year),
        )

    @property
    def cell_count(self) -> int:
        return self.leading_pad + self.day_count
