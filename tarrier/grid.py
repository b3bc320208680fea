from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import IO, Iterable, Iterator, Optional

from rich.text import Text

from tarrier.errors import InvalidYear, OutOfRange
from tarrier.geometry import YearGeometry

MIN_YEAR = 1
MAX_YEAR = 9999


class DayState(IntEnum):
    EMPTY = 0
    MISSED = 1
    COMPLETED = 2


# Cells before January 1st hold None so they never look like a real day.
Cell = Optional[DayState]

FILLED_BLOCK = "██"
SHADED_BLOCK = "░░"
EMPTY_BLOCK = "  "
PAD_BLOCK = EMPTY_BLOCK

# Indexed by DayState value.
GLYPHS = (EMPTY_BLOCK, SHADED_BLOCK, FILLED_BLOCK)
STYLES = ("", "#5a5a5a", "#2bd42b")
WEEKDAY_LABELS = ("M", "T", "W", "T", "F", "S", "S")


@dataclass(frozen=True)
class DayGrid:
    geometry: YearGeometry
    cells: tuple[Cell, ...]

    @property
    def year(self) -> int:
        return self.geometry.year

    @property
    def days(self) -> tuple[DayState, ...]:
        """Per-day states without the leading padding, index 0 is January 1st."""
        return self.cells[self.geometry.leading_pad :]  # type: ignore[return-value]

    def row(self, weekday: int) -> tuple[Cell, ...]:
        return self.cells[weekday::7]

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)


def _first_upcoming_index(
    year: int, current_year: int, today_ordinal: int, days: int
) -> int:
    """Index of the first day still to come; days from here on start EMPTY.

    Only the current year has upcoming days. Future years are treated like
    past ones and come out fully MISSED.
    """
    if year == current_year:
        return today_ordinal - 1
    return days


def classify_days(
    geometry: YearGeometry, current_year: int, today_ordinal: int
) -> list[DayState]:
    days = geometry.day_count
    if geometry.year == current_year and not 1 <= today_ordinal <= days:
        raise OutOfRange(
            f"today ordinal {today_ordinal} outside 1..{days} for {geometry.year}"
        )
    upcoming = _first_upcoming_index(geometry.year, current_year, today_ordinal, days)
    return [DayState.MISSED] * upcoming + [DayState.EMPTY] * (days - upcoming)


def overlay_completions(states: list[DayState], completions: Iterable[int]) -> None:
    days = len(states)
    for ordinal in completions:
        if not 1 <= ordinal <= days:
            raise OutOfRange(f"completed day {ordinal} outside 1..{days}")
        states[ordinal - 1] = DayState.COMPLETED


def build(
    year: int,
    current_year: int,
    today_ordinal: int,
    completions: Iterable[int],
) -> DayGrid:
    """Build the weekday-aligned grid of day states for ``year``.

    ``completions`` holds 1-based day-of-year ordinals. ``today_ordinal`` is
    only consulted when ``year == current_year``.
    """
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidYear(f"year {year} outside {MIN_YEAR}..{MAX_YEAR}")
    geometry = YearGeometry.of(year)
    states = classify_days(geometry, current_year, today_ordinal)
    overlay_completions(states, completions)
    padding: list[Cell] = [None] * geometry.leading_pad
    return DayGrid(geometry=geometry, cells=tuple(padding + states))


def glyph(cell: Cell) -> str:
    if cell is None:
        return PAD_BLOCK
    return GLYPHS[cell]


def render(grid: DayGrid) -> list[str]:
    """Render the grid as 7 text rows, Monday on top, oldest week on the left."""
    rows = []
    for weekday, label in enumerate(WEEKDAY_LABELS):
        blocks = "".join(glyph(cell) for cell in grid.row(weekday))
        rows.append(f"{label} {blocks}")
    return rows


def render_styled(grid: DayGrid) -> list[Text]:
    rows = []
    for weekday, label in enumerate(WEEKDAY_LABELS):
        line = Text(f"{label} ")
        for cell in grid.row(weekday):
            if cell is None:
                line.append(PAD_BLOCK)
                continue
            line.append(GLYPHS[cell], style=STYLES[cell])
        rows.append(line)
    return rows


def write(lines: Iterable[str], stream: IO[str]) -> None:
    for line in lines:
        stream.write(line + "\n")
