from __future__ import annotations

import argparse
import logging
from datetime import date
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from tarrier import grid as day_grid
from tarrier.errors import TarrierError
from tarrier.logs import setup_logging
from tarrier.paths import DB_ENV_VAR, resolve_db_path
from tarrier.store import HabitStore
from tarrier.streaks import StreakResult, compute

logger = logging.getLogger(__name__)

EPILOG = f"""\
The database defaults to ~/.local/share/tarrier/tarrier.db and can be moved
with --db or the {DB_ENV_VAR} environment variable.
"""


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tarrier",
        description="Track a daily habit and show a year of progress.",
        epilog=EPILOG,
    )
    parser.add_argument("habit", nargs="?", help="Habit to show or mark.")
    parser.add_argument(
        "-m", "--mark", action="store_true", help="Mark today as completed."
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Year to show. Marking is ignored for any year but the current one.",
    )
    parser.add_argument("--db", default=None, help="Path to the habit database.")
    parser.add_argument("--list", action="store_true", help="List known habits.")
    parser.add_argument("--plain", action="store_true", help="Print without colour.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)
    if not args.list and not args.habit:
        parser.error("a habit name is required unless --list is given")
    return args


def grid_width(grid: day_grid.DayGrid) -> int:
    columns = -(-grid.geometry.cell_count // 7)
    return 2 + columns * len(day_grid.FILLED_BLOCK)


def build_stats_line(parts: list[str], width: int) -> Text:
    """Spread ``parts`` across ``width`` columns, falling back to ``a | b | c``."""
    joined = " | ".join(parts)
    gaps = len(parts) - 1
    if width <= 0 or gaps < 1:
        return Text(joined)
    total_spaces = width - sum(len(part) for part in parts)
    if total_spaces < 2 * gaps:
        return Text(joined)
    # Leftover spaces go to the leftmost gaps.
    base, extra = divmod(total_spaces, gaps)
    line = parts[0]
    for index, part in enumerate(parts[1:]):
        line += " " * (base + (1 if index < extra else 0)) + part
    return Text(line)


def days_label(count: int) -> str:
    return f"{count} day" if count == 1 else f"{count} days"


def stats_parts(streak: StreakResult, completed: int) -> list[str]:
    return [
        f"Current streak: {days_label(streak.current)}",
        f"Longest streak: {days_label(streak.maximum)}",
        f"Completed: {days_label(completed)}",
    ]


def show_habit(
    console: Console,
    store: HabitStore,
    habit: str,
    year: int,
    today: date,
    plain: bool,
) -> None:
    marked = store.marked_days(habit, year)
    today_ordinal = today.timetuple().tm_yday
    grid = day_grid.build(year, today.year, today_ordinal, marked)

    if plain:
        day_grid.write(day_grid.render(grid), console.file)
    else:
        for line in day_grid.render_styled(grid):
            console.print(line, soft_wrap=True)

    streak = compute(store.completion_dates(habit), today)
    stats = build_stats_line(stats_parts(streak, len(marked)), grid_width(grid))
    if plain:
        day_grid.write([stats.plain], console.file)
    else:
        console.print(stats, soft_wrap=True)


def show_names(console: Console, store: HabitStore) -> None:
    names = store.habit_names()
    if not names:
        console.print("No habits yet.", highlight=False)
        return
    for name in names:
        console.print(name, highlight=False, markup=False)


def main(
    argv: Optional[Sequence[str]] = None,
    today: Optional[date] = None,
    console: Optional[Console] = None,
) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)
    today = today or date.today()
    console = console or Console()
    year = today.year if args.year is None else args.year

    mark = args.mark
    if mark and year != today.year:
        logger.warning("Ignoring -m: %s is not the current year", year)
        mark = False

    db_path = resolve_db_path(args.db)
    logger.debug("Using database %s", db_path)
    try:
        with HabitStore(db_path) as store:
            if args.list:
                show_names(console, store)
                return
            if mark:
                store.mark_today(args.habit, today)
            show_habit(console, store, args.habit, year, today, args.plain)
    except TarrierError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
