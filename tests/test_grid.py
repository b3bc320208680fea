from __future__ import annotations

import io

import pytest

from tarrier import grid as day_grid
from tarrier.errors import InvalidYear, OutOfRange
from tarrier.geometry import day_count, first_weekday_offset
from tarrier.grid import DayState, build, render, render_styled


class TestBuild:
    @pytest.mark.parametrize("year", [1900, 2000, 2023, 2024, 2025, 2026])
    def test_length_is_padding_plus_days(self, year):
        grid = build(year, 2026, 291, set())
        assert len(grid) == first_weekday_offset(year) + day_count(year)
        assert len(grid.days) == day_count(year)

    def test_padding_cells_are_not_days(self):
        grid = build(2023, 2026, 1, {1})
        assert grid.cells[:6] == (None,) * 6
        assert grid[6] is DayState.COMPLETED

    def test_current_year_classification(self):
        grid = build(2024, 2024, 10, set())
        days = grid.days
        assert all(state is DayState.MISSED for state in days[:9])
        assert all(state is DayState.EMPTY for state in days[9:])

    def test_first_day_of_current_year_has_nothing_missed(self):
        grid = build(2026, 2026, 1, set())
        assert set(grid.days) == {DayState.EMPTY}

    def test_past_year_is_all_missed(self):
        grid = build(2023, 2024, 10, set())
        assert set(grid.days) == {DayState.MISSED}

    def test_future_year_is_all_missed(self):
        grid = build(2030, 2026, 291, set())
        assert set(grid.days) == {DayState.MISSED}

    def test_completed_overlay_wins(self):
        # Day 5 is in the past (MISSED), day 20 is still to come (EMPTY).
        grid = build(2024, 2024, 10, {5, 20})
        assert grid.days[4] is DayState.COMPLETED
        assert grid.days[19] is DayState.COMPLETED
        assert grid.days[3] is DayState.MISSED
        assert grid.days[18] is DayState.EMPTY

    def test_overlay_is_idempotent(self):
        completions = {1, 2, 100}
        once = build(2024, 2024, 200, completions)
        twice = build(2024, 2024, 200, list(completions) + list(completions))
        assert once == twice

    def test_leap_day_and_last_day(self):
        grid = build(2024, 2023, 1, {60, 366})
        assert grid.days[59] is DayState.COMPLETED
        assert grid.days[365] is DayState.COMPLETED

    @pytest.mark.parametrize("ordinal", [0, 366, -1])
    def test_out_of_range_completion_is_rejected(self, ordinal):
        with pytest.raises(OutOfRange):
            build(2023, 2026, 1, {ordinal})

    @pytest.mark.parametrize("today_ordinal", [0, 367])
    def test_out_of_range_today_is_rejected(self, today_ordinal):
        with pytest.raises(OutOfRange):
            build(2024, 2024, today_ordinal, set())

    def test_today_is_ignored_for_other_years(self):
        grid = build(2023, 2024, 0, set())
        assert len(grid.days) == 365

    @pytest.mark.parametrize("year", [0, -5, 10000])
    def test_invalid_year(self, year):
        with pytest.raises(InvalidYear):
            build(year, 2026, 1, set())


class TestRender:
    def test_seven_labelled_rows(self):
        rows = render(build(2023, 2026, 1, set()))
        assert len(rows) == 7
        assert [row[:2] for row in rows] == ["M ", "T ", "W ", "T ", "F ", "S ", "S "]

    def test_row_widths(self):
        # 2023 starts on a Sunday: 6 pad cells + 365 days fill exactly 53 weeks.
        rows = render(build(2023, 2026, 1, set()))
        assert all(len(row) == 2 + 53 * 2 for row in rows)

    def test_day_one_lands_on_its_weekday(self):
        rows = render(build(2023, 2026, 1, {1}))
        assert rows[6].startswith("S " + day_grid.FILLED_BLOCK)
        for row in rows[:6]:
            assert row.startswith(row[:2] + day_grid.PAD_BLOCK)
            assert day_grid.FILLED_BLOCK not in row

    def test_glyphs_per_state(self):
        # 2024 starts on a Monday, so the Monday row holds days 1, 8, 15, ...
        rows = render(build(2024, 2024, 15, {1}))
        monday = rows[0]
        assert monday[2:8] == (
            day_grid.FILLED_BLOCK + day_grid.SHADED_BLOCK + day_grid.EMPTY_BLOCK
        )

    def test_render_styled_matches_plain(self):
        grid = build(2024, 2024, 100, {1, 50, 99})
        assert [line.plain for line in render_styled(grid)] == render(grid)

    def test_write_emits_one_line_each(self):
        stream = io.StringIO()
        day_grid.write(["a", "b"], stream)
        assert stream.getvalue() == "a\nb\n"
