from __future__ import annotations

import io
from datetime import date

import pytest
from rich.console import Console

from tarrier.store import HabitStore

TODAY = date(2026, 10, 18)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "habits.db"


@pytest.fixture
def store(db_path):
    with HabitStore(db_path) as opened:
        yield opened


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)
