# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "daily_sudoku" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from daily_sudoku.models import Puzzle  # noqa: E402

SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


class FakeClock:
    """Stands in for time.time; advance() moves it forward in seconds."""

    def __init__(self, now=1_758_110_400.0):  # 2025-09-17 12:00 UTC
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def one_blank_puzzle(puzzle_id=1, date='2025-09-17'):
    """The solution with only r1c3 (a 4) left empty."""
    grid = [row[:] for row in SOLUTION]
    grid[0][2] = 0
    return Puzzle(puzzle_id, date, 'easy', grid, [row[:] for row in SOLUTION])


@pytest.fixture
def solution():
    return [row[:] for row in SOLUTION]


@pytest.fixture
def puzzle():
    return Puzzle(1, '2025-09-17', 'medium', [row[:] for row in PUZZLE], [row[:] for row in SOLUTION])


@pytest.fixture
def clock():
    return FakeClock()
