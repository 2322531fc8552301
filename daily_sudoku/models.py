"""
Records shared by the engine, the storage layer and the front-end.

Grids are plain lists of lists (9 rows of 9 ints, 0 = empty). Records
serialize to the camelCase JSON shape the catalog and the key-value
store use.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import DIFFICULTIES

Grid = List[List[int]]
Cell = Tuple[int, int]


def empty_grid():
    return [[0] * 9 for _ in range(9)]


def copy_grid(grid):
    return [row[:] for row in grid]


def is_grid(value):
    """True if value is a 9x9 matrix of ints in 0..9."""
    if not isinstance(value, list) or len(value) != 9:
        return False
    for row in value:
        if not isinstance(row, list) or len(row) != 9:
            return False
        for cell in row:
            # bool is an int subclass; reject it explicitly
            if isinstance(cell, bool) or not isinstance(cell, int) or not 0 <= cell <= 9:
                return False
    return True


def in_bounds(row, col):
    return (isinstance(row, int) and isinstance(col, int)
            and 0 <= row < 9 and 0 <= col < 9)


@dataclass(frozen=True)
class Puzzle:
    """One catalog entry: the carved puzzle and the grid it was carved from."""

    id: int
    date: str
    difficulty: str
    puzzle: Grid
    solution: Grid

    def is_clue(self, row, col):
        return self.puzzle[row][col] != 0

    @classmethod
    def from_dict(cls, data):
        """Build a Puzzle from a catalog record, raising ValueError on bad shape."""
        if not isinstance(data, dict):
            raise ValueError("puzzle record must be an object")
        try:
            puzzle_id = data['id']
            puzzle_date = data['date']
            difficulty = data['difficulty']
            puzzle = data['puzzle']
            solution = data['solution']
        except KeyError as exc:
            raise ValueError(f"puzzle record is missing {exc}") from None

        if isinstance(puzzle_id, bool) or not isinstance(puzzle_id, int) or puzzle_id < 1:
            raise ValueError(f"invalid puzzle id: {puzzle_id!r}")
        if not isinstance(puzzle_date, str):
            raise ValueError(f"invalid date for puzzle {puzzle_id}: {puzzle_date!r}")
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"invalid difficulty for puzzle {puzzle_id}: {difficulty!r}")
        if not is_grid(puzzle) or not is_grid(solution):
            raise ValueError(f"puzzle {puzzle_id} does not hold two 9x9 grids")

        return cls(puzzle_id, puzzle_date, difficulty, copy_grid(puzzle), copy_grid(solution))

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date,
            'difficulty': self.difficulty,
            'puzzle': copy_grid(self.puzzle),
            'solution': copy_grid(self.solution),
        }


@dataclass
class GameState:
    """Mutable per-puzzle progress, persisted after every change."""

    current_grid: Grid
    puzzle_id: int
    selected_cell: Optional[Cell] = None
    is_completed: bool = False
    has_started: bool = False
    start_time: int = 0  # epoch milliseconds
    elapsed_time: int = 0  # seconds
    mistakes: int = 0

    @classmethod
    def fresh(cls, puzzle, now_ms=0):
        return cls(current_grid=copy_grid(puzzle.puzzle), puzzle_id=puzzle.id, start_time=now_ms)

    def to_dict(self):
        selected = None
        if self.selected_cell is not None:
            row, col = self.selected_cell
            selected = {'row': row, 'col': col}
        return {
            'currentGrid': copy_grid(self.current_grid),
            'selectedCell': selected,
            'isCompleted': self.is_completed,
            'hasStarted': self.has_started,
            'startTime': self.start_time,
            'elapsedTime': self.elapsed_time,
            'mistakes': self.mistakes,
            'puzzleId': self.puzzle_id,
        }

    @classmethod
    def from_dict(cls, data):
        """Parse a stored record, raising ValueError on any schema mismatch."""
        if not isinstance(data, dict):
            raise ValueError("game state must be an object")
        grid = data.get('currentGrid')
        if not is_grid(grid):
            raise ValueError("game state has no valid currentGrid")

        selected = data.get('selectedCell')
        if selected is not None:
            if not isinstance(selected, dict) or not in_bounds(selected.get('row'), selected.get('col')):
                raise ValueError(f"invalid selectedCell: {selected!r}")
            selected = (selected['row'], selected['col'])

        def number(key, default=0):
            value = data.get(key, default)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"invalid {key}: {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"non-finite {key}: {value!r}")
            return int(value)

        puzzle_id = data.get('puzzleId')
        if isinstance(puzzle_id, bool) or not isinstance(puzzle_id, int):
            raise ValueError(f"invalid puzzleId: {puzzle_id!r}")

        return cls(
            current_grid=copy_grid(grid),
            puzzle_id=puzzle_id,
            selected_cell=selected,
            is_completed=bool(data.get('isCompleted', False)),
            has_started=bool(data.get('hasStarted', False)),
            start_time=number('startTime'),
            elapsed_time=number('elapsedTime'),
            mistakes=number('mistakes'),
        )


STATS_FIELDS = (
    'gamesPlayed', 'gamesCompleted', 'totalTime', 'averageTime',
    'fastestTime', 'slowestTime', 'currentStreak', 'maxStreak',
)


@dataclass
class GameStats:
    """Lifetime counters for the single local player."""

    games_played: int = 0
    games_completed: int = 0
    total_time: int = 0
    average_time: float = 0
    fastest_time: int = 0
    slowest_time: int = 0
    current_streak: int = 0
    max_streak: int = 0

    def to_dict(self):
        return {
            'gamesPlayed': self.games_played,
            'gamesCompleted': self.games_completed,
            'totalTime': self.total_time,
            'averageTime': self.average_time,
            'fastestTime': self.fastest_time,
            'slowestTime': self.slowest_time,
            'currentStreak': self.current_streak,
            'maxStreak': self.max_streak,
        }

    @property
    def completion_rate(self):
        if self.games_played == 0:
            return 0.0
        return self.games_completed / self.games_played * 100
