# tests/test_generator.py
import random
from datetime import date

import pytest

from daily_sudoku.exceptions import GenerationError
from daily_sudoku.generator import GridFiller, PuzzleCarver, PuzzleGenerator, generate_catalog
from daily_sudoku.rules import is_solved_grid


def assert_solved(grid):
    digits = set(range(1, 10))
    for i in range(9):
        assert set(grid[i]) == digits
        assert {grid[r][i] for r in range(9)} == digits
    for br in range(0, 9, 3):
        for bc in range(0, 9, 3):
            assert {grid[br + i][bc + j] for i in range(3) for j in range(3)} == digits


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
def test_filler_produces_solved_grid(seed):
    grid = GridFiller(random.Random(seed)).fill()
    assert grid is not None
    assert_solved(grid)


def test_filler_calls_do_not_share_state():
    filler = GridFiller(random.Random(3))
    first = filler.fill()
    snapshot = [row[:] for row in first]
    second = filler.fill()
    assert first == snapshot
    assert first is not second
    assert_solved(second)


def test_filler_is_randomized():
    grids = {tuple(map(tuple, GridFiller(random.Random(seed)).fill())) for seed in range(5)}
    assert len(grids) > 1


@pytest.mark.parametrize("difficulty,removed", [("easy", 35), ("medium", 45), ("hard", 55)])
def test_carve_blanks_exact_count(solution, difficulty, removed):
    puzzle, carved_solution = PuzzleCarver(random.Random(5)).carve(solution, difficulty)

    assert carved_solution == solution
    assert sum(row.count(0) for row in puzzle) == removed
    for r in range(9):
        for c in range(9):
            assert puzzle[r][c] == 0 or puzzle[r][c] == solution[r][c]


def test_carve_leaves_input_untouched(solution):
    original = [row[:] for row in solution]
    PuzzleCarver(random.Random(1)).carve(solution, "hard")
    assert solution == original


def test_unknown_difficulty_falls_back_to_medium(solution):
    puzzle, _ = PuzzleCarver(random.Random(2)).carve(solution, "expert")
    assert sum(row.count(0) for row in puzzle) == 45


def test_generator_retries_failed_fill(monkeypatch):
    generator = PuzzleGenerator(random.Random(9), max_attempts=3)
    real_fill = generator.filler.fill
    calls = []

    def flaky_fill():
        calls.append(1)
        return None if len(calls) == 1 else real_fill()

    monkeypatch.setattr(generator.filler, "fill", flaky_fill)
    puzzle, solution = generator.generate("easy")
    assert len(calls) == 2
    assert is_solved_grid(solution)


def test_generator_gives_up_after_max_attempts(monkeypatch):
    generator = PuzzleGenerator(random.Random(9), max_attempts=2)
    monkeypatch.setattr(generator.filler, "fill", lambda: None)
    with pytest.raises(GenerationError):
        generator.generate()


def test_generate_catalog_sequential_ids_and_dates():
    puzzles = generate_catalog(count=4, start_date=date(2025, 12, 30), rng=random.Random(11))

    assert [p.id for p in puzzles] == [1, 2, 3, 4]
    assert [p.date for p in puzzles] == ["2025-12-30", "2025-12-31", "2026-01-01", "2026-01-02"]
    for p in puzzles:
        assert p.difficulty in ("easy", "medium", "hard")
        assert is_solved_grid(p.solution)
        assert sum(row.count(0) for row in p.puzzle) == PuzzleCarver.removal_count(p.difficulty)
