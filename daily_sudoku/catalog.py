import json
import logging
import os
from datetime import date

from .exceptions import CatalogError
from .models import Puzzle
from .rules import is_solved_grid, matches_solution

logger = logging.getLogger(__name__)


def parse_catalog(records):
    """Validates a list of catalog records, raising CatalogError on the first bad one."""
    if not isinstance(records, list):
        raise CatalogError("catalog must be a list of puzzles")

    puzzles = []
    seen_dates = set()
    for index, record in enumerate(records):
        try:
            puzzle = Puzzle.from_dict(record)
        except ValueError as exc:
            raise CatalogError(f"record {index}: {exc}") from exc

        if not is_solved_grid(puzzle.solution):
            raise CatalogError(f"puzzle {puzzle.id}: solution is not a solved grid")
        if not matches_solution(puzzle.puzzle, puzzle.solution):
            raise CatalogError(f"puzzle {puzzle.id}: clue does not match its solution")
        if puzzle.date in seen_dates:
            raise CatalogError(f"puzzle {puzzle.id}: duplicate date {puzzle.date}")

        seen_dates.add(puzzle.date)
        puzzles.append(puzzle)
    return puzzles


def load_catalog(filename):
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except FileNotFoundError:
        raise CatalogError(f"catalog not found: {filename}") from None
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        raise CatalogError(f"failed to load puzzles from {filename}: {exc}") from exc

    puzzles = parse_catalog(records)
    logger.debug("Loaded %d puzzles from %s", len(puzzles), filename)
    return puzzles


def save_catalog(puzzles, filename):
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump([p.to_dict() for p in puzzles], f, indent=2)

    if puzzles:
        logger.info("Sudokus saved to: %s", filename)
        logger.info("Date range: %s to %s", puzzles[0].date, puzzles[-1].date)


def find_puzzle(puzzles, puzzle_date):
    """Exact date-string lookup; None when the date has no puzzle."""
    if isinstance(puzzle_date, date):
        puzzle_date = puzzle_date.isoformat()
    for puzzle in puzzles:
        if puzzle.date == puzzle_date:
            return puzzle
    return None


def get_todays_puzzle(puzzles, today=None):
    return find_puzzle(puzzles, today or date.today())
