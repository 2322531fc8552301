import logging
import random
from datetime import timedelta

from . import config
from .exceptions import GenerationError
from .models import Puzzle, copy_grid, empty_grid
from .rules import can_place

logger = logging.getLogger(__name__)


# =========================================================================
# GRID FILLER
# Randomized backtracking over the cells in row-major order.
# =========================================================================
class GridFiller:
    """Produces one fully solved 9x9 grid per call to fill()."""

    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    def fill(self):
        """
        Returns a new solved grid, or None if the search was exhausted.
        Each call owns its own grid, so repeated calls never share state.
        """
        grid = empty_grid()
        if self._fill_from(grid, 0):
            return grid
        return None

    def _fill_from(self, grid, index):
        """
        Fills the first empty cell at or after `index` and recurses.
        Returns True once the whole grid is filled; on False the grid is
        left exactly as it was received. Depth never exceeds 81.
        """
        while index < 81 and grid[index // 9][index % 9] != 0:
            index += 1
        if index == 81:
            return True

        row, col = divmod(index, 9)
        numbers = list(range(1, 10))
        self.rng.shuffle(numbers)

        for num in numbers:
            if can_place(grid, row, col, num):
                grid[row][col] = num
                if self._fill_from(grid, index + 1):
                    return True
                grid[row][col] = 0

        return False


# =========================================================================
# PUZZLE CARVER
# Blanks a difficulty-determined number of cells. No uniqueness check.
# =========================================================================
class PuzzleCarver:
    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    @staticmethod
    def removal_count(difficulty):
        # Fallback for an unknown difficulty setting
        return config.DIFFICULTY_REMOVALS.get(
            difficulty, config.DIFFICULTY_REMOVALS[config.DEFAULT_DIFFICULTY])

    def carve(self, solution, difficulty):
        """Returns (puzzle, solution); the input grid is never modified."""
        puzzle = copy_grid(solution)
        remaining = self.removal_count(difficulty)

        while remaining > 0:
            row = self.rng.randrange(9)
            col = self.rng.randrange(9)
            if puzzle[row][col] != 0:
                puzzle[row][col] = 0
                remaining -= 1

        return puzzle, copy_grid(solution)


# =========================================================================
# PUZZLE GENERATOR
# Fill + carve, retrying the fill from an empty grid if it ever fails.
# =========================================================================
class PuzzleGenerator:
    def __init__(self, rng=None, max_attempts=config.MAX_FILL_ATTEMPTS):
        self.rng = rng or random.Random()
        self.filler = GridFiller(self.rng)
        self.carver = PuzzleCarver(self.rng)
        self.max_attempts = max_attempts

    def generate_solution(self):
        for attempt in range(1, self.max_attempts + 1):
            grid = self.filler.fill()
            if grid is not None:
                return grid
            logger.warning("Grid fill exhausted on attempt %d/%d, retrying",
                           attempt, self.max_attempts)
        raise GenerationError(f"could not fill a grid after {self.max_attempts} attempts")

    def generate(self, difficulty=config.DEFAULT_DIFFICULTY):
        """Main entry point: returns (puzzle, solution)."""
        solution = self.generate_solution()
        return self.carver.carve(solution, difficulty)


def generate_catalog(count=config.CATALOG_SIZE, start_date=config.CATALOG_START_DATE, rng=None):
    """Builds `count` daily puzzles with sequential ids and consecutive dates."""
    rng = rng or random.Random()
    generator = PuzzleGenerator(rng)
    puzzles = []

    logger.info("Generating %d sudoku puzzles...", count)
    for i in range(count):
        if i % 100 == 0:
            logger.info("Generated %d/%d puzzles...", i, count)

        difficulty = rng.choice(config.DIFFICULTIES)
        puzzle, solution = generator.generate(difficulty)
        puzzles.append(Puzzle(
            id=i + 1,
            date=(start_date + timedelta(days=i)).isoformat(),
            difficulty=difficulty,
            puzzle=puzzle,
            solution=solution,
        ))

    logger.info("Generated %d/%d puzzles!", count, count)
    return puzzles
