import enum
import logging
import random
import time

from .models import GameState, in_bounds
from .rules import get_hint, invalid_cells, is_complete, is_valid_placement, valid_digit

logger = logging.getLogger(__name__)


class GameStatus(enum.Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'


class Direction(enum.Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)


class GameStateMachine:
    """
    Owns the play of one puzzle: selection, timing, mistakes and
    completion. Every action that is not valid for the current status
    (or targets a clue or out-of-range cell) is ignored.

    on_change(state) fires after every committed change; on_complete(elapsed)
    fires exactly once when the grid matches the solution.
    """

    def __init__(self, puzzle, state=None, clock=time.time,
                 on_change=None, on_complete=None, rng=None):
        self.puzzle = puzzle
        self.clock = clock
        self.on_change = on_change
        self.on_complete = on_complete
        self.rng = rng or random.Random()

        if state is None:
            state = GameState.fresh(puzzle, self._now_ms())
        self.state = state
        # Derived, never persisted
        self.invalid_cells = invalid_cells(state.current_grid, puzzle.puzzle)

    def _now_ms(self):
        return int(self.clock() * 1000)

    def _elapsed_now(self):
        return max(0, (self._now_ms() - self.state.start_time) // 1000)

    def _commit(self):
        if self.on_change is not None:
            self.on_change(self.state)

    @property
    def status(self):
        if self.state.is_completed:
            return GameStatus.COMPLETED
        if self.state.has_started:
            return GameStatus.IN_PROGRESS
        return GameStatus.NOT_STARTED

    @property
    def in_progress(self):
        return self.status is GameStatus.IN_PROGRESS

    def _editable_selection(self):
        """The selected cell if it can be written to, else None."""
        if not self.in_progress or self.state.selected_cell is None:
            return None
        row, col = self.state.selected_cell
        if self.puzzle.is_clue(row, col):
            return None
        return row, col

    # -------------------------------------------------------------------------
    # TRANSITIONS
    # -------------------------------------------------------------------------
    def start(self):
        if self.status is not GameStatus.NOT_STARTED:
            return False
        self.state.has_started = True
        self.state.start_time = self._now_ms()
        self.state.elapsed_time = 0
        self._commit()
        return True

    def tick(self):
        if not self.in_progress:
            return False
        elapsed = self._elapsed_now()
        if elapsed == self.state.elapsed_time:
            return False
        self.state.elapsed_time = elapsed
        self._commit()
        return True

    def select_cell(self, row, col):
        if not self.in_progress or not in_bounds(row, col):
            return False
        # Original puzzle cells are never selectable
        if self.puzzle.is_clue(row, col):
            return False
        self.state.selected_cell = (row, col)
        self._commit()
        return True

    def move_selection(self, direction):
        if not self.in_progress or self.state.selected_cell is None:
            return False
        row, col = self.state.selected_cell
        d_row, d_col = Direction(direction).value
        new_cell = (min(8, max(0, row + d_row)), min(8, max(0, col + d_col)))
        if new_cell == self.state.selected_cell:
            return False
        self.state.selected_cell = new_cell
        self._commit()
        return True

    def enter_digit(self, digit):
        cell = self._editable_selection()
        if cell is None or not valid_digit(digit):
            return False
        row, col = cell

        # The digit is written even when it clashes, so the player can see it
        self.state.current_grid[row][col] = digit
        if is_valid_placement(self.state.current_grid, row, col, digit):
            self.invalid_cells.discard(cell)
        else:
            self.invalid_cells.add(cell)
            self.state.mistakes += 1
        logger.debug("Placed %d at r%dc%d (%s)", digit, row + 1, col + 1,
                     "invalid" if cell in self.invalid_cells else "valid")

        completed = is_complete(self.state.current_grid, self.puzzle.solution)
        if completed:
            self.state.elapsed_time = max(self.state.elapsed_time, self._elapsed_now())
            self.state.is_completed = True
        self._commit()

        if completed:
            logger.info("Puzzle %d completed in %ss with %d mistakes",
                        self.puzzle.id, self.state.elapsed_time, self.state.mistakes)
            if self.on_complete is not None:
                self.on_complete(self.state.elapsed_time)
        return True

    def clear_cell(self):
        cell = self._editable_selection()
        if cell is None:
            return False
        row, col = cell
        self.state.current_grid[row][col] = 0
        self.invalid_cells.discard(cell)
        self._commit()
        return True

    def hint(self):
        """Selects a random empty cell and fills in its solution value."""
        if not self.in_progress:
            return None
        found = get_hint(self.state.current_grid, self.puzzle.solution, self.rng)
        if found is None:
            return None
        row, col, value = found
        self.state.selected_cell = (row, col)
        self.enter_digit(value)
        return found
