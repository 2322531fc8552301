import logging
import time
from datetime import date

from .catalog import find_puzzle
from .game import GameStateMachine
from .stats import StatsAggregator
from .tracker import CompletionTracker

logger = logging.getLogger(__name__)


class DailySession:
    """
    Serves the puzzle for one calendar date: restores or creates its game,
    writes every change through to storage, and records outcomes.
    """

    def __init__(self, puzzles, storage, tracker=None, today=None, clock=time.time, rng=None):
        self.puzzles = puzzles
        self.storage = storage
        self.stats = StatsAggregator(storage)
        self.tracker = tracker or CompletionTracker(storage.store, clock)
        self.clock = clock
        self.rng = rng
        self.today = (today or date.fromtimestamp(clock())).isoformat()
        self.puzzle = None
        self.game = None

    def open(self):
        """
        Returns the GameStateMachine for today, or None when the catalog has
        no puzzle for this date.
        """
        self._roll_over()

        self.puzzle = find_puzzle(self.puzzles, self.today)
        if self.puzzle is None:
            logger.info("No puzzle available for %s", self.today)
            return None

        state = self.storage.load_game_state(self.today, self.puzzle.id, self.puzzle.puzzle)
        logger.info("Opening puzzle %d for %s (%s)", self.puzzle.id, self.today,
                    "restored" if state is not None else "fresh")

        self.game = GameStateMachine(
            self.puzzle,
            state=state,
            clock=self.clock,
            on_change=self._save,
            on_complete=self._complete,
            rng=self.rng,
        )
        self.tracker.set_current(self.puzzle.id)
        if state is None:
            self._save(self.game.state)
        return self.game

    def _roll_over(self):
        """Counts an unfinished game from the previously played date as abandoned."""
        last_date = self.storage.load_current_date()
        # ISO dates order as strings; going back a day never rolls over
        if last_date is not None and last_date >= self.today:
            return

        if last_date is not None:
            previous = self.storage.load_game_state(last_date)
            if previous is not None and previous.has_started and not previous.is_completed:
                logger.info("Game for %s was left unfinished", last_date)
                self.stats.record(False, previous.elapsed_time)
        self.storage.save_current_date(self.today)

    def _save(self, state):
        self.storage.save_game_state(self.today, state)

    def _complete(self, elapsed):
        self.stats.record(True, elapsed)
        self.tracker.mark_completed(self.puzzle.id)

    def is_completed(self):
        return self.puzzle is not None and self.tracker.is_completed(self.puzzle.id)

    def load_stats(self):
        return self.stats.load()
