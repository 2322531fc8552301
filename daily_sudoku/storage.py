import datetime
import json
import logging
import os

from . import config
from .models import GameState, GameStats
from .rules import matches_solution
from .stats import parse_stats

logger = logging.getLogger(__name__)


# =========================================================================
# KEY-VALUE STORE
# A JSON file of string keys to string values, written through on every set.
# =========================================================================
class JsonKeyValueStore:
    def __init__(self, filename):
        self.filename = filename
        self.data = self.load()

    def load(self):
        try:
            with open(self.filename, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Could not read %s (%s); starting empty", self.filename, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top level is not an object", self.filename)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def save(self):
        try:
            directory = os.path.dirname(self.filename)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.filename, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2)
        except OSError as exc:
            logger.warning("Could not save %s: %s", self.filename, exc)

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        self.save()

    def remove(self, key):
        if self.data.pop(key, None) is not None:
            self.save()


class MemoryKeyValueStore:
    """Same interface as JsonKeyValueStore, kept in memory only."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, key):
        self.data.pop(key, None)


# =========================================================================
# GAME STORAGE
# Per-date game state, aggregate stats and the last played date.
# =========================================================================
class GameStorage:
    def __init__(self, store):
        self.store = store

    @classmethod
    def open(cls, data_dir=config.DATA_DIR):
        return cls(JsonKeyValueStore(os.path.join(data_dir, config.STORE_FILENAME)))

    @staticmethod
    def game_state_key(date):
        return f"{config.GAME_STATE_KEY}-{date}"

    def _read_json(self, key):
        saved = self.store.get(key)
        if saved is None:
            return None
        try:
            return json.loads(saved)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.warning("Discarding malformed value under %s: %s", key, exc)
            return None

    def save_game_state(self, date, state):
        self.store.set(self.game_state_key(date), json.dumps(state.to_dict()))

    def load_game_state(self, date, puzzle_id=None, clues=None):
        """
        Returns the saved GameState for `date`, or None if there is none,
        it is malformed, it belongs to a different puzzle, or its grid has
        overwritten one of `clues`.
        """
        data = self._read_json(self.game_state_key(date))
        if data is None:
            return None
        try:
            state = GameState.from_dict(data)
        except ValueError as exc:
            logger.warning("Discarding saved game for %s: %s", date, exc)
            return None

        if puzzle_id is not None and state.puzzle_id != puzzle_id:
            logger.info("Saved game for %s is for puzzle %s, not %s; starting fresh",
                        date, state.puzzle_id, puzzle_id)
            return None
        if clues is not None and not matches_solution(clues, state.current_grid):
            logger.warning("Saved game for %s changes a clue cell; starting fresh", date)
            return None
        return state

    def save_stats(self, stats):
        self.store.set(config.STATS_KEY, json.dumps(stats.to_dict()))

    def load_stats(self):
        data = self._read_json(config.STATS_KEY)
        if data is None:
            return GameStats()
        stats = parse_stats(data)
        if stats is None:
            logger.warning("Stored stats do not match any known schema; using defaults")
            return GameStats()
        if 'gamesCompleted' not in data:
            # Legacy record: store it back in the current shape
            self.save_stats(stats)
        return stats

    def save_current_date(self, date):
        self.store.set(config.CURRENT_DATE_KEY, date)

    def load_current_date(self):
        value = self.store.get(config.CURRENT_DATE_KEY)
        if value is None:
            return None
        try:
            datetime.date.fromisoformat(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed current date %r", value)
            return None
        return value
