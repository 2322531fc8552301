"""Daily sudoku: one puzzle per calendar date, played in a pygame window."""

from .catalog import find_puzzle, get_todays_puzzle, load_catalog
from .game import Direction, GameStateMachine, GameStatus
from .generator import GridFiller, PuzzleCarver, PuzzleGenerator, generate_catalog
from .models import GameState, GameStats, Puzzle
from .rules import is_complete, is_valid_placement
from .session import DailySession
from .stats import StatsAggregator, record_outcome
from .storage import GameStorage, JsonKeyValueStore, MemoryKeyValueStore
from .tracker import CompletionTracker

__version__ = '1.0.0'
