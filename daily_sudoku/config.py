"""
Central configuration for the daily sudoku.

Difficulty tuning, storage keys, catalog defaults and window geometry
all live here as plain module-level constants.
"""

import os
from datetime import date

# -------------------------------------------------------------------------
# PUZZLE GENERATION
# -------------------------------------------------------------------------
# Number of cells blanked from a solved grid (not clues remaining)
DIFFICULTY_REMOVALS = {
    'easy': 35,
    'medium': 45,
    'hard': 55,
}
DIFFICULTIES = ('easy', 'medium', 'hard')
DEFAULT_DIFFICULTY = 'medium'

# Whole-grid regeneration attempts before giving up
MAX_FILL_ATTEMPTS = 5

# -------------------------------------------------------------------------
# CATALOG
# -------------------------------------------------------------------------
CATALOG_SIZE = 1000
CATALOG_START_DATE = date(2025, 9, 17)
CATALOG_PATH = os.path.join('public', 'sudokus.json')

# -------------------------------------------------------------------------
# STORAGE
# -------------------------------------------------------------------------
GAME_STATE_KEY = 'daily-sudoku-game-state'
STATS_KEY = 'daily-sudoku-stats'
CURRENT_DATE_KEY = 'daily-sudoku-current-date'
SERVER_STATE_KEY = 'daily-sudoku-server-state'

TRACKER_MAX_AGE = 365 * 24 * 60 * 60  # 1 year, in seconds

DATA_DIR = os.environ.get('DAILY_SUDOKU_HOME',
                          os.path.join(os.path.expanduser('~'), '.daily_sudoku'))
STORE_FILENAME = 'storage.json'

# -------------------------------------------------------------------------
# FRONT-END
# -------------------------------------------------------------------------
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 650
GRID_SIZE = 450
GRID_X = 30
GRID_Y = 130
TICK_INTERVAL_MS = 1000
FPS = 60
