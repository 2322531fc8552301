"""
Cumulative statistics: folding game outcomes and loading stored records.

Stored records come in two shapes. The current one carries every field
of GameStats. The legacy one used `gamesWon` instead of
`gamesCompleted` and had no `slowestTime`; it is upgraded on load.
Anything else is discarded in favour of zeroed stats.
"""

import logging
import math
import threading
from dataclasses import replace

from .models import STATS_FIELDS, GameStats

logger = logging.getLogger(__name__)

LEGACY_STATS_FIELDS = (
    'gamesPlayed', 'gamesWon', 'totalTime', 'averageTime',
    'fastestTime', 'currentStreak', 'maxStreak',
)


def record_outcome(stats, completed, elapsed_seconds):
    """Returns a new GameStats with one finished (or abandoned) game folded in."""
    stats = replace(stats, games_played=stats.games_played + 1)

    if not completed:
        return replace(stats, current_streak=0)

    first_completion = stats.games_completed == 0
    games_completed = stats.games_completed + 1
    current_streak = stats.current_streak + 1
    total_time = stats.total_time + elapsed_seconds

    fastest = stats.fastest_time
    if first_completion or elapsed_seconds < fastest:
        fastest = elapsed_seconds
    slowest = stats.slowest_time
    if first_completion or elapsed_seconds > slowest:
        slowest = elapsed_seconds

    return replace(
        stats,
        games_completed=games_completed,
        current_streak=current_streak,
        max_streak=max(stats.max_streak, current_streak),
        total_time=total_time,
        average_time=total_time / games_completed,
        fastest_time=fastest,
        slowest_time=slowest,
    )


def _numbers(data, fields):
    values = {}
    for key in fields:
        value = data.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
        values[key] = value
    return values


def parse_stats(data):
    """
    Parses a stored stats record: current schema first, then the one
    known legacy shape. Returns None if neither matches.
    """
    if not isinstance(data, dict):
        return None

    current = _numbers(data, STATS_FIELDS)
    if current is not None:
        return GameStats(
            games_played=current['gamesPlayed'],
            games_completed=current['gamesCompleted'],
            total_time=current['totalTime'],
            average_time=current['averageTime'],
            fastest_time=current['fastestTime'],
            slowest_time=current['slowestTime'],
            current_streak=current['currentStreak'],
            max_streak=current['maxStreak'],
        )

    if 'gamesCompleted' in data or 'slowestTime' in data:
        return None
    legacy = _numbers(data, LEGACY_STATS_FIELDS)
    if legacy is None:
        return None

    logger.info("Migrating legacy stats record (gamesWon=%s)", legacy['gamesWon'])
    return GameStats(
        games_played=legacy['gamesPlayed'],
        games_completed=legacy['gamesWon'],
        total_time=legacy['totalTime'],
        average_time=legacy['averageTime'],
        fastest_time=legacy['fastestTime'],
        slowest_time=0,
        current_streak=legacy['currentStreak'],
        max_streak=legacy['maxStreak'],
    )


class StatsAggregator:
    """Read-modify-write of the stored stats record, one update at a time."""

    def __init__(self, storage):
        self.storage = storage
        self._lock = threading.Lock()

    def load(self):
        return self.storage.load_stats()

    def record(self, completed, elapsed_seconds):
        with self._lock:
            stats = record_outcome(self.storage.load_stats(), completed, elapsed_seconds)
            self.storage.save_stats(stats)
        logger.info("Recorded %s game (%ss): played=%d completed=%d streak=%d",
                    "completed" if completed else "abandoned", elapsed_seconds,
                    stats.games_played, stats.games_completed, stats.current_streak)
        return stats
