"""
Command line entry points.

    daily-sudoku play [--catalog PATH] [--data-dir DIR] [--date YYYY-MM-DD]
    daily-sudoku generate [--count N] [--start YYYY-MM-DD] [--output PATH] [--seed N]
    daily-sudoku stats [--data-dir DIR]
"""

import argparse
import logging
import random
from datetime import date

from . import config
from .catalog import load_catalog, save_catalog
from .exceptions import CatalogError
from .generator import generate_catalog
from .rules import format_time
from .session import DailySession
from .storage import GameStorage

logger = logging.getLogger(__name__)

EXIT_CATALOG_ERROR = 1
EXIT_NO_PUZZLE = 2


def iso_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from None


def build_parser():
    parser = argparse.ArgumentParser(prog='daily-sudoku', description="One sudoku per day.")
    parser.add_argument('-v', '--verbose', action='store_true', help="debug logging")
    sub = parser.add_subparsers(dest='command')

    play = sub.add_parser('play', help="play today's puzzle")
    play.add_argument('--catalog', default=config.CATALOG_PATH)
    play.add_argument('--data-dir', default=config.DATA_DIR)
    play.add_argument('--date', type=iso_date, default=None, help="play another day's puzzle")

    generate = sub.add_parser('generate', help="generate the puzzle catalog")
    generate.add_argument('--count', type=int, default=config.CATALOG_SIZE)
    generate.add_argument('--start', type=iso_date, default=config.CATALOG_START_DATE)
    generate.add_argument('--output', default=config.CATALOG_PATH)
    generate.add_argument('--seed', type=int, default=None)

    stats = sub.add_parser('stats', help="print lifetime statistics")
    stats.add_argument('--data-dir', default=config.DATA_DIR)
    return parser


def cmd_play(args):
    try:
        puzzles = load_catalog(args.catalog)
    except CatalogError as exc:
        logger.error("Error loading puzzle: %s", exc)
        return EXIT_CATALOG_ERROR

    session = DailySession(puzzles, GameStorage.open(args.data_dir), today=args.date)
    game = session.open()
    if game is None:
        logger.warning("No puzzle found for %s", session.today)

    # Imported here so generate/stats work without a display stack
    from .app import SudokuApp
    SudokuApp(session).run()
    return 0 if game is not None else EXIT_NO_PUZZLE


def cmd_generate(args):
    rng = random.Random(args.seed)
    puzzles = generate_catalog(args.count, args.start, rng)
    save_catalog(puzzles, args.output)
    return 0


def cmd_stats(args):
    stats = GameStorage.open(args.data_dir).load_stats()
    rows = [
        ("Games played", stats.games_played),
        ("Games completed", stats.games_completed),
        ("Completion rate", f"{stats.completion_rate:.1f}%"),
        ("Current streak", stats.current_streak),
        ("Max streak", stats.max_streak),
        ("Average time", format_time(stats.average_time)),
        ("Fastest time", format_time(stats.fastest_time)),
        ("Slowest time", format_time(stats.slowest_time)),
    ]
    for label, value in rows:
        print(f"{label:<16} {value}")
    return 0


COMMANDS = {
    'play': cmd_play,
    'generate': cmd_generate,
    'stats': cmd_stats,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    if args.command is None:
        args = parser.parse_args(['play'])
    return COMMANDS[args.command](args)
