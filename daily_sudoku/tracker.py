"""
Tracks which puzzle ids have been completed, independently of the
per-date game records.

The record is kept as an opaque token (base64 of the JSON state) with a
one-year expiry; an expired or undecodable token reads as a fresh state.
"""

import base64
import binascii
import json
import logging
import time
from datetime import date

from . import config

logger = logging.getLogger(__name__)


def default_state(today=None):
    return {
        'currentPuzzleId': 1,
        'completedPuzzles': [],
        'lastPlayedDate': (today or date.today()).isoformat(),
    }


def encode_token(state):
    return base64.b64encode(json.dumps(state).encode('utf-8')).decode('ascii')


def decode_token(token):
    """Raises ValueError if the token does not hold a valid state."""
    if not isinstance(token, str):
        raise ValueError(f"token must be a string, not {type(token).__name__}")
    try:
        state = json.loads(base64.b64decode(token.encode('ascii'), validate=True).decode('utf-8'))
    except (binascii.Error, UnicodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"undecodable token: {exc}") from None

    if (not isinstance(state, dict)
            or not isinstance(state.get('currentPuzzleId'), int)
            or not isinstance(state.get('completedPuzzles'), list)
            or not all(isinstance(i, int) for i in state['completedPuzzles'])
            or not isinstance(state.get('lastPlayedDate'), str)):
        raise ValueError("token does not hold a tracker state")
    return state


class CompletionTracker:
    def __init__(self, store, clock=time.time, max_age=config.TRACKER_MAX_AGE):
        self.store = store
        self.clock = clock
        self.max_age = max_age

    def today(self):
        return date.fromtimestamp(self.clock())

    def get_state(self):
        saved = self.store.get(config.SERVER_STATE_KEY)
        if saved:
            try:
                record = json.loads(saved)
                if record['expires'] > self.clock():
                    return decode_token(record['value'])
                logger.info("Completion token expired; starting fresh")
            except (ValueError, KeyError, TypeError) as exc:
                logger.warning("Failed to load completion state: %s", exc)

        return default_state(self.today())

    def set_state(self, state):
        record = {
            'value': encode_token(state),
            'expires': self.clock() + self.max_age,
        }
        self.store.set(config.SERVER_STATE_KEY, json.dumps(record))

    def set_current(self, puzzle_id):
        state = self.get_state()
        if state['currentPuzzleId'] != puzzle_id:
            state['currentPuzzleId'] = puzzle_id
            self.set_state(state)

    def mark_completed(self, puzzle_id):
        state = self.get_state()

        if puzzle_id not in state['completedPuzzles']:
            state['completedPuzzles'].append(puzzle_id)
            state['lastPlayedDate'] = self.today().isoformat()
            self.set_state(state)

    def is_completed(self, puzzle_id):
        return puzzle_id in self.get_state()['completedPuzzles']
