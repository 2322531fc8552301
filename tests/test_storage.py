# tests/test_storage.py
import json

from daily_sudoku import config
from daily_sudoku.models import GameState, GameStats
from daily_sudoku.storage import GameStorage, JsonKeyValueStore, MemoryKeyValueStore


def sample_state(puzzle, clock):
    grid = [row[:] for row in puzzle.puzzle]
    grid[0][2] = 4
    return GameState(
        current_grid=grid, puzzle_id=puzzle.id, selected_cell=(0, 2),
        is_completed=False, has_started=True, start_time=int(clock() * 1000),
        elapsed_time=37, mistakes=2,
    )


def test_game_state_round_trip(tmp_path, puzzle, clock):
    storage = GameStorage.open(str(tmp_path))
    state = sample_state(puzzle, clock)
    storage.save_game_state(puzzle.date, state)

    reopened = GameStorage.open(str(tmp_path))
    assert reopened.load_game_state(puzzle.date, puzzle.id) == state


def test_game_state_stored_under_date_key(puzzle, clock):
    store = MemoryKeyValueStore()
    GameStorage(store).save_game_state("2025-09-17", sample_state(puzzle, clock))

    raw = json.loads(store.get(f"{config.GAME_STATE_KEY}-2025-09-17"))
    assert raw["puzzleId"] == puzzle.id
    assert raw["selectedCell"] == {"row": 0, "col": 2}
    assert raw["elapsedTime"] == 37


def test_mismatched_puzzle_id_means_no_saved_state(puzzle, clock):
    storage = GameStorage(MemoryKeyValueStore())
    storage.save_game_state(puzzle.date, sample_state(puzzle, clock))
    assert storage.load_game_state(puzzle.date, puzzle.id + 1) is None
    assert storage.load_game_state("2025-09-18", puzzle.id) is None


def test_malformed_game_state_falls_back(puzzle):
    store = MemoryKeyValueStore({
        f"{config.GAME_STATE_KEY}-a": "{not json",
        f"{config.GAME_STATE_KEY}-b": json.dumps({"currentGrid": [[1, 2]], "puzzleId": 1}),
        f"{config.GAME_STATE_KEY}-c": json.dumps({"currentGrid": puzzle.puzzle}),
    })
    storage = GameStorage(store)
    assert storage.load_game_state("a") is None
    assert storage.load_game_state("b") is None
    assert storage.load_game_state("c") is None


def test_non_finite_numbers_in_game_state_fall_back(puzzle, clock):
    record = sample_state(puzzle, clock).to_dict()
    record["startTime"] = float("inf")
    store = MemoryKeyValueStore({f"{config.GAME_STATE_KEY}-{puzzle.date}": json.dumps(record)})
    assert GameStorage(store).load_game_state(puzzle.date, puzzle.id) is None

    record["startTime"] = 0
    record["elapsedTime"] = float("nan")
    store.set(f"{config.GAME_STATE_KEY}-{puzzle.date}", json.dumps(record))
    assert GameStorage(store).load_game_state(puzzle.date, puzzle.id) is None


def test_changed_clue_means_no_saved_state(puzzle, clock):
    storage = GameStorage(MemoryKeyValueStore())
    state = sample_state(puzzle, clock)
    state.current_grid[0][0] = 9
    storage.save_game_state(puzzle.date, state)

    assert storage.load_game_state(puzzle.date, puzzle.id) == state
    assert storage.load_game_state(puzzle.date, puzzle.id, puzzle.puzzle) is None

    state.current_grid[0][0] = 0
    storage.save_game_state(puzzle.date, state)
    assert storage.load_game_state(puzzle.date, puzzle.id, puzzle.puzzle) is None


def test_stats_default_and_round_trip(tmp_path):
    storage = GameStorage.open(str(tmp_path))
    assert storage.load_stats() == GameStats()

    stats = GameStats(3, 3, 360, 120, 90, 150, 3, 3)
    storage.save_stats(stats)
    assert GameStorage.open(str(tmp_path)).load_stats() == stats


def test_legacy_stats_are_migrated_and_rewritten():
    legacy = {
        "gamesPlayed": 4, "gamesWon": 3, "currentStreak": 1, "maxStreak": 2,
        "averageTime": 100, "totalTime": 300, "fastestTime": 70,
    }
    store = MemoryKeyValueStore({config.STATS_KEY: json.dumps(legacy)})
    stats = GameStorage(store).load_stats()

    assert stats.games_completed == 3
    assert stats.slowest_time == 0
    assert stats.games_played == 4
    assert stats.fastest_time == 70
    rewritten = json.loads(store.get(config.STATS_KEY))
    assert rewritten["gamesCompleted"] == 3
    assert "gamesWon" not in rewritten


def test_malformed_stats_fall_back_to_defaults():
    store = MemoryKeyValueStore({config.STATS_KEY: "][" })
    assert GameStorage(store).load_stats() == GameStats()
    store.set(config.STATS_KEY, json.dumps({"wins": 3}))
    assert GameStorage(store).load_stats() == GameStats()


def test_non_finite_stats_fall_back_to_defaults():
    record = GameStats(4, 3, 360, 120, 90, 150, 0, 3).to_dict()
    record["fastestTime"] = float("inf")
    store = MemoryKeyValueStore({config.STATS_KEY: json.dumps(record)})
    assert GameStorage(store).load_stats() == GameStats()

    record["fastestTime"] = 90
    record["averageTime"] = float("nan")
    store.set(config.STATS_KEY, json.dumps(record))
    assert GameStorage(store).load_stats() == GameStats()


def test_corrupt_store_file_starts_empty(tmp_path):
    path = tmp_path / config.STORE_FILENAME
    path.write_text("this is not json")
    store = JsonKeyValueStore(str(path))
    assert store.data == {}
    store.set("k", "v")
    assert json.loads(path.read_text()) == {"k": "v"}


def test_store_remove(tmp_path):
    store = JsonKeyValueStore(str(tmp_path / "nested" / "store.json"))
    store.set("a", "1")
    store.remove("a")
    assert JsonKeyValueStore(store.filename).get("a") is None


def test_current_date(tmp_path):
    storage = GameStorage.open(str(tmp_path))
    assert storage.load_current_date() is None
    storage.save_current_date("2025-09-17")
    assert GameStorage.open(str(tmp_path)).load_current_date() == "2025-09-17"

    GameStorage.open(str(tmp_path)).save_current_date("yesterday")
    assert GameStorage.open(str(tmp_path)).load_current_date() is None
