# tests/test_cli.py
import json

from daily_sudoku import config
from daily_sudoku.app import SudokuApp
from daily_sudoku.cli import EXIT_CATALOG_ERROR, EXIT_NO_PUZZLE, main
from daily_sudoku.models import GameStats


def test_generate_writes_catalog(tmp_path):
    output = tmp_path / "sudokus.json"
    assert main(["generate", "--count", "2", "--start", "2026-02-27", "--output", str(output), "--seed", "3"]) == 0

    records = json.loads(output.read_text())
    assert [r["id"] for r in records] == [1, 2]
    assert [r["date"] for r in records] == ["2026-02-27", "2026-02-28"]


def test_play_with_missing_catalog(tmp_path):
    code = main(["play", "--catalog", str(tmp_path / "missing.json"), "--data-dir", str(tmp_path)])
    assert code == EXIT_CATALOG_ERROR


def test_play_without_puzzle_for_date_shows_unavailable_screen(tmp_path, monkeypatch):
    catalog = tmp_path / "sudokus.json"
    main(["generate", "--count", "1", "--start", "2025-09-17", "--output", str(catalog), "--seed", "1"])
    shown = []
    monkeypatch.setattr(SudokuApp, "run", lambda self: shown.append(self.game))

    code = main(["play", "--catalog", str(catalog), "--data-dir", str(tmp_path), "--date", "2031-01-01"])
    assert code == EXIT_NO_PUZZLE
    assert shown == [None]


def test_stats_output(tmp_path, capsys):
    store = tmp_path / config.STORE_FILENAME
    store.write_text(json.dumps({config.STATS_KEY: json.dumps(GameStats(4, 3, 360, 120, 90, 150, 0, 3).to_dict())}))

    assert main(["stats", "--data-dir", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Games played     4" in out
    assert "Completion rate  75.0%" in out
    assert "Fastest time     01:30" in out
    assert "Average time     02:00" in out
