import csv
import json
from pathlib import Path

import numpy as np
import pytest

from tictac.arena import ArenaArgs, play_game, run_arena, summarize
from tictac.game_basics import EMPTY, X, deserialize_board, evaluate


def test_hard_vs_hard_is_always_a_draw(tmp_path: Path):
    summary = run_arena(ArenaArgs(games=5, log_dir=tmp_path))
    assert summary['games'] == 5
    assert summary['draws'] == 5
    assert summary['x_wins'] == summary['o_wins'] == 0
    assert summary['mean_plies'] == 9.0


def test_easy_never_beats_hard(tmp_path: Path):
    summary = run_arena(ArenaArgs(games=20, x_difficulty="easy", o_difficulty="hard", seed=1, log_dir=tmp_path))
    assert summary['x_wins'] == 0
    assert summary['o_wins'] + summary['draws'] == 20
    assert 0.0 <= summary['x_win_rate_ci95_half'] <= 1.0


def test_play_game_record_is_consistent():
    rec = play_game("easy", "medium", np.random.default_rng(5))
    moves = [int(c) for c in rec['moves']]
    assert len(set(moves)) == len(moves) == rec['plies']
    board = deserialize_board(rec['final_board'])
    assert evaluate(board).is_terminal
    assert evaluate(board).winner == rec['winner']
    assert sum(1 for v in board if v != EMPTY) == rec['plies']


def test_same_seed_same_games(tmp_path: Path):
    a = run_arena(ArenaArgs(games=10, x_difficulty="easy", o_difficulty="easy", seed=42, out=tmp_path / "a"))
    b = run_arena(ArenaArgs(games=10, x_difficulty="easy", o_difficulty="easy", seed=42, out=tmp_path / "b"))
    assert a == b
    assert (tmp_path / "a" / "arena_games.csv").read_bytes() == (tmp_path / "b" / "arena_games.csv").read_bytes()


def test_export_writes_csv_and_manifest(tmp_path: Path):
    out = tmp_path / "arena"
    run_arena(ArenaArgs(games=3, x_difficulty="medium", seed=7, out=out))
    with (out / "arena_games.csv").open() as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 3
    assert set(rows[0]) == {'game', 'moves', 'winner', 'plies', 'final_board'}
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest['args']['games'] == 3
    assert manifest['args']['x_difficulty'] == "medium"
    assert manifest['summary']['games'] == 3
    assert manifest['files']['csv'] == str(out / "arena_games.csv")
    assert "created_at" in manifest


def test_parquet_only_without_backend_fails_early(tmp_path: Path, monkeypatch):
    import importlib.util

    real = importlib.util.find_spec
    monkeypatch.setattr(importlib.util, "find_spec", lambda name, *a: None if name in ("pandas", "pyarrow") else real(name, *a))
    out = tmp_path / "pq"
    with pytest.raises(RuntimeError):
        run_arena(ArenaArgs(games=1, out=out, format="parquet"))
    assert not (out / "manifest.json").exists()


@pytest.mark.parametrize("kwargs", [{'games': 0}, {'x_difficulty': "expert"}, {'o_difficulty': ""}])
def test_bad_args_raise(kwargs):
    with pytest.raises(ValueError):
        run_arena(ArenaArgs(**kwargs))


def test_summarize_rates():
    rows = [{'winner': X, 'plies': 5}, {'winner': EMPTY, 'plies': 9}]
    s = summarize(rows)
    assert s['x_win_rate'] == 0.5
    assert s['draw_rate'] == 0.5
    assert s['mean_plies'] == 7.0
