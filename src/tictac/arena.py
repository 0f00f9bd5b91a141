"""
Self-play arena: engine-vs-engine games at chosen difficulties.

Each side picks moves with select_move using its own mark as the maximizer.
Randomness comes from one numpy Generator per run, so a seed reproduces the
whole set of games.
"""
from __future__ import annotations

import csv
import importlib.util
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .game_basics import EMPTY, O, X, evaluate, serialize_board
from .paths import get_git_commit, get_git_is_dirty, runs_dir
from .policy import RandomSource, parse_difficulty, select_move
from .solver import NO_MOVE
from .tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run

ARENA_VERSION = "1.0.0"


@dataclass
class ArenaArgs:
    games: int = 100
    x_difficulty: str = "hard"
    o_difficulty: str = "hard"
    seed: int = 0
    out: Optional[Path] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = field(default_factory=runs_dir)


def play_game(x_difficulty: str, o_difficulty: str, rng: RandomSource) -> Dict[str, Any]:
    difficulties = {X: parse_difficulty(x_difficulty), O: parse_difficulty(o_difficulty)}
    board = [EMPTY] * 9
    moves: List[int] = []
    mover = X
    verdict = evaluate(board)
    while not verdict.is_terminal:
        mv = select_move(board, difficulties[mover], rng, mark=mover)
        if mv == NO_MOVE:
            break
        board[mv] = mover
        moves.append(mv)
        mover = O if mover == X else X
        verdict = evaluate(board)
    return {
        'moves': ''.join(map(str, moves)),
        'winner': verdict.winner,
        'plies': len(moves),
        'final_board': serialize_board(board),
    }


def ci95_half(values: np.ndarray) -> float:
    if values.size < 2:
        return 0.0
    return float(1.96 * values.std() / np.sqrt(values.size))


def summarize(rows: List[Dict[str, Any]]) -> Dict[str, float]:
    winners = np.array([r['winner'] for r in rows], dtype=int)
    plies = np.array([r['plies'] for r in rows], dtype=float)
    n = max(len(rows), 1)
    x_won = (winners == X).astype(float)
    return {
        'games': len(rows),
        'x_wins': int((winners == X).sum()),
        'o_wins': int((winners == O).sum()),
        'draws': int((winners == EMPTY).sum()),
        'x_win_rate': float(x_won.sum() / n),
        'o_win_rate': float((winners == O).sum() / n),
        'draw_rate': float((winners == EMPTY).sum() / n),
        'x_win_rate_ci95_half': ci95_half(x_won),
        'mean_plies': float(plies.mean()) if plies.size else 0.0,
    }


def _write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    fnames = ['game', 'moves', 'winner', 'plies', 'final_board']
    with path.open('w', newline='') as f:
        w = csv.DictWriter(f, fieldnames=fnames)
        w.writeheader()
        for r in rows:
            w.writerow(r)


def _write_outputs(args: ArenaArgs, rows: List[Dict[str, Any]], summary: Dict[str, float]) -> Dict[str, Optional[str]]:
    assert args.out is not None
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (
        importlib.util.find_spec('pandas') is not None
        and importlib.util.find_spec('pyarrow') is not None
    )
    msg = "Parquet dependencies not available (install pandas and pyarrow, e.g. pip install .[parquet])."
    if fmt == "parquet" and not have_parquet:
        # Only parquet was asked for; fail before writing anything
        raise RuntimeError(msg)
    args.out.mkdir(parents=True, exist_ok=True)

    csv_path = args.out / 'arena_games.csv'
    parquet_path = args.out / 'arena_games.parquet'
    files: Dict[str, Optional[str]] = {'csv': None, 'parquet': None}
    if fmt in {"csv", "both"}:
        _write_csv(csv_path, rows)
        files['csv'] = str(csv_path)
        logging.info("Wrote %s (%d rows)", csv_path, len(rows))
    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(rows).to_parquet(parquet_path)
            files['parquet'] = str(parquet_path)
            logging.info("Wrote %s", parquet_path)
        else:
            logging.warning("%s Proceeding with CSV only.", msg)

    manifest = {
        'arena_version': ARENA_VERSION,
        'created_at': datetime.now(timezone.utc).isoformat(),
        'args': {
            'games': args.games,
            'x_difficulty': parse_difficulty(args.x_difficulty).value,
            'o_difficulty': parse_difficulty(args.o_difficulty).value,
            'seed': args.seed,
            'format': fmt,
        },
        'git_commit': get_git_commit(),
        'git_is_dirty': get_git_is_dirty(),
        'summary': summary,
        'files': files,
    }
    (args.out / 'manifest.json').write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json to %s", args.out)
    return files


def run_arena(args: ArenaArgs) -> Dict[str, float]:
    if args.games < 1:
        raise ValueError(f"games must be positive, got {args.games}")
    # Fail on bad difficulties before playing anything
    parse_difficulty(args.x_difficulty)
    parse_difficulty(args.o_difficulty)

    with maybe_mlflow_run(args.tracking == "mlflow", run_name="arena", log_dir=args.log_dir):
        log_params({
            'games': args.games,
            'x_difficulty': args.x_difficulty,
            'o_difficulty': args.o_difficulty,
            'seed': args.seed,
        })
        rng = np.random.default_rng(args.seed)
        logging.info(
            "Playing %d games: X=%s vs O=%s (seed=%d)",
            args.games, args.x_difficulty, args.o_difficulty, args.seed,
        )
        rows: List[Dict[str, Any]] = []
        for g in range(args.games):
            rows.append({'game': g, **play_game(args.x_difficulty, args.o_difficulty, rng)})
        summary = summarize(rows)
        logging.info(
            "x_wins=%d o_wins=%d draws=%d mean_plies=%.2f",
            summary['x_wins'], summary['o_wins'], summary['draws'], summary['mean_plies'],
        )
        log_metrics({k: float(v) for k, v in summary.items()})
        if args.out is not None:
            files = _write_outputs(args, rows, summary)
            log_artifact(args.out / 'manifest.json')
            for p in files.values():
                if p is not None:
                    log_artifact(Path(p))
    return summary
