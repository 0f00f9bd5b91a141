#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from tictac.arena import ArenaArgs, run_arena
from tictac.paths import runs_dir
from tictac.solver import _score_t, best_move
from tictac.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    half = 1.96 * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 10
    arena_games: int = 50
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    ap = argparse.ArgumentParser(description="Time the cold search and a hard-vs-hard arena")
    ap.add_argument("--repeats", type=int, default=Config.repeats)
    ap.add_argument("--arena-games", type=int, default=Config.arena_games)
    ap.add_argument("--tracking", choices=["none", "mlflow"], default="none")
    ns = ap.parse_args()
    cfg = Config(repeats=ns.repeats, arena_games=ns.arena_games, tracking=ns.tracking, log_dir=runs_dir())
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats, "arena_games": cfg.arena_games})
        search_times: List[float] = []
        arena_times: List[float] = []
        for r in range(cfg.repeats):
            _score_t.cache_clear()
            t0 = time.perf_counter()
            best_move([0] * 9)
            search_times.append(time.perf_counter() - t0)
            t1 = time.perf_counter()
            run_arena(ArenaArgs(games=cfg.arena_games, seed=r, log_dir=cfg.log_dir))
            arena_times.append(time.perf_counter() - t1)
        m_search, h_search = ci95(search_times)
        m_arena, h_arena = ci95(arena_times)
        log_metrics({
            "cold_search_mean_s": m_search,
            "cold_search_ci95_half_s": h_search,
            "arena_mean_s": m_arena,
            "arena_ci95_half_s": h_arena,
        })
        logging.info("cold empty-board search: mean=%.4fs ± %.4fs (95%% CI)", m_search, h_search)
        logging.info("arena (%d games): mean=%.4fs ± %.4fs (95%% CI)", cfg.arena_games, m_arena, h_arena)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
