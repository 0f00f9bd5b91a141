from __future__ import annotations

import argparse
import logging
import random
import time
from pathlib import Path
from typing import List

from .arena import ArenaArgs, run_arena
from .game_basics import (
    O,
    X,
    current_player,
    deserialize_board,
    evaluate,
    format_board,
    is_valid_state,
    mark_symbol,
)
from .paths import runs_dir
from .policy import Difficulty, select_move
from .session import MODES, VS_COMPUTER, GameSession
from .solver import best_move, move_scores
from .tactics import blocking_moves, fork_moves, immediate_winning_moves

BOARD_HELP = "Board string, 9 chars: 0/. empty, 1/X first player, 2/O second player"
DIFFICULTIES = [d.value for d in Difficulty]


def _mark_arg(value: str) -> int:
    v = value.strip().upper()
    if v in ("X", "1"):
        return X
    if v in ("O", "2"):
        return O
    raise argparse.ArgumentTypeError(f"invalid mark: {value!r} (use X or O)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tictac", description="Tic-tac-toe engine and terminal game")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_eval = sub.add_parser("evaluate", help="Report win/draw/ongoing for a board")
    p_eval.add_argument("--board", required=True, help=BOARD_HELP)

    p_best = sub.add_parser("best-move", help="Best move by exhaustive search")
    p_best.add_argument("--board", required=True, help=BOARD_HELP)
    p_best.add_argument("--mark", type=_mark_arg, default=None,
                        help="Mark to search for (default: side to move)")

    p_sel = sub.add_parser("select", help="Computer move at a difficulty")
    p_sel.add_argument("--board", required=True, help=BOARD_HELP)
    p_sel.add_argument("--difficulty", choices=DIFFICULTIES, default="hard")
    p_sel.add_argument("--mark", type=_mark_arg, default=None,
                       help="Computer's mark (default: side to move)")
    p_sel.add_argument("--seed", type=int, default=None, help="Seed for the random-move branch")

    p_tac = sub.add_parser("tactics", help="List immediate wins, blocks and forks for side-to-move")
    p_tac.add_argument("--board", required=True, help=BOARD_HELP)

    p_play = sub.add_parser("play", help="Play an interactive game in the terminal")
    p_play.add_argument("--mode", choices=MODES, default=VS_COMPUTER)
    p_play.add_argument("--difficulty", choices=DIFFICULTIES, default="hard")
    p_play.add_argument("--computer-mark", type=_mark_arg, default=O,
                        help="Mark played by the computer (default: O)")
    p_play.add_argument("--seed", type=int, default=None, help="Seed for the random-move branch")
    p_play.add_argument("--think-delay", type=float, default=0.0,
                        help="Seconds to pause before showing the computer's move")

    p_arena = sub.add_parser("arena", help="Engine-vs-engine self-play")
    p_arena.add_argument("--games", type=int, default=100)
    p_arena.add_argument("--x-difficulty", choices=DIFFICULTIES, default="hard")
    p_arena.add_argument("--o-difficulty", choices=DIFFICULTIES, default="hard")
    p_arena.add_argument("--seed", type=int, default=0)
    p_arena.add_argument("--out", type=Path, default=None,
                         help="Directory for arena_games.csv and manifest.json (default: no export)")
    p_arena.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both; parquet requires pandas+pyarrow",
    )
    p_arena.add_argument("--tracking", choices=["none", "mlflow"], default="none",
                         help="Experiment tracking backend")
    p_arena.add_argument("--log-dir", type=Path, default=None,
                         help="Directory for tracking logs (default: $TICTAC_RUNS_DIR or ./runs)")
    return p


def _read_board(raw: str) -> List[int]:
    b = deserialize_board(raw)
    if not is_valid_state(b):
        raise ValueError("Board is not a valid reachable state.")
    return b


def _run_play(ns: argparse.Namespace) -> int:
    rng = random.Random(ns.seed)
    session = GameSession(mode=ns.mode, difficulty=ns.difficulty,
                          computer_mark=ns.computer_mark, rng=rng)
    print("Cells are numbered 0-8, row by row. Commands: jump N, history, reset, quit")
    while True:
        print(format_board(session.board))
        verdict = session.verdict
        if verdict.is_terminal:
            if verdict.winner:
                print(f"Winner: {mark_symbol(verdict.winner)}")
            else:
                print("It's a draw!")
        elif session.is_computer_turn:
            if ns.think_delay > 0:
                time.sleep(ns.think_delay)
            mv = session.computer_move()
            print(f"Computer ({mark_symbol(session.computer_mark)}) plays {mv}")
            continue
        else:
            print(f"Next player: {mark_symbol(session.next_mark)}")
        try:
            line = input("> ").strip().lower()
        except EOFError:
            return 0
        if line in ("q", "quit", "exit"):
            return 0
        if line == "history":
            for i, desc in enumerate(session.move_descriptions()):
                marker = "*" if i == session.current_move else " "
                print(f"{marker} {i}: {desc}")
            continue
        if line == "reset":
            session.reset()
            continue
        try:
            if line.startswith("jump"):
                session.jump_to(int(line.split()[1]))
            else:
                session.play(int(line))
        except (ValueError, IndexError) as e:
            logging.error("%s", e if str(e) else "Invalid input")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictac"))
        except Exception:
            print("unknown")
        return 0

    try:
        if ns.cmd == "evaluate":
            v = evaluate(deserialize_board(ns.board))
            logging.info("outcome=%s winner=%s", v.outcome, mark_symbol(v.winner))
            return 0

        if ns.cmd == "best-move":
            b = _read_board(ns.board)
            mark = ns.mark if ns.mark is not None else current_player(b)
            logging.info("mark=%s move=%d scores=%s", mark_symbol(mark), best_move(b, mark), move_scores(b, mark))
            return 0

        if ns.cmd == "select":
            b = _read_board(ns.board)
            mark = ns.mark if ns.mark is not None else current_player(b)
            mv = select_move(b, ns.difficulty, random.Random(ns.seed), mark=mark)
            logging.info("mark=%s difficulty=%s move=%d", mark_symbol(mark), ns.difficulty, mv)
            return 0

        if ns.cmd == "tactics":
            b = _read_board(ns.board)
            p = current_player(b)
            logging.info(
                "to_move=%s wins=%s blocks=%s forks=%s",
                mark_symbol(p),
                immediate_winning_moves(b, p),
                blocking_moves(b, p),
                fork_moves(b, p),
            )
            return 0

        if ns.cmd == "play":
            return _run_play(ns)

        if ns.cmd == "arena":
            run_arena(ArenaArgs(
                games=ns.games,
                x_difficulty=ns.x_difficulty,
                o_difficulty=ns.o_difficulty,
                seed=ns.seed,
                out=ns.out,
                format=ns.format,
                tracking=ns.tracking,
                log_dir=ns.log_dir if ns.log_dir is not None else runs_dir(),
            ))
            return 0
    except (ValueError, RuntimeError) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
