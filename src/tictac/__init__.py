"""tictac package.

Tic-tac-toe engine: outcome evaluation, exhaustive minimax, a difficulty
policy for the computer opponent, a headless game session, self-play and a
simple CLI.

Convenience imports are exposed for common workflows.
"""

from .arena import ArenaArgs, run_arena
from .game_basics import EMPTY, O, X, Verdict, empty_cell_indices, evaluate
from .policy import Difficulty, select_move
from .session import GameSession
from .solver import NO_MOVE, best_move, move_scores

__all__ = [
    "EMPTY",
    "X",
    "O",
    "Verdict",
    "evaluate",
    "empty_cell_indices",
    "best_move",
    "move_scores",
    "NO_MOVE",
    "Difficulty",
    "select_move",
    "GameSession",
    "run_arena",
    "ArenaArgs",
]
