"""
Exhaustive minimax for the computer opponent, scored from the searching side's perspective.
Scoring:
- A win for the searching mark scores WIN_SCORE - depth, a loss depth - WIN_SCORE, a draw 0.
- Depth counts plies below the root move, so faster wins and slower losses rank higher.
- Among equal root scores the lowest cell index is kept.
Each branch works on a fresh tuple; the caller's board is never written to.
"""
from functools import lru_cache
from typing import List, Optional, Sequence

from .game_basics import EMPTY, X, get_winner, other_mark, validate_board, validate_mark

NO_MOVE = -1
WIN_SCORE = 10


def legal_moves(board_t: tuple) -> List[int]:
    return [i for i, v in enumerate(board_t) if v == EMPTY]


def apply_move_t(board_t: tuple, idx: int, player: int) -> tuple:
    lst = list(board_t)
    lst[idx] = player
    return tuple(lst)


@lru_cache(maxsize=None)
def _score_t(board_t: tuple, depth: int, maximizing: bool, mark: int) -> int:
    w = get_winner(board_t)
    if w == mark:
        return WIN_SCORE - depth
    if w != EMPTY:
        return depth - WIN_SCORE
    moves = legal_moves(board_t)
    if not moves:
        return 0
    mover = mark if maximizing else other_mark(mark)
    scores = [
        _score_t(apply_move_t(board_t, mv, mover), depth + 1, not maximizing, mark)
        for mv in moves
    ]
    return max(scores) if maximizing else min(scores)


def score(board: Sequence[int], depth: int = 0, maximizing: bool = True, mark: int = X) -> int:
    """Minimax value of `board` for `mark`, with `maximizing` telling whose turn it is."""
    validate_board(board)
    validate_mark(mark)
    return _score_t(tuple(board), depth, maximizing, mark)


def move_scores(board: Sequence[int], mark: int = X) -> List[Optional[int]]:
    """Root score of every cell for `mark` moving now; None for occupied cells."""
    validate_board(board)
    validate_mark(mark)
    board_t = tuple(board)
    scores: List[Optional[int]] = [None] * 9
    for mv in legal_moves(board_t):
        scores[mv] = _score_t(apply_move_t(board_t, mv, mark), 0, False, mark)
    return scores


def best_move(board: Sequence[int], mark: int = X) -> int:
    """Best cell for `mark` to occupy next, or NO_MOVE on a full board."""
    best_idx = NO_MOVE
    best_score: Optional[int] = None
    for i, s in enumerate(move_scores(board, mark)):
        if s is None:
            continue
        if best_score is None or s > best_score:
            best_score = s
            best_idx = i
    return best_idx
