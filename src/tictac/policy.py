"""
Difficulty policy: the best move, sometimes replaced by a uniformly random legal move.
"""
import random
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence, Union

from .game_basics import X, empty_cell_indices, validate_mark
from .solver import NO_MOVE, best_move


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


RANDOM_MOVE_PROBABILITY = {
    Difficulty.EASY: 0.5,
    Difficulty.MEDIUM: 0.2,
    Difficulty.HARD: 0.0,
}


class RandomSource(Protocol):
    """Anything with random() and choice(), e.g. random.Random or numpy's Generator."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[int]) -> Any: ...


def parse_difficulty(value: Union[str, Difficulty]) -> Difficulty:
    try:
        return Difficulty(value)
    except ValueError:
        choices = ", ".join(d.value for d in Difficulty)
        raise ValueError(f"Unknown difficulty: {value!r} (expected one of {choices})") from None


def select_move(
    board: Sequence[int],
    difficulty: Union[str, Difficulty],
    rng: Optional[RandomSource] = None,
    mark: int = X,
) -> int:
    """Pick the computer's next cell for `mark` at the given difficulty.

    Hard always plays the best move and never draws from `rng`. Medium and
    Easy first draw `rng.random()`; below the difficulty's probability they
    play `rng.choice` over the empty cells instead of the best move. A full
    board returns NO_MOVE without drawing.
    """
    diff = parse_difficulty(difficulty)
    validate_mark(mark)
    empties = empty_cell_indices(board)
    if not empties:
        return NO_MOVE
    p = RANDOM_MOVE_PROBABILITY[diff]
    if p > 0.0:
        if rng is None:
            rng = random.Random()
        if rng.random() < p:
            return int(rng.choice(empties))
    return best_move(board, mark)


def move_distribution(
    board: Sequence[int],
    difficulty: Union[str, Difficulty],
    mark: int = X,
) -> List[float]:
    """Exact probability of each cell under select_move; all zeros on a full board."""
    diff = parse_difficulty(difficulty)
    legal = empty_cell_indices(board)
    pol = [0.0] * 9
    if not legal:
        return pol
    eps = RANDOM_MOVE_PROBABILITY[diff]
    for i in legal:
        pol[i] = eps / len(legal)
    pol[best_move(board, mark)] += 1.0 - eps
    return pol
