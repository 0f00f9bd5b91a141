"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Notes:
- State is a sequence of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one player's turn).
- Malformed boards (wrong length, unknown cell values) raise ValueError.
"""
from dataclasses import dataclass
from typing import List, Sequence, Tuple

EMPTY = 0
X = 1
O = 2
MARKS = (X, O)

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]

ONGOING = "ongoing"
WIN = "win"
DRAW = "draw"

_CELL_CHARS = {
    '0': EMPTY, '.': EMPTY, '-': EMPTY, '_': EMPTY,
    '1': X, 'x': X, 'X': X,
    '2': O, 'o': O, 'O': O,
}
_SYMBOLS = {EMPTY: '.', X: 'X', O: 'O'}


@dataclass(frozen=True)
class Verdict:
    outcome: str
    winner: int = EMPTY

    @property
    def is_terminal(self) -> bool:
        return self.outcome != ONGOING


def validate_board(board: Sequence[int]) -> None:
    if len(board) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(board)}")
    for i, v in enumerate(board):
        if v not in (EMPTY, X, O):
            raise ValueError(f"Invalid cell value at {i}: {v!r}")


def validate_mark(mark: int) -> None:
    if mark not in MARKS:
        raise ValueError(f"Invalid mark: {mark!r} (expected {X} or {O})")


def other_mark(mark: int) -> int:
    return O if mark == X else X


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> List[int]:
    raw = board_str.strip()
    if len(raw) != 9:
        raise ValueError(f"Board string must have 9 characters, got {len(raw)}")
    try:
        return [_CELL_CHARS[c] for c in raw]
    except KeyError as e:
        raise ValueError(f"Invalid board character: {e.args[0]!r}") from None


def format_board(board: Sequence[int]) -> str:
    rows = []
    for r in range(3):
        rows.append(' '.join(_SYMBOLS[board[3 * r + c]] for c in range(3)))
    return '\n'.join(rows)


def mark_symbol(mark: int) -> str:
    return _SYMBOLS[mark]


def get_winner(board: Sequence[int]) -> int:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return EMPTY


def is_draw(board: Sequence[int]) -> bool:
    return EMPTY not in board and get_winner(board) == EMPTY


def evaluate(board: Sequence[int]) -> Verdict:
    """Classify a board as a win for one mark, a draw, or still ongoing.

    When several lines are complete (not reachable in a real game) the mark
    of the first complete line in WIN_PATTERNS order is reported.
    """
    validate_board(board)
    w = get_winner(board)
    if w != EMPTY:
        return Verdict(WIN, w)
    if EMPTY not in board:
        return Verdict(DRAW)
    return Verdict(ONGOING)


def empty_cell_indices(board: Sequence[int]) -> List[int]:
    validate_board(board)
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return list(board).count(X), list(board).count(O)


def is_valid_state(board: Sequence[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False
    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))
    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O
