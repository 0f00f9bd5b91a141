from typing import List

import pytest

from tictac.game_basics import EMPTY, O, X, empty_cell_indices, evaluate, other_mark
from tictac.solver import NO_MOVE, best_move, move_scores, score

_ = EMPTY


def _place(board: List[int], idx: int, mark: int) -> List[int]:
    b = list(board)
    b[idx] = mark
    return b


def _never_loses(board: List[int], me: int, to_move: int) -> bool:
    """Play best_move for `me` against every possible reply sequence."""
    v = evaluate(board)
    if v.is_terminal:
        return v.winner != other_mark(me)
    if to_move == me:
        mv = best_move(board, me)
        assert board[mv] == EMPTY
        return _never_loses(_place(board, mv, me), me, other_mark(me))
    return all(
        _never_loses(_place(board, i, to_move), me, me)
        for i in empty_cell_indices(board)
    )


def test_takes_immediate_win():
    b = [X, X, _,
         O, O, _,
         _, _, _]
    assert best_move(b, X) == 2


def test_blocks_immediate_loss():
    b = [O, O, _,
         X, _, _,
         _, _, _]
    assert best_move(b, X) == 2


def test_maximizer_mark_is_a_parameter():
    # Same position with the roles swapped: O to move must win at 5
    b = [X, X, _,
         O, O, _,
         X, _, _]
    assert best_move(b, O) == 5
    # and X to move there wins at 2
    assert best_move(b, X) == 2


def test_prefers_faster_win():
    # X can win now at 2, or set up a later win elsewhere; the immediate one scores highest
    b = [X, X, _,
         _, O, _,
         _, O, _]
    scores = move_scores(b, X)
    assert scores[2] == 10
    assert best_move(b, X) == 2
    assert all(s is None or s <= 10 for s in scores)


def test_prefers_slower_loss():
    # O is lost: ignoring the diagonal threat loses at once, blocking it loses to a fork later
    b = [X, O, _,
         _, X, _,
         _, _, _]
    scores = move_scores(b, O)
    assert scores[8] == 3 - 10
    assert all(s == 1 - 10 for i, s in enumerate(scores) if s is not None and i != 8)
    assert best_move(b, O) == 8


def test_empty_board_opening_is_corner_or_center_and_not_losing():
    b = [EMPTY] * 9
    mv = best_move(b, X)
    assert mv in (0, 2, 4, 6, 8)
    assert move_scores(b, X)[mv] >= 0
    assert score(_place(b, mv, X), 0, False, X) >= 0


def test_best_play_never_loses_as_first_player():
    assert _never_loses([EMPTY] * 9, X, X)


def test_best_play_never_loses_as_second_player():
    assert _never_loses([EMPTY] * 9, O, X)


def test_full_board_returns_sentinel():
    b = [X, O, X,
         X, O, O,
         O, X, X]
    assert best_move(b, X) == NO_MOVE
    assert move_scores(b, X) == [None] * 9


def test_single_empty_cell_is_chosen():
    b = [X, O, X,
         X, O, O,
         O, X, _]
    assert best_move(b, O) == 8


def test_does_not_mutate_input():
    b = [X, _, _,
         _, O, _,
         _, _, _]
    snapshot = list(b)
    best_move(b, X)
    move_scores(b, O)
    assert b == snapshot


def test_tie_break_is_lowest_index_and_stable():
    # X wins immediately at either 2 or 6
    b = [X, X, _,
         X, _, O,
         _, O, O]
    scores = move_scores(b, X)
    assert scores[2] == scores[6] == 10
    assert {best_move(b, X) for _ in range(5)} == {2}
    # all openings are draws, so the first cell wins the tie
    assert best_move([EMPTY] * 9, X) == 0


def test_score_terminal_values():
    assert score([X, X, X, O, O, _, _, _, _], mark=X) == 10
    assert score([X, X, X, O, O, _, _, _, _], depth=3, mark=X) == 7
    assert score([X, X, X, O, O, _, _, _, _], depth=3, mark=O) == -7
    assert score([X, O, X, X, O, O, O, X, X], mark=X) == 0


@pytest.mark.parametrize("mark", [0, 3, "X"])
def test_invalid_mark_raises(mark):
    with pytest.raises(ValueError):
        best_move([EMPTY] * 9, mark)


def test_malformed_board_raises():
    with pytest.raises(ValueError):
        best_move([EMPTY] * 8, X)
