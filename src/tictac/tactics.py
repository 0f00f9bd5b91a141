"""
Tactics and simple motifs: immediate wins, blocks, forks.
"""
from typing import List, Sequence

from .game_basics import EMPTY, get_winner, other_mark


def immediate_winning_moves(board: Sequence[int], player: int) -> List[int]:
    wins: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if get_winner(b) == player:
            wins.append(i)
    return wins


def blocking_moves(board: Sequence[int], player: int) -> List[int]:
    """Cells `player` must take to stop the opponent completing a line next turn."""
    return immediate_winning_moves(board, other_mark(player))


def fork_moves(board: Sequence[int], player: int) -> List[int]:
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if len(immediate_winning_moves(b, player)) >= 2:
            forks.append(i)
    return forks
