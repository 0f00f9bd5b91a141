"""
Headless game session: turn order, move history and jumping back through it.

X always moves first. In "vs-computer" mode the computer owns `computer_mark`
and moves through `computer_move()`; the search treats that mark as the
maximizer, whichever literal mark it is.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from .game_basics import EMPTY, O, X, Verdict, evaluate, mark_symbol, validate_mark
from .policy import Difficulty, RandomSource, parse_difficulty, select_move
from .solver import NO_MOVE

VS_COMPUTER = "vs-computer"
VS_HUMAN = "vs-human"
MODES = (VS_COMPUTER, VS_HUMAN)

Board = Tuple[int, ...]


class GameSession:
    def __init__(
        self,
        mode: str = VS_COMPUTER,
        difficulty: Union[str, Difficulty] = Difficulty.HARD,
        computer_mark: int = O,
        rng: Optional[RandomSource] = None,
    ) -> None:
        validate_mark(computer_mark)
        self.mode = mode
        self.difficulty = difficulty
        self.computer_mark = computer_mark
        self.rng = rng
        self.history: List[Board] = [(EMPTY,) * 9]
        self.current_move = 0

    @property
    def mode(self) -> str:
        return self._mode

    @mode.setter
    def mode(self, value: str) -> None:
        if value not in MODES:
            raise ValueError(f"Unknown mode: {value!r} (expected one of {', '.join(MODES)})")
        self._mode = value

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: Union[str, Difficulty]) -> None:
        self._difficulty = parse_difficulty(value)

    @property
    def board(self) -> Board:
        return self.history[self.current_move]

    @property
    def verdict(self) -> Verdict:
        return evaluate(self.board)

    @property
    def next_mark(self) -> int:
        return X if self.current_move % 2 == 0 else O

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode == VS_COMPUTER
            and self.next_mark == self.computer_mark
            and not self.verdict.is_terminal
        )

    def _apply(self, index: int) -> None:
        mark = self.next_mark
        nxt = list(self.board)
        nxt[index] = mark
        self.history = self.history[: self.current_move + 1] + [tuple(nxt)]
        self.current_move = len(self.history) - 1
        logging.debug("move #%d: %s -> %d", self.current_move, mark_symbol(mark), index)
        v = self.verdict
        if v.is_terminal:
            if v.winner != EMPTY:
                logging.info("Game over: %s wins after %d moves", mark_symbol(v.winner), self.current_move)
            else:
                logging.info("Game over: draw")

    def play(self, index: int) -> None:
        """Place the next mark at `index`, discarding any moves after the current one."""
        if self.verdict.is_terminal:
            raise ValueError("Game is over")
        if self.is_computer_turn:
            raise ValueError("It is the computer's turn")
        if not 0 <= index <= 8:
            raise ValueError(f"Cell index out of range: {index}")
        if self.board[index] != EMPTY:
            raise ValueError(f"Cell {index} is already occupied")
        self._apply(index)

    def computer_move(self) -> int:
        if self.verdict.is_terminal:
            return NO_MOVE
        if not self.is_computer_turn:
            raise ValueError("It is not the computer's turn")
        mv = select_move(self.board, self.difficulty, self.rng, mark=self.computer_mark)
        if mv != NO_MOVE:
            self._apply(mv)
        return mv

    def jump_to(self, move: int) -> None:
        if not 0 <= move < len(self.history):
            raise ValueError(f"No such move: {move} (history has {len(self.history)} entries)")
        self.current_move = move

    def reset(self) -> None:
        self.history = [(EMPTY,) * 9]
        self.current_move = 0

    def move_descriptions(self) -> List[str]:
        return [
            f"Go to move #{move}" if move > 0 else "Go to game start"
            for move in range(len(self.history))
        ]
