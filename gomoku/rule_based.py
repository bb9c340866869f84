"""A heuristic opponent that scores every empty cell by the lines it extends."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from gomoku.pieces import Move, PieceType
from gomoku.strategy import AIStrategy

if TYPE_CHECKING:
    from gomoku.board import Board

_EIGHT_DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1), (0, -1),
    (0, 1), (1, -1), (1, 0), (1, 1),
)

_RUN_SCORES = {5: 100000, 4: 10000, 3: 1000, 2: 100, 1: 10}


class RuleBasedAI(AIStrategy):
    """Chooses among the best-scoring cells, with less randomness at higher levels."""

    name = "RuleBased"

    def __init__(self, rng: random.Random | None = None) -> None:
        super().__init__()
        self._rng = rng if rng is not None else random.Random()

    def set_difficulty(self, level: int) -> None:
        """Set the level, clamped to 1-5."""
        self.difficulty = max(1, min(level, 5))

    def next_move(self, board: Board, current_player: PieceType) -> Move:
        """Pick a move; ``Move(-1, -1)`` when the board is full."""
        size = board.size
        empty = [
            Move(row, col)
            for row in range(size)
            for col in range(size)
            if board.piece_at(row, col) is PieceType.NONE
        ]
        if not empty:
            return Move(-1, -1)

        centre = size // 2
        if len(empty) == size * size:
            return Move(centre, centre)

        opponent = current_player.opponent()
        scored: list[tuple[int, Move]] = []
        for pos in empty:
            score = self.evaluate_position(board, pos.row, pos.col, current_player)
            if self.difficulty >= 2:
                score = max(score, self.evaluate_position(board, pos.row, pos.col, opponent))
            if self.difficulty >= 3:
                distance = abs(pos.row - centre) + abs(pos.col - centre)
                score += (size - distance) * 2
            if self.difficulty >= 4:
                score += sum(
                    self.check_line(board, pos.row, pos.col, d_row, d_col, current_player) * 10
                    for d_row, d_col in _EIGHT_DIRECTIONS
                )
            scored.append((score, pos))

        scored.sort(key=lambda item: item[0], reverse=True)

        if self.difficulty == 5:
            return scored[0][1]
        choices = min(max(1, 6 - self.difficulty), len(scored))
        return scored[self._rng.randrange(choices)][1]

    def evaluate_position(
        self, board: Board, row: int, col: int, current_player: PieceType
    ) -> int:
        """Score a cell by the runs it would form in all eight directions."""
        return sum(
            _RUN_SCORES.get(self.check_line(board, row, col, d_row, d_col, current_player), 0)
            for d_row, d_col in _EIGHT_DIRECTIONS
        )

    def check_line(
        self,
        board: Board,
        row: int,
        col: int,
        d_row: int,
        d_col: int,
        current_player: PieceType,
    ) -> int:
        """Length of the run through (row, col) along a direction, counting the cell itself."""
        count = 1
        for sign in (1, -1):
            r, c = row + sign * d_row, col + sign * d_col
            while self._on_board(board, r, c) and board.piece_at(r, c) is current_player:
                count += 1
                r += sign * d_row
                c += sign * d_col
        return count

    @staticmethod
    def _on_board(board: Board, row: int, col: int) -> bool:
        return 0 <= row < board.size and 0 <= col < board.size