"""A search-based opponent: candidate pruning followed by alpha-beta search."""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

from gomoku.pieces import Move, PieceType
from gomoku.strategy import AIStrategy

if TYPE_CHECKING:
    from gomoku.board import Board

State = list[list[PieceType]]

_LINE_DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))
_WIN_THRESHOLD = 90000
_WIN_SCORE = 100000


class AStarAI(AIStrategy):
    """Scores nearby cells heuristically, then searches the best few in depth."""

    name = "AStar"

    def __init__(self, difficulty: int = 1) -> None:
        super().__init__()
        self.set_difficulty(difficulty)

    def set_difficulty(self, level: int) -> None:
        """Set the level; search depth grows with it up to 4 plies."""
        self.difficulty = level
        self.max_depth = min(1 + level, 4)

    def next_move(self, board: Board, current_player: PieceType) -> Move:
        """Pick a move for ``current_player``; ``Move(-1, -1)`` if none exists."""
        started = time.monotonic()
        think_limit = (1000 + self.difficulty * 500) / 1000.0

        candidates = self.candidate_moves(board)
        if not candidates:
            return Move(-1, -1)

        size = board.size
        if len(candidates) == size * size:
            return Move(size // 2, size // 2)

        base_state = board.state()
        opponent = current_player.opponent()
        scored: list[tuple[Move, int]] = []

        for move in candidates:
            state = [row[:] for row in base_state]
            state[move.row][move.col] = current_player
            attack = self.quick_evaluate(board, state, move, current_player)
            state[move.row][move.col] = opponent
            defense = self.quick_evaluate(board, state, move, opponent)

            if defense >= 3000:
                final = max(attack, defense)
            elif defense >= 800:
                final = max(attack, attack + defense * 2 // 3)
            else:
                final = attack + defense // 3
            scored.append((move, final))

            if attack >= _WIN_THRESHOLD or defense >= _WIN_THRESHOLD:
                return move

        scored.sort(key=lambda item: item[1], reverse=True)
        scored = scored[: min(6 + self.difficulty, len(scored))]

        best_move = scored[0][0]
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        for move, _ in scored:
            state = [row[:] for row in base_state]
            state[move.row][move.col] = current_player
            score = self._alpha_beta(
                board, state, self.max_depth - 1, alpha, beta, opponent, False
            )
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)

            if time.monotonic() - started > think_limit:
                break

        return best_move

    def quick_evaluate(
        self, board: Board, state: State, last_move: Move, current_player: PieceType
    ) -> int:
        """Score the lines through ``last_move`` plus nearby friendly threats."""
        score = 0
        for d_row, d_col in _LINE_DIRECTIONS:
            line = self.check_line(state, last_move.row, last_move.col, d_row, d_col, current_player)
            if line >= _WIN_THRESHOLD:
                return _WIN_SCORE
            score += line

        size = board.size
        threat = 0
        for dr in range(-2, 3):
            for dc in range(-2, 3):
                if dr == 0 and dc == 0:
                    continue
                row, col = last_move.row + dr, last_move.col + dc
                if 0 <= row < size and 0 <= col < size and state[row][col] is current_player:
                    threat += sum(
                        self.check_line(state, row, col, d_row, d_col, current_player) // 4
                        for d_row, d_col in _LINE_DIRECTIONS
                    )
        return score + threat

    def candidate_moves(self, board: Board) -> list[Move]:
        """Empty cells near existing stones, or the centre on an empty board."""
        size = board.size
        reach = min(1 + self.difficulty, 3)
        found: dict[tuple[int, int], None] = {}

        for row in range(size):
            for col in range(size):
                if board.piece_at(row, col) is PieceType.NONE:
                    continue
                for dr in range(-reach, reach + 1):
                    for dc in range(-reach, reach + 1):
                        if abs(dr) + abs(dc) > reach + 1:
                            continue
                        r, c = row + dr, col + dc
                        if (
                            0 <= r < size
                            and 0 <= c < size
                            and board.piece_at(r, c) is PieceType.NONE
                        ):
                            found.setdefault((r, c), None)

        if not found:
            return [Move(size // 2, size // 2)]
        return [Move(r, c) for r, c in found]

    def evaluate_board(self, board: Board, state: State, current_player: PieceType) -> int:
        """Static evaluation of ``state`` from the point of view of ``current_player``."""
        score = 0
        size = board.size
        for row in range(size):
            for col in range(size):
                piece = state[row][col]
                if piece is PieceType.NONE:
                    continue
                sign = 1 if piece is current_player else -1

                line_sum = 0
                for d_row, d_col in _LINE_DIRECTIONS:
                    line = self.check_line(state, row, col, d_row, d_col, piece)
                    if line >= _WIN_THRESHOLD:
                        return sign * _WIN_SCORE
                    line_sum += line
                score += sign * line_sum

                if abs(line_sum) < 2000:
                    score += sign * self.position_score(board, row, col, piece)
        return score

    def check_line(
        self,
        state: State,
        start_row: int,
        start_col: int,
        d_row: int,
        d_col: int,
        player: PieceType,
    ) -> int:
        """Score the pattern through a stone along one axis, allowing one gap per side."""
        size = len(state)
        count = 1
        has_gap = False
        gaps = []
        blocked_ends = []

        for sign in (1, -1):
            empty = 0
            blocked = False
            for step in range(1, 5):
                r = start_row + sign * d_row * step
                c = start_col + sign * d_col * step
                if not (0 <= r < size and 0 <= c < size):
                    blocked = True
                    break
                piece = state[r][c]
                if piece is player:
                    if empty > 0:
                        has_gap = True
                    count += 1
                elif piece is PieceType.NONE:
                    if empty == 0:
                        empty += 1
                        continue
                    break
                else:
                    blocked = True
                    break
            gaps.append(empty)
            blocked_ends.append(blocked)

        empty_total = sum(gaps)
        blocked = all(blocked_ends)

        if count >= 5:
            return _WIN_SCORE

        if blocked:
            if count == 4:
                return 3000
            if count == 3:
                return 300
            if count == 2:
                return 30
            base = count * 8
        elif count == 4:
            if empty_total >= 2:
                return 20000
            base = 8000
        elif count == 3:
            if empty_total >= 2:
                return 3000
            base = 800
        elif count == 2:
            if empty_total >= 2:
                return 200
            base = 50
        else:
            base = count * 15

        if has_gap:
            base = base * 2 // 3
        return base

    def position_score(self, board: Board, row: int, col: int, player: PieceType) -> int:
        """Value of a cell from its closeness to the centre and its neighbours."""
        size = board.size
        centre = size // 2
        base = 120 - (abs(row - centre) + abs(col - centre)) * 8

        neighbours = 0
        for dr in range(-2, 3):
            for dc in range(-2, 3):
                if dr == 0 and dc == 0:
                    continue
                r, c = row + dr, col + dc
                if not (0 <= r < size and 0 <= c < size):
                    continue
                piece = board.piece_at(r, c)
                if piece is PieceType.NONE:
                    continue
                distance = abs(dr) + abs(dc)
                if distance == 1:
                    neighbours += 15 if piece is player else 10
                elif distance == 2:
                    neighbours += 8 if piece is player else 5

        return max(0, base + neighbours // 2)

    def _alpha_beta(
        self,
        board: Board,
        state: State,
        depth: int,
        alpha: float,
        beta: float,
        player: PieceType,
        maximizing: bool,
    ) -> float:
        if depth == 0:
            return self.evaluate_board(board, state, player)

        moves = self.candidate_moves(board)
        if not moves:
            return self.evaluate_board(board, state, player)

        opponent = player.opponent()
        best = -math.inf if maximizing else math.inf
        for move in moves:
            original = state[move.row][move.col]
            state[move.row][move.col] = player
            score = self._alpha_beta(
                board, state, depth - 1, alpha, beta, opponent, not maximizing
            )
            state[move.row][move.col] = original

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if beta <= alpha:
                break
        return best