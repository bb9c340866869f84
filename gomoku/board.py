"""Game state for a 15x15 board: moves, turns, undo, win detection and saving."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from os import PathLike
from typing import Union

from gomoku.astar import AStarAI
from gomoku.pieces import Move, PieceType
from gomoku.rule_based import RuleBasedAI
from gomoku.savefile import SaveData, SaveFileError, load_game, save_game
from gomoku.strategy import AIStrategy

PathType = Union[str, "PathLike[str]"]
State = list[list[PieceType]]

BOARD_SIZE = 15

_WIN_DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))


def create_ai_strategy(name: str) -> AIStrategy:
    """Build the opponent called ``name``; unknown names give the rule-based one."""
    if name == "AStar":
        return AStarAI()
    return RuleBasedAI()


@dataclass(frozen=True)
class WinLine:
    """The two end cells of a winning run, as (row, col) pairs."""

    start: tuple[int, int] | None = None
    end: tuple[int, int] | None = None

    @property
    def valid(self) -> bool:
        return self.start is not None and self.end is not None


class Board:
    """Holds the stones, whose turn it is, move history and the optional opponent."""

    def __init__(self) -> None:
        self.size = BOARD_SIZE
        self._cells: State = self._empty_cells()
        self.current_player = PieceType.BLACK
        self.game_over = False
        self.ai_enabled = False
        self.ai_strategy: AIStrategy | None = None
        self.player_piece = PieceType.BLACK
        self.remaining_undos = 3
        self.history: list[Move] = []
        self.last_move = Move()
        self.win_line = WinLine()
        self.winner: PieceType | None = None

    def _empty_cells(self) -> State:
        return [[PieceType.NONE] * self.size for _ in range(self.size)]

    def _on_board(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def reset_game(
        self,
        enable_ai: bool = False,
        ai_strategy: str = "RuleBased",
        difficulty: int = 3,
        undo_limit: int = 3,
        player_piece: PieceType = PieceType.BLACK,
    ) -> None:
        """Start a new game with the given settings."""
        self._cells = self._empty_cells()
        self.current_player = PieceType.BLACK
        self.game_over = False
        self.ai_enabled = enable_ai
        self.remaining_undos = undo_limit
        self.player_piece = player_piece

        if enable_ai:
            self.set_ai_strategy(ai_strategy)
            self.ai_strategy.set_difficulty(difficulty)
        else:
            self.ai_strategy = None

        self.history.clear()
        self.last_move = Move()
        self.win_line = WinLine()
        self.winner = None

        if enable_ai and player_piece is PieceType.WHITE:
            self.make_ai_move()

    def set_ai_strategy(self, name: str) -> None:
        """Replace the opponent with the one called ``name``."""
        self.ai_strategy = create_ai_strategy(name)

    def piece_at(self, row: int, col: int) -> PieceType:
        return self._cells[row][col]

    def place_piece(self, row: int, col: int, piece: PieceType) -> None:
        """Put ``piece`` on a cell without touching turn or history."""
        self._cells[row][col] = piece

    def state(self) -> State:
        """A copy of the cell grid."""
        return [row[:] for row in self._cells]

    def set_state(self, state: State) -> None:
        """Replace the cell grid with a copy of ``state``."""
        self._cells = [[PieceType(cell) for cell in row] for row in state]

    def check_win(self, row: int, col: int) -> bool:
        """Whether the stone at (row, col) completes five in a row; records the line."""
        current = self._cells[row][col]
        for d_row, d_col in _WIN_DIRECTIONS:
            count = 1
            start = end = (row, col)
            for step in range(1, 5):
                r, c = row + d_row * step, col + d_col * step
                if not self._on_board(r, c) or self._cells[r][c] is not current:
                    break
                count += 1
                end = (r, c)
            for step in range(1, 5):
                r, c = row - d_row * step, col - d_col * step
                if not self._on_board(r, c) or self._cells[r][c] is not current:
                    break
                count += 1
                start = (r, c)
            if count >= 5:
                self.win_line = WinLine(start, end)
                return True
        return False

    def _record(self, row: int, col: int) -> bool:
        player = self.current_player
        self.history.append(Move(row, col, player))
        self._cells[row][col] = player
        self.last_move = Move(row, col)
        if self.check_win(row, col):
            self.game_over = True
            self.winner = player
            return True
        return False

    def play(self, row: int, col: int) -> bool:
        """Place the human player's stone; returns whether the move was taken.

        When the opponent is enabled and it becomes its turn, it replies at once.
        """
        if self.game_over or self.is_ai_turn():
            return False
        if not self._on_board(row, col) or self._cells[row][col] is not PieceType.NONE:
            return False

        if self._record(row, col):
            return True

        self.current_player = self.current_player.opponent()
        if self.is_ai_turn():
            self.make_ai_move()
        return True

    def undo_move(self) -> bool:
        """Take back the last move (two moves against the opponent); returns success."""
        if not self.history or self.game_over or self.remaining_undos <= 0:
            return False

        if self.ai_enabled:
            undone = self.history.pop()
            self._cells[undone.row][undone.col] = PieceType.NONE
            if self.history:
                player_move = self.history.pop()
                self._cells[player_move.row][player_move.col] = PieceType.NONE
                self.current_player = player_move.player
        else:
            undone = self.history.pop()
            self._cells[undone.row][undone.col] = PieceType.NONE
            self.current_player = undone.player
        self.remaining_undos -= 1

        if self.history:
            previous = self.history[-1]
            self.last_move = Move(previous.row, previous.col)
        else:
            self.last_move = Move()
        return True

    def make_ai_move(self) -> Move | None:
        """Let the opponent play as white; returns the move made, if any."""
        if (
            self.game_over
            or not self.ai_enabled
            or self.ai_strategy is None
            or self.current_player is not PieceType.WHITE
        ):
            return None

        move = self.ai_strategy.next_move(self, self.current_player)
        if not self._on_board(move.row, move.col):
            return None

        if not self._record(move.row, move.col):
            self.current_player = PieceType.BLACK
        return Move(move.row, move.col, PieceType.WHITE)

    def is_ai_turn(self) -> bool:
        return self.ai_enabled and self.current_player is not self.player_piece

    def game_over_message(self, winner: PieceType) -> str:
        """The announcement shown when ``winner`` has won."""
        if self.ai_enabled and self.ai_strategy is not None:
            if winner is self.player_piece:
                ai_name = "启发式搜索AI" if self.ai_strategy.name == "AStar" else "规则基础AI"
                return f"恭喜！你成功挑战了难度{self.ai_strategy.difficulty}的{ai_name}！"
            return "AI获胜了，再接再厉！"
        return "黑方胜利！" if winner is PieceType.BLACK else "白方胜利！"

    def save_game_state(self, filename: PathType) -> None:
        """Write the current game to ``filename``; raises SaveFileError on failure."""
        data = SaveData(
            timestamp=datetime.now(),
            is_ai_enabled=self.ai_enabled,
            ai_difficulty=self.ai_strategy.difficulty if self.ai_strategy else 1,
            undo_limit=self.remaining_undos,
            remaining_undos=self.remaining_undos,
            board=[[int(cell) for cell in row] for row in self._cells],
            current_player=int(self.current_player),
            history=[Move(m.row, m.col, m.player) for m in self.history],
        )
        save_game(filename, data)

    def load_game_state(self, filename: PathType) -> None:
        """Restore a game from ``filename``; raises SaveFileError on failure."""
        data = load_game(filename)

        if len(data.board) != self.size or any(len(row) != self.size for row in data.board):
            raise SaveFileError(f"{filename} does not hold a {self.size}x{self.size} board")
        try:
            cells = [[PieceType(cell) for cell in row] for row in data.board]
            current = PieceType(data.current_player)
        except ValueError as exc:
            raise SaveFileError(f"{filename} holds an invalid piece value") from exc

        self.ai_enabled = data.is_ai_enabled
        if self.ai_enabled:
            self.set_ai_strategy("RuleBased")
            self.ai_strategy.set_difficulty(data.ai_difficulty)
        self.remaining_undos = data.remaining_undos
        self.current_player = current
        self.game_over = False
        self.winner = None
        self._cells = cells
        self.history = [Move(m.row, m.col, m.player) for m in data.history]