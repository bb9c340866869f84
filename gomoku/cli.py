"""Text front end: game settings, a play session and the command-line entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike, fspath
from typing import Union

from gomoku.board import Board
from gomoku.pieces import PieceType
from gomoku.savefile import SaveFileError

PathType = Union[str, "PathLike[str]"]

SAVE_EXTENSION = ".gomoku"

_SYMBOLS = {PieceType.NONE: ".", PieceType.BLACK: "X", PieceType.WHITE: "O"}

_HELP = (
    "命令: <行> <列> 落子 | undo 悔棋 | reset 重新开始 | new [选项] 新游戏 | "
    "save <文件> 保存游戏 | load <文件> 加载游戏 | board 显示棋盘 | quit 退出"
)


class GameMode(IntEnum):
    """Who plays against whom."""

    PLAYER_VS_PLAYER = 0
    PLAYER_VS_AI = 1


def strategy_for_index(index: int) -> str:
    """Opponent name for a position in the strategy list; unknown positions give RuleBased."""
    return "AStar" if index == 1 else "RuleBased"


def piece_for_color_index(index: int) -> PieceType:
    """Colour for a position in the colour list: 0 is black, anything else white."""
    return PieceType.BLACK if index == 0 else PieceType.WHITE


@dataclass
class GameSettings:
    """Options chosen for a new game."""

    mode: GameMode = GameMode.PLAYER_VS_PLAYER
    ai_strategy: str = "RuleBased"
    ai_difficulty: int = 3
    undo_limit: int = 3
    player_piece: PieceType = PieceType.BLACK

    def __post_init__(self) -> None:
        if not 1 <= self.ai_difficulty <= 5:
            raise ValueError(f"difficulty must be between 1 and 5, got {self.ai_difficulty}")
        if not 0 <= self.undo_limit <= 10:
            raise ValueError(f"undo limit must be between 0 and 10, got {self.undo_limit}")

    @property
    def ai_enabled(self) -> bool:
        return self.mode is GameMode.PLAYER_VS_AI


def _ranged(low: int, high: int):
    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from exc
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}")
        return value

    return convert


def parse_args(argv: list[str] | None = None) -> GameSettings:
    """Turn command-line options into game settings; exits on invalid options."""
    parser = argparse.ArgumentParser(prog="gomoku", description="Play gomoku in the terminal.")
    parser.add_argument("--mode", choices=("pvp", "ai"), default="pvp",
                        help="pvp for two players, ai to play the computer")
    parser.add_argument("--strategy", choices=("RuleBased", "AStar"), default="RuleBased",
                        help="computer opponent")
    parser.add_argument("--difficulty", type=_ranged(1, 5), default=3,
                        help="computer difficulty, 1-5")
    parser.add_argument("--undo", type=_ranged(0, 10), default=3,
                        help="number of undos allowed, 0-10")
    parser.add_argument("--color", choices=("black", "white"), default="black",
                        help="colour played against the computer")
    args = parser.parse_args(argv)
    return GameSettings(
        mode=GameMode.PLAYER_VS_AI if args.mode == "ai" else GameMode.PLAYER_VS_PLAYER,
        ai_strategy=args.strategy,
        ai_difficulty=args.difficulty,
        undo_limit=args.undo,
        player_piece=piece_for_color_index(0 if args.color == "black" else 1),
    )


def render_board(board: Board) -> str:
    """The board as text: X for black, O for white, . for empty."""
    header = "   " + " ".join(f"{col:>2}" for col in range(board.size))
    lines = [header]
    for row in range(board.size):
        cells = " ".join(f"{_SYMBOLS[board.piece_at(row, col)]:>2}" for col in range(board.size))
        lines.append(f"{row:>2} {cells}")
    return "\n".join(lines)


class GameSession:
    """A board together with the settings it was last started with."""

    def __init__(self, settings: GameSettings | None = None) -> None:
        self.board = Board()
        self.settings = settings if settings is not None else GameSettings()
        self.running = True

    def reset_game(self) -> None:
        """Restart with the current settings."""
        s = self.settings
        self.board.reset_game(s.ai_enabled, s.ai_strategy, s.ai_difficulty,
                              s.undo_limit, s.player_piece)

    def new_game(self, settings: GameSettings) -> None:
        """Adopt ``settings`` and start a fresh game."""
        self.settings = settings
        self.reset_game()

    def save_game(self, filename: PathType) -> str | None:
        """Save to ``filename``, adding the save extension if missing; returns the path used."""
        name = fspath(filename)
        if not name:
            return None
        if not name.lower().endswith(SAVE_EXTENSION):
            name += SAVE_EXTENSION
        self.board.save_game_state(name)
        return name

    def load_game(self, filename: PathType) -> str | None:
        """Load the game saved in ``filename``; returns the path used."""
        name = fspath(filename)
        if not name:
            return None
        self.board.load_game_state(name)
        return name

    def handle_command(self, text: str) -> str:
        """Carry out one command line and return the message to show."""
        parts = text.split()
        if not parts:
            return ""
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit", "q"):
            self.running = False
            return ""
        if command == "help":
            return _HELP
        if command in ("board", "show"):
            return render_board(self.board)
        if command == "new":
            try:
                settings = parse_args(args)
            except SystemExit:
                return "无效的游戏设置"
            self.new_game(settings)
            return "新游戏开始"
        if command == "reset":
            self.reset_game()
            return "游戏已重新开始"
        if command == "undo":
            return "已悔棋" if self.board.undo_move() else "无法悔棋"
        if command == "save":
            if not args:
                return "请指定文件名"
            try:
                self.save_game(" ".join(args))
            except SaveFileError:
                return "保存游戏失败！"
            return "游戏已成功保存！"
        if command == "load":
            if not args:
                return "请指定文件名"
            try:
                self.load_game(" ".join(args))
            except SaveFileError:
                return "加载游戏失败！"
            return "游戏已成功加载！"
        return self._handle_move(parts)

    def _handle_move(self, parts: list[str]) -> str:
        if len(parts) != 2:
            return _HELP
        try:
            row, col = int(parts[0]), int(parts[1])
        except ValueError:
            return _HELP
        if self.board.game_over:
            return "游戏已结束"
        if not self.board.play(row, col):
            return "无效的落子"
        if self.board.game_over and self.board.winner is not None:
            return self.board.game_over_message(self.board.winner)
        return ""


def main(argv: list[str] | None = None) -> int:
    """Run an interactive game on standard input and output."""
    settings = parse_args(argv)
    session = GameSession()
    session.new_game(settings)
    print(render_board(session.board))
    print(_HELP)
    for line in sys.stdin:
        message = session.handle_command(line)
        if message:
            print(message)
        if not session.running:
            break
        print(render_board(session.board))
    return 0


if __name__ == "__main__":
    sys.exit(main())