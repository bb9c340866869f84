"""Common interface for computer opponents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from gomoku.pieces import Move, PieceType

if TYPE_CHECKING:
    from gomoku.board import Board


class AIStrategy(ABC):
    """A move-choosing opponent with an adjustable difficulty level (1-5)."""

    name: ClassVar[str] = ""

    def __init__(self) -> None:
        self.difficulty = 1

    @abstractmethod
    def set_difficulty(self, level: int) -> None:
        """Set the difficulty level."""

    @abstractmethod
    def next_move(self, board: Board, current_player: PieceType) -> Move:
        """Choose the next move for ``current_player`` on ``board``."""

    def supports_difficulty(self) -> bool:
        """Whether this strategy reacts to difficulty changes."""
        return True