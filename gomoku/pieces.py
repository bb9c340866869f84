"""Piece colours and move records shared across the game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class PieceType(IntEnum):
    """Content of a board cell; the integer values are used in save files."""

    NONE = 0
    BLACK = 1
    WHITE = 2

    def opponent(self) -> PieceType:
        """Return the other colour; anything that is not black yields black."""
        return PieceType.WHITE if self is PieceType.BLACK else PieceType.BLACK


@dataclass(frozen=True)
class Move:
    """A board coordinate, optionally tagged with the player who moved there.

    A row or column of -1 marks the absence of a move.
    """

    row: int = -1
    col: int = -1
    player: PieceType = PieceType.NONE