"""Reading and writing saved games as JSON documents."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from os import PathLike
from typing import Any, Union

from gomoku.pieces import Move, PieceType

PathType = Union[str, "PathLike[str]"]


class SaveFileError(Exception):
    """Raised when a save file cannot be written or read."""


@dataclass
class SaveData:
    """Everything needed to restore a game."""

    timestamp: datetime | None = None
    is_ai_enabled: bool = False
    ai_difficulty: int = 1
    undo_limit: int = 0
    remaining_undos: int = 0
    board: list[list[int]] = field(default_factory=list)
    current_player: int = int(PieceType.BLACK)
    history: list[Move] = field(default_factory=list)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _to_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _to_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def save_game(filename: PathType, data: SaveData) -> None:
    """Write ``data`` to ``filename`` as JSON."""
    document = {
        "timestamp": data.timestamp.isoformat(timespec="seconds") if data.timestamp else "",
        "isAIEnabled": bool(data.is_ai_enabled),
        "aiDifficulty": data.ai_difficulty,
        "undoLimit": data.undo_limit,
        "remainingUndos": data.remaining_undos,
        "currentPlayer": int(data.current_player),
        "board": [[int(cell) for cell in row] for row in data.board],
        "history": [
            {"row": move.row, "col": move.col, "player": int(move.player)}
            for move in data.history
        ],
    }
    try:
        with open(filename, "w", encoding="utf-8") as fh:
            json.dump(document, fh, indent=4, sort_keys=True, ensure_ascii=False)
            fh.write("\n")
    except OSError as exc:
        raise SaveFileError(f"cannot write {filename}: {exc}") from exc


def load_game(filename: PathType) -> SaveData:
    """Read a saved game; missing or mistyped fields take neutral defaults."""
    try:
        with open(filename, "rb") as fh:
            raw = fh.read()
    except OSError as exc:
        raise SaveFileError(f"cannot read {filename}: {exc}") from exc

    try:
        parsed = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SaveFileError(f"{filename} is not a valid save file") from exc
    if not isinstance(parsed, (dict, list)):
        raise SaveFileError(f"{filename} is not a valid save file")

    obj = _to_dict(parsed)
    history = []
    for entry in _to_list(obj.get("history")):
        move_obj = _to_dict(entry)
        player_value = _to_int(move_obj.get("player"))
        try:
            player = PieceType(player_value)
        except ValueError as exc:
            raise SaveFileError(f"invalid player {player_value} in history") from exc
        history.append(Move(_to_int(move_obj.get("row")), _to_int(move_obj.get("col")), player))

    return SaveData(
        timestamp=_parse_timestamp(obj.get("timestamp")),
        is_ai_enabled=obj.get("isAIEnabled") is True,
        ai_difficulty=_to_int(obj.get("aiDifficulty")),
        undo_limit=_to_int(obj.get("undoLimit")),
        remaining_undos=_to_int(obj.get("remainingUndos")),
        board=[[_to_int(cell) for cell in _to_list(row)] for row in _to_list(obj.get("board"))],
        current_player=_to_int(obj.get("currentPlayer")),
        history=history,
    )