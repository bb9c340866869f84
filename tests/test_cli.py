import io
import sys

import pytest

from gomoku.cli import (
    GameMode,
    GameSession,
    GameSettings,
    main,
    parse_args,
    piece_for_color_index,
    render_board,
    strategy_for_index,
)
from gomoku.pieces import PieceType


def _stones(board):
    return sum(
        1
        for row in range(board.size)
        for col in range(board.size)
        if board.piece_at(row, col) is not PieceType.NONE
    )


@pytest.mark.parametrize(
    "index, expected", [(0, "RuleBased"), (1, "AStar"), (5, "RuleBased"), (-1, "RuleBased")]
)
def test_strategy_for_index(index, expected):
    assert strategy_for_index(index) == expected


def test_piece_for_color_index():
    assert piece_for_color_index(0) is PieceType.BLACK
    assert piece_for_color_index(1) is PieceType.WHITE


def test_parse_args_defaults_match_settings_defaults():
    assert parse_args([]) == GameSettings()


def test_parse_args_all_options():
    settings = parse_args(
        ["--mode", "ai", "--strategy", "AStar", "--difficulty", "5", "--undo", "0", "--color", "white"]
    )
    assert settings.mode is GameMode.PLAYER_VS_AI
    assert settings.ai_strategy == "AStar"
    assert settings.ai_difficulty == 5
    assert settings.undo_limit == 0
    assert settings.player_piece is PieceType.WHITE
    assert settings.ai_enabled is True


@pytest.mark.parametrize(
    "argv", [["--difficulty", "6"], ["--difficulty", "0"], ["--undo", "11"], ["--mode", "x"]]
)
def test_parse_args_rejects_out_of_range(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_settings_validate_ranges():
    with pytest.raises(ValueError):
        GameSettings(ai_difficulty=0)
    with pytest.raises(ValueError):
        GameSettings(undo_limit=-1)


def test_render_empty_board():
    session = GameSession()
    text = render_board(session.board)
    lines = text.splitlines()
    assert len(lines) == session.board.size + 1
    assert "X" not in text and "O" not in text


def test_move_command_places_stone_and_switches_turn():
    session = GameSession()
    session.reset_game()
    assert session.handle_command("7 7") == ""
    assert session.board.piece_at(7, 7) is PieceType.BLACK
    assert session.board.current_player is PieceType.WHITE
    assert render_board(session.board).count("X") == 1


def test_occupied_cell_rejected():
    session = GameSession()
    session.reset_game()
    session.handle_command("7 7")
    session.handle_command("7 7")
    assert session.board.piece_at(7, 7) is PieceType.BLACK
    assert _stones(session.board) == 1


def test_ai_replies_after_player_move():
    session = GameSession()
    session.new_game(GameSettings(mode=GameMode.PLAYER_VS_AI, ai_difficulty=5))
    session.handle_command("7 7")
    assert _stones(session.board) == 2
    assert session.board.current_player is PieceType.BLACK


def test_undo_command_in_two_player_mode():
    session = GameSession()
    session.new_game(GameSettings(undo_limit=1))
    session.handle_command("3 3")
    session.handle_command("undo")
    assert _stones(session.board) == 0
    assert session.board.current_player is PieceType.BLACK
    session.handle_command("3 3")
    assert session.handle_command("undo") == "无法悔棋"


def test_five_in_a_row_announces_winner():
    session = GameSession()
    session.reset_game()
    message = ""
    for col in range(5):
        message = session.handle_command(f"0 {col}")
        if col < 4:
            session.handle_command(f"5 {col}")
    assert message == "黑方胜利！"
    assert session.board.game_over is True
    assert session.handle_command("9 9") == "游戏已结束"


def test_save_adds_extension_and_load_round_trip(tmp_path):
    session = GameSession()
    session.reset_game()
    session.handle_command("7 7")
    session.handle_command("7 8")
    path = session.save_game(tmp_path / "game")
    assert path.endswith(".gomoku")
    assert (tmp_path / "game.gomoku").exists()

    other = GameSession()
    other.reset_game()
    assert other.handle_command(f"load {path}") == "游戏已成功加载！"
    assert other.board.state() == session.board.state()
    assert other.board.current_player is PieceType.BLACK


def test_save_keeps_existing_extension_case_insensitively(tmp_path):
    session = GameSession()
    session.reset_game()
    path = session.save_game(tmp_path / "x.GOMOKU")
    assert path == str(tmp_path / "x.GOMOKU")


def test_save_empty_name_does_nothing():
    session = GameSession()
    assert session.save_game("") is None


def test_load_missing_file_reports_failure(tmp_path):
    session = GameSession()
    assert session.handle_command(f"load {tmp_path / 'missing.gomoku'}") == "加载游戏失败！"


def test_save_command_reports_success(tmp_path):
    session = GameSession()
    session.reset_game()
    assert session.handle_command(f"save {tmp_path / 'a'}") == "游戏已成功保存！"
    assert (tmp_path / "a.gomoku").exists()


def test_new_command_applies_settings():
    session = GameSession()
    session.handle_command("new --mode ai --strategy AStar --difficulty 4")
    assert session.settings.mode is GameMode.PLAYER_VS_AI
    assert session.board.ai_strategy.name == "AStar"
    assert session.board.ai_strategy.difficulty == 4


def test_new_command_with_bad_options_keeps_settings():
    session = GameSession()
    session.handle_command("new --difficulty 9")
    assert session.settings == GameSettings()


def test_quit_stops_session():
    session = GameSession()
    session.handle_command("quit")
    assert session.running is False


def test_main_runs_commands_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("7 7\nquit\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "X" in out