# gomoku

Gomoku (five-in-a-row) on a 15x15 board, played in the terminal. The first
player to line up five stones of their colour in a row, column or diagonal
wins. You can play against another person at the same keyboard or against
one of two computer opponents.

## Installation

```
pip install .
```

To run the test suite, install the test extra as well:

```
pip install ".[test]"
pytest
```

## Playing

Start a game with:

```
gomoku
```

The same entry point can be run as `python -m gomoku.cli`.

The board is printed after every command, with `X` for black, `O` for white
and `.` for an empty point; rows and columns are numbered from 0 to 14.
Black always moves first. Game messages are in Chinese.

### Command-line options

| Option | Values | Default | Meaning |
| --- | --- | --- | --- |
| `--mode` | `pvp`, `ai` | `pvp` | two players, or play the computer |
| `--strategy` | `RuleBased`, `AStar` | `RuleBased` | computer opponent |
| `--difficulty` | 1-5 | 3 | computer difficulty |
| `--undo` | 0-10 | 3 | number of undos allowed |
| `--color` | `black`, `white` | `black` | your colour against the computer |

For example:

```
gomoku --mode ai --strategy AStar --difficulty 4 --color white
```

When you play white against the computer, the computer moves first. The
computer always plays white, so in `ai` mode choose `--color black` unless
you want the computer to open.

### Commands

Type one command per line:

- `<row> <col>` – place a stone, e.g. `7 7`. Against the computer, it replies
  straight away.
- `undo` – take back a move. Against the computer one undo takes back both
  the computer's last move and yours. Undo is not possible once the game is
  over or when no undos are left.
- `reset` – start again with the current settings.
- `new [options]` – start a new game with the options listed above, e.g.
  `new --mode ai --difficulty 5`.
- `save <file>` – save the game. The `.gomoku` extension is added when the
  name does not already end in it (in any letter case).
- `load <file>` – load a saved game.
- `board` (or `show`) – print the board.
- `help` – list the commands.
- `quit` (or `exit`, `q`) – leave the program.

### Computer opponents

- *RuleBased* scores every empty point by the runs of stones it would
  extend. From difficulty 2 it also weighs blocking the opponent, from 3
  closeness to the centre, and from 4 it adds extra weight for its own
  lines. At difficulty 5 it always plays its best-scoring move; below that it
  picks at random among its best few (more choices at lower levels).
- *AStar* scores empty points near the stones already on the board, keeps the
  most promising ones (more on higher difficulties), and examines them with an
  alpha-beta search whose depth grows with difficulty, up to 4 plies. It plays
  a winning move, or blocks an opponent's win, at once, and stops examining
  further candidates once its time allowance (1 s plus 0.5 s per difficulty
  level) has passed.

### Saving and loading

A save file is a JSON document holding the save time, whether the computer
opponent is on, its difficulty, the undos left, whose turn it is, the board,
and the move history. A saved game with the computer opponent on is always
resumed against *RuleBased*, whichever strategy was in use; the colour you
were playing is not stored in the file.

## Using the package from Python

The rules and the computer opponents can also be used directly:

```python
from gomoku.board import Board, create_ai_strategy
from gomoku.pieces import PieceType

board = Board()
board.reset_game(True, "AStar", 3, 3, PieceType.BLACK)
board.play(7, 7)          # your move as black; the computer replies as white
print(board.piece_at(7, 7))

ai = create_ai_strategy("RuleBased")
ai.set_difficulty(5)
move = ai.next_move(board, PieceType.BLACK)
print(move.row, move.col)
```

`Board.play` returns `False` for a move that is not allowed;
`Board.check_win`, `Board.undo_move` and `Board.game_over_message` give access
to the rest of the game logic. Opponents derive from
`gomoku.strategy.AIStrategy`; `create_ai_strategy` returns the rule-based one
for any name other than `"AStar"`.

Save files are read and written with `gomoku.savefile.save_game` and
`gomoku.savefile.load_game`, or through `Board.save_game_state` and
`Board.load_game_state`. These raise `SaveFileError` when a file cannot be
written or read, or holds no valid save.

## What it does not do

The game runs in a text terminal only: there is no graphical board and no
mouse play. The computer opponent always takes white.