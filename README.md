# pawnstorm

A small chess game for the terminal. You play against a built-in engine. The
engine searches to a fixed depth with minimax and alpha-beta pruning. It scores
material, piece-square tables, mobility and pawn structure.

The game supports castling, en passant and promotion. It recognises
checkmate, stalemate and draws by insufficient material. A draw by
insufficient material means bare kings, or one bishop or knight against a bare
king.

## Installing

```
pip install .
```

## Playing

```
pawnstorm
```

The program prints the board with rank 8 at the top. Upper-case letters are
White pieces and lower-case letters are Black pieces. Enter a move as two
squares:

```
Your move (e.g. e2 e4, or e7 e8 Q for promotion, or 'quit' to exit): e2 e4
```

To promote a pawn, add the piece letter (`Q`, `R`, `B` or `N`) after the
squares, for example `e7 e8 Q`. To castle, move the king two squares, for
example `e1 g1`. Type `quit` or `exit` to leave the game. The game also ends if
input runs out.

The program rejects a move that is malformed or illegal and asks again. After
each of your moves the engine replies. It reports the number of nodes it
explored, how long it took, and the move it played.

Options:

- `--black`: play the black pieces. The engine then moves first.
- `--depth N`: the engine's search depth in plies. The default is 4 and the
  value must be at least 1.
- `--benchmark`: time the engine instead of playing (see below).

## Using it as a library

```python
from pawnstorm.board import Board
from pawnstorm.pieces import Color
from pawnstorm.ai import ChessAI

board = Board()
print(board.render())

ai = ChessAI()
move = ai.best_move(board, Color.WHITE, 3)
if move is not None:
    board.make_move(move)
print(ai.nodes_explored)
```

- `pawnstorm.pieces` defines `Color`, `PieceType`, `Piece`, `Move` and
  `GameState`.
- `pawnstorm.board.Board` holds the position. Squares are addressed as
  `(rank, file)` from 0 to 7, and rank 0 is White's back rank.
  - `setup` restores the starting position and `clear` empties the board.
    `piece_at` and `set_piece` read and change single squares.
  - `generate_moves` lists pseudo-legal moves. `generate_legal_moves` lists
    only the moves that do not leave the mover's king in check.
  - `make_move` plays a move and `undo_move` takes it back. `applied` is a
    context manager that plays a move and takes it back on exit.
  - `is_in_check`, `is_checkmate`, `is_stalemate` and `is_draw` test the
    position.
  - `evaluate` scores the position from White's point of view.
- `pawnstorm.ai.ChessAI.best_move` returns the best move, or `None` when the
  side has no legal move. It leaves the board unchanged.
- `pawnstorm.game` provides `parse_square`, `parse_move` (which raises
  `MoveInputError` on bad text), `format_move` and `Game`. A `Game` accepts
  its own input and output callables, so it can be driven without a terminal.

## Benchmarking the engine

```
pawnstorm --benchmark
```

This searches the starting position as White 10 times at each of the depths
2, 3, 4 and 5. It prints the average time and the average number of nodes
searched for each depth. Depth 5 can take a long time. For a smaller run,
call the library directly:

```python
from pawnstorm.benchmark import run_benchmark, format_results

print(format_results(run_benchmark([2, 3], 2)))
```

## What it does not do

- The game cannot be saved or loaded.
- It does not read or write FEN or PGN.
- It does not keep a move history, so there is no undo at the prompt.
- It does not detect draws by repetition or by the fifty-move rule.
- There is no time control. The engine always searches to its fixed depth.

## Running the tests

```
pip install ".[test]"
pytest
```