"""Chess board: move generation, make/unmake, end-of-game tests and evaluation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from .pieces import Color, GameState, Move, Piece, PieceType

BOARD_SIZE = 8
EMPTY_SQUARE = Piece()

_PAWN_TABLE = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (50, 50, 50, 50, 50, 50, 50, 50),
    (10, 10, 20, 30, 30, 20, 10, 10),
    (5, 5, 10, 25, 25, 10, 5, 5),
    (0, 0, 0, 20, 20, 0, 0, 0),
    (5, -5, -10, 0, 0, -10, -5, 5),
    (5, 10, 10, -20, -20, 10, 10, 5),
    (0, 0, 0, 0, 0, 0, 0, 0),
)

_KNIGHT_TABLE = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20, 0, 0, 0, 0, -20, -40),
    (-30, 0, 10, 15, 15, 10, 0, -30),
    (-30, 5, 15, 20, 20, 15, 5, -30),
    (-30, 0, 15, 20, 20, 15, 0, -30),
    (-30, 5, 10, 15, 15, 10, 5, -30),
    (-40, -20, 0, 5, 5, 0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

_BISHOP_TABLE = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10, 0, 0, 0, 0, 0, 0, -10),
    (-10, 0, 5, 10, 10, 5, 0, -10),
    (-10, 5, 5, 10, 10, 5, 5, -10),
    (-10, 0, 10, 10, 10, 10, 0, -10),
    (-10, 10, 10, 10, 10, 10, 10, -10),
    (-10, 5, 0, 0, 0, 0, 5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

_KING_TABLE = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    (20, 20, 0, 0, 0, 0, 20, 20),
    (20, 30, 10, 0, 0, 10, 30, 20),
)

_MATERIAL = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

_POSITION_TABLES = {
    PieceType.PAWN: _PAWN_TABLE,
    PieceType.KNIGHT: _KNIGHT_TABLE,
    PieceType.BISHOP: _BISHOP_TABLE,
    PieceType.KING: _KING_TABLE,
}

_KNIGHT_ATTACKS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
_KNIGHT_JUMPS = ((-2, 1), (-1, 2), (1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1))
_DIAGONALS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
_STRAIGHTS = ((-1, 0), (1, 0), (0, -1), (0, 1))
_KING_STEPS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)
_PROMOTIONS = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_NO_RIGHTS = GameState(
    white_can_castle_kingside=False,
    white_can_castle_queenside=False,
    black_can_castle_kingside=False,
    black_can_castle_queenside=False,
)


def in_bounds(x: int, y: int) -> bool:
    """True when (x, y) lies on the board."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def _ray(x: int, y: int, dx: int, dy: int) -> Iterator[tuple[int, int]]:
    nx, ny = x + dx, y + dy
    while in_bounds(nx, ny):
        yield nx, ny
        nx, ny = nx + dx, ny + dy


class Board:
    """An 8x8 board indexed by (rank, file), rank 0 being white's back rank."""

    def __init__(self) -> None:
        self._grid: list[list[Piece]] = []
        self.game_state = GameState()
        self.setup()

    def setup(self) -> None:
        """Place the standard starting position and reset the game state."""
        self._grid = [[EMPTY_SQUARE] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for file, kind in enumerate(_BACK_RANK):
            self._grid[0][file] = Piece(kind, Color.WHITE)
            self._grid[1][file] = Piece(PieceType.PAWN, Color.WHITE)
            self._grid[6][file] = Piece(PieceType.PAWN, Color.BLACK)
            self._grid[7][file] = Piece(kind, Color.BLACK)
        self.game_state = GameState()

    def clear(self) -> None:
        """Empty every square and drop all castling and en passant rights."""
        self._grid = [[EMPTY_SQUARE] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.game_state = _NO_RIGHTS

    def render(self) -> str:
        """Text diagram of the board, rank 8 at the top."""
        lines = [
            f"{rank + 1} " + " ".join(piece.symbol() for piece in self._grid[rank])
            for rank in reversed(range(BOARD_SIZE))
        ]
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def piece_at(self, x: int, y: int) -> Piece:
        if not in_bounds(x, y):
            raise IndexError(f"square ({x}, {y}) is off the board")
        return self._grid[x][y]

    def set_piece(self, x: int, y: int, piece: Piece) -> None:
        if not in_bounds(x, y):
            raise IndexError(f"square ({x}, {y}) is off the board")
        self._grid[x][y] = piece

    def find_king(self, color: Color) -> tuple[int, int] | None:
        """Square of the king of the given colour, or None if it is absent."""
        king = Piece(PieceType.KING, color)
        for x, rank in enumerate(self._grid):
            for y, piece in enumerate(rank):
                if piece == king:
                    return x, y
        return None

    def _holds(self, x: int, y: int, kind: PieceType, color: Color) -> bool:
        return in_bounds(x, y) and self._grid[x][y] == Piece(kind, color)

    def _slider_hits(
        self, x: int, y: int, dirs, kinds: tuple[PieceType, ...], by_color: Color
    ) -> bool:
        for dx, dy in dirs:
            for nx, ny in _ray(x, y, dx, dy):
                piece = self._grid[nx][ny]
                if not piece.is_empty:
                    if piece.color is by_color and piece.type in kinds:
                        return True
                    break
        return False

    def is_square_attacked(self, x: int, y: int, by_color: Color) -> bool:
        """True when a piece of by_color attacks square (x, y)."""
        pawn_dir = 1 if by_color is Color.WHITE else -1
        if any(self._holds(x - pawn_dir, y + dy, PieceType.PAWN, by_color) for dy in (-1, 1)):
            return True
        if any(
            self._holds(x + dx, y + dy, PieceType.KNIGHT, by_color)
            for dx, dy in _KNIGHT_ATTACKS
        ):
            return True
        if self._slider_hits(x, y, _DIAGONALS, (PieceType.BISHOP, PieceType.QUEEN), by_color):
            return True
        if self._slider_hits(x, y, _STRAIGHTS, (PieceType.ROOK, PieceType.QUEEN), by_color):
            return True
        return any(
            self._holds(x + dx, y + dy, PieceType.KING, by_color) for dx, dy in _KING_STEPS
        )

    def is_in_check(self, color: Color) -> bool:
        king = self.find_king(color)
        if king is None:
            return False
        return self.is_square_attacked(*king, color.opponent())

    def make_move(self, move: Move) -> None:
        """Play a move, updating castling rights and the en passant square."""
        grid = self._grid
        mover = grid[move.from_x][move.from_y]

        if move.is_en_passant:
            grid[move.from_x][move.to_y] = EMPTY_SQUARE

        if move.is_castle:
            rank = grid[move.from_x]
            if move.to_y == 6:
                rank[5], rank[7] = rank[7], EMPTY_SQUARE
            elif move.to_y == 2:
                rank[3], rank[0] = rank[0], EMPTY_SQUARE

        grid[move.to_x][move.to_y] = mover
        grid[move.from_x][move.from_y] = EMPTY_SQUARE

        if move.promotion is not PieceType.EMPTY:
            grid[move.to_x][move.to_y] = Piece(move.promotion, mover.color)

        self._update_state(move, mover)

    def undo_move(self, move: Move, captured: Piece, prev_state: GameState) -> None:
        """Take back a move made with make_move."""
        grid = self._grid
        mover = grid[move.to_x][move.to_y]
        if move.promotion is not PieceType.EMPTY:
            mover = Piece(PieceType.PAWN, mover.color)

        grid[move.from_x][move.from_y] = mover
        grid[move.to_x][move.to_y] = captured

        if move.is_en_passant:
            grid[move.from_x][move.to_y] = Piece(PieceType.PAWN, mover.color.opponent())
            grid[move.to_x][move.to_y] = EMPTY_SQUARE

        if move.is_castle:
            rank = grid[move.from_x]
            if move.to_y == 6:
                rank[7], rank[5] = rank[5], EMPTY_SQUARE
            elif move.to_y == 2:
                rank[0], rank[3] = rank[3], EMPTY_SQUARE

        self.game_state = prev_state

    @contextmanager
    def applied(self, move: Move) -> Iterator[Board]:
        """Play a move for the duration of a with block, then take it back."""
        prev_state = self.game_state
        captured = self.piece_at(move.to_x, move.to_y)
        self.make_move(move)
        try:
            yield self
        finally:
            self.undo_move(move, captured, prev_state)

    def _update_state(self, move: Move, mover: Piece) -> None:
        state = replace(self.game_state, has_en_passant=False)

        if mover.type is PieceType.PAWN and abs(move.to_x - move.from_x) == 2:
            state = replace(
                state,
                en_passant_x=(move.from_x + move.to_x) // 2,
                en_passant_y=move.from_y,
                has_en_passant=True,
            )

        if mover.type is PieceType.KING:
            if mover.color is Color.WHITE:
                state = replace(
                    state, white_can_castle_kingside=False, white_can_castle_queenside=False
                )
            else:
                state = replace(
                    state, black_can_castle_kingside=False, black_can_castle_queenside=False
                )

        if mover.type is PieceType.ROOK:
            origin = (move.from_x, move.from_y)
            if mover.color is Color.WHITE:
                if origin == (0, 0):
                    state = replace(state, white_can_castle_queenside=False)
                if origin == (0, 7):
                    state = replace(state, white_can_castle_kingside=False)
            else:
                if origin == (7, 0):
                    state = replace(state, black_can_castle_queenside=False)
                if origin == (7, 7):
                    state = replace(state, black_can_castle_kingside=False)

        target = (move.to_x, move.to_y)
        if target == (0, 0):
            state = replace(state, white_can_castle_queenside=False)
        if target == (0, 7):
            state = replace(state, white_can_castle_kingside=False)
        if target == (7, 0):
            state = replace(state, black_can_castle_queenside=False)
        if target == (7, 7):
            state = replace(state, black_can_castle_kingside=False)

        self.game_state = state

    def generate_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves for color, ignoring whether the king is left in check."""
        generators = {
            PieceType.PAWN: self._pawn_moves,
            PieceType.KNIGHT: self._knight_moves,
            PieceType.BISHOP: self._bishop_moves,
            PieceType.ROOK: self._rook_moves,
            PieceType.QUEEN: self._queen_moves,
            PieceType.KING: self._king_moves,
        }
        moves: list[Move] = []
        for x, rank in enumerate(self._grid):
            for y, piece in enumerate(rank):
                if piece.is_empty or piece.color is not color:
                    continue
                moves.extend(generators[piece.type](x, y, color))
        return moves

    def _pawn_moves(self, x: int, y: int, color: Color) -> Iterator[Move]:
        direction = 1 if color is Color.WHITE else -1
        start_rank = 1 if color is Color.WHITE else 6
        promotion_rank = 7 if color is Color.WHITE else 0
        ahead = x + direction

        def advance(tx: int, ty: int) -> Iterator[Move]:
            if tx == promotion_rank:
                for kind in _PROMOTIONS:
                    yield Move(x, y, tx, ty, kind)
            else:
                yield Move(x, y, tx, ty)

        if in_bounds(ahead, y) and self._grid[ahead][y].is_empty:
            yield from advance(ahead, y)
            if x == start_rank and self._grid[x + 2 * direction][y].is_empty:
                yield Move(x, y, x + 2 * direction, y)

        for dy in (-1, 1):
            if in_bounds(ahead, y + dy):
                target = self._grid[ahead][y + dy]
                if not target.is_empty and target.color is not color:
                    yield from advance(ahead, y + dy)

        state = self.game_state
        if state.has_en_passant and ahead == state.en_passant_x:
            if state.en_passant_y in (y + 1, y - 1):
                yield Move(x, y, state.en_passant_x, state.en_passant_y, is_en_passant=True)

    def _step_moves(self, x: int, y: int, color: Color, steps) -> Iterator[Move]:
        for dx, dy in steps:
            nx, ny = x + dx, y + dy
            if in_bounds(nx, ny):
                target = self._grid[nx][ny]
                if target.is_empty or target.color is not color:
                    yield Move(x, y, nx, ny)

    def _slide_moves(self, x: int, y: int, color: Color, dirs) -> Iterator[Move]:
        for dx, dy in dirs:
            for nx, ny in _ray(x, y, dx, dy):
                target = self._grid[nx][ny]
                if target.is_empty:
                    yield Move(x, y, nx, ny)
                    continue
                if target.color is not color:
                    yield Move(x, y, nx, ny)
                break

    def _knight_moves(self, x: int, y: int, color: Color) -> Iterator[Move]:
        return self._step_moves(x, y, color, _KNIGHT_JUMPS)

    def _bishop_moves(self, x: int, y: int, color: Color) -> Iterator[Move]:
        return self._slide_moves(x, y, color, _DIAGONALS)

    def _rook_moves(self, x: int, y: int, color: Color) -> Iterator[Move]:
        return self._slide_moves(x, y, color, _STRAIGHTS)

    def _queen_moves(self, x: int, y: int, color: Color) -> Iterator[Move]:
        yield from self._bishop_moves(x, y, color)
        yield from self._rook_moves(x, y, color)

    def _king_moves(self, x: int, y: int, color: Color) -> Iterator[Move]:
        yield from self._step_moves(x, y, color, _KING_STEPS)

        if self.is_in_check(color):
            return
        state = self.game_state
        enemy = color.opponent()
        if color is Color.WHITE:
            rank, kingside, queenside = (
                0,
                state.white_can_castle_kingside,
                state.white_can_castle_queenside,
            )
        else:
            rank, kingside, queenside = (
                7,
                state.black_can_castle_kingside,
                state.black_can_castle_queenside,
            )
        row = self._grid[rank]

        if (
            kingside
            and row[5].is_empty
            and row[6].is_empty
            and not self.is_square_attacked(rank, 5, enemy)
            and not self.is_square_attacked(rank, 6, enemy)
        ):
            yield Move(x, y, rank, 6, is_castle=True)
        if (
            queenside
            and row[1].is_empty
            and row[2].is_empty
            and row[3].is_empty
            and not self.is_square_attacked(rank, 2, enemy)
            and not self.is_square_attacked(rank, 3, enemy)
        ):
            yield Move(x, y, rank, 2, is_castle=True)

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """Moves for color that do not leave its own king in check."""
        legal = []
        for move in self.generate_moves(color):
            with self.applied(move):
                if not self.is_in_check(color):
                    legal.append(move)
        return legal

    def is_checkmate(self, color: Color) -> bool:
        return self.is_in_check(color) and not self.generate_legal_moves(color)

    def is_stalemate(self, color: Color) -> bool:
        return not self.is_in_check(color) and not self.generate_legal_moves(color)

    def is_draw(self) -> bool:
        """Draw by insufficient material: bare kings, or one minor piece against a bare king."""
        white: list[PieceType] = []
        black: list[PieceType] = []
        for rank in self._grid:
            for piece in rank:
                if piece.is_empty or piece.type is PieceType.KING:
                    continue
                (white if piece.color is Color.WHITE else black).append(piece.type)

        if not white and not black:
            return True
        minors = (PieceType.BISHOP, PieceType.KNIGHT)
        if len(white) == 1 and not black and white[0] in minors:
            return True
        if len(black) == 1 and not white and black[0] in minors:
            return True
        return False

    def _mobility(self) -> int:
        white = len(self.generate_moves(Color.WHITE))
        black = len(self.generate_moves(Color.BLACK))
        return (white - black) * 10

    def _pawn_structure(self) -> int:
        white_pawn = Piece(PieceType.PAWN, Color.WHITE)
        black_pawn = Piece(PieceType.PAWN, Color.BLACK)

        def count(file: int, pawn: Piece) -> int:
            return sum(1 for rank in self._grid if rank[file] == pawn)

        score = 0
        for file in range(BOARD_SIZE):
            white_pawns = count(file, white_pawn)
            black_pawns = count(file, black_pawn)
            if white_pawns > 1:
                score -= (white_pawns - 1) * 50
            if black_pawns > 1:
                score += (black_pawns - 1) * 50
            if white_pawns == 1:
                neighbours = [f for f in (file - 1, file + 1) if 0 <= f < BOARD_SIZE]
                if not any(count(f, white_pawn) for f in neighbours):
                    score -= 20
        return score

    def evaluate(self) -> int:
        """Static score from white's point of view: positive favours white."""
        score = 0
        for x, rank in enumerate(self._grid):
            for y, piece in enumerate(rank):
                if piece.is_empty:
                    continue
                value = _MATERIAL[piece.type]
                table = _POSITION_TABLES.get(piece.type)
                if table is not None:
                    row = x if piece.color is Color.WHITE else 7 - x
                    value += table[row][y]
                score += value if piece.color is Color.WHITE else -value
        return score + self._mobility() + self._pawn_structure()