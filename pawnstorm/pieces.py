"""Basic chess values: colours, piece kinds, pieces, moves and game state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Side to move or owner of a piece."""

    WHITE = 0
    BLACK = 1

    def opponent(self) -> Color:
        """Return the other side."""
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceType(Enum):
    """Kind of piece occupying a square; EMPTY marks a vacant square."""

    EMPTY = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


_LETTERS = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


@dataclass(frozen=True)
class Piece:
    """Content of one square."""

    type: PieceType = PieceType.EMPTY
    color: Color = Color.WHITE

    @property
    def is_empty(self) -> bool:
        return self.type is PieceType.EMPTY

    def symbol(self) -> str:
        """Board letter: upper case for white, lower case for black, '.' if empty."""
        if self.is_empty:
            return "."
        letter = _LETTERS[self.type]
        return letter.lower() if self.color is Color.BLACK else letter


@dataclass(frozen=True)
class Move:
    """A move from (from_x, from_y) to (to_x, to_y); x is the rank, y the file."""

    from_x: int
    from_y: int
    to_x: int
    to_y: int
    promotion: PieceType = PieceType.EMPTY
    is_en_passant: bool = False
    is_castle: bool = False


@dataclass(frozen=True)
class GameState:
    """Castling rights and the current en passant target square."""

    white_can_castle_kingside: bool = True
    white_can_castle_queenside: bool = True
    black_can_castle_kingside: bool = True
    black_can_castle_queenside: bool = True
    en_passant_x: int = -1
    en_passant_y: int = -1
    has_en_passant: bool = False