"""Interactive game between a human at the terminal and the engine."""

from __future__ import annotations

import argparse
import time
from collections.abc import Callable
from dataclasses import dataclass

from .ai import ChessAI
from .benchmark import format_results, run_benchmark
from .board import Board
from .pieces import Color, Move, PieceType

PROMPT = "Your move (e.g. e2 e4, or e7 e8 Q for promotion, or 'quit' to exit): "
QUIT_MESSAGE = "Game terminated by player."

_FILES = "abcdefgh"
_RANKS = "12345678"
_QUIT_WORDS = frozenset({"quit", "exit"})
_PROMOTION_BY_LETTER = {
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
}
_LETTER_BY_PROMOTION = {kind: letter for letter, kind in _PROMOTION_BY_LETTER.items()}

_ILLEGAL_MOVE = (
    "Invalid move. This move is not legal in the current position.\n"
    "Make sure:\n"
    "  - You're moving your own piece\n"
    "  - The move follows the piece's movement rules\n"
    "  - The move doesn't put your king in check"
)


class MoveInputError(ValueError):
    """Raised when typed move text cannot be understood."""


@dataclass(frozen=True)
class MoveRequest:
    """A move as typed by the player: origin and target as (rank, file)."""

    origin: tuple[int, int]
    target: tuple[int, int]
    promotion: PieceType = PieceType.EMPTY

    def matches(self, move: Move) -> bool:
        return (
            (move.from_x, move.from_y) == self.origin
            and (move.to_x, move.to_y) == self.target
            and move.promotion is self.promotion
        )


def parse_square(text: str) -> tuple[int, int]:
    """Turn a square name such as 'e2' into (rank, file)."""
    if len(text) != 2 or text[0] not in _FILES or text[1] not in _RANKS:
        raise MoveInputError(
            "Invalid square notation. Use letters a-h and numbers 1-8 (e.g. e2, d4)."
        )
    return _RANKS.index(text[1]), _FILES.index(text[0])


def _square_name(x: int, y: int) -> str:
    return f"{_FILES[y]}{x + 1}"


def parse_move(text: str) -> MoveRequest:
    """Parse 'e2 e4' or 'e7 e8 Q' into a MoveRequest."""
    tokens = text.split()
    if not tokens:
        raise MoveInputError("Please enter a move.")
    if not 2 <= len(tokens) <= 3:
        raise MoveInputError(
            "Invalid input format. Please use format: 'e2 e4' or 'e7 e8 Q'"
        )
    origin = parse_square(tokens[0])
    target = parse_square(tokens[1])

    promotion = PieceType.EMPTY
    if len(tokens) == 3:
        letter = tokens[2]
        if len(letter) != 1:
            raise MoveInputError(
                "Promotion piece must be a single character (Q, R, B, or N)."
            )
        try:
            promotion = _PROMOTION_BY_LETTER[letter.upper()]
        except KeyError:
            raise MoveInputError(
                "Invalid promotion piece. Use Q (Queen), R (Rook), B (Bishop), or N (Knight)."
            ) from None
    return MoveRequest(origin, target, promotion)


def format_move(move: Move) -> str:
    """Describe a move as 'e2 to e4', with promotion, castle and en passant notes."""
    text = f"{_square_name(move.from_x, move.from_y)} to {_square_name(move.to_x, move.to_y)}"
    if move.promotion is not PieceType.EMPTY:
        text += f" ({_LETTER_BY_PROMOTION.get(move.promotion, 'Q')})"
    if move.is_castle:
        text += " (Castle)"
    if move.is_en_passant:
        text += " (En Passant)"
    return text


class Game:
    """A human against the engine, taking turns until the game ends or the human quits."""

    def __init__(
        self,
        human_color: Color = Color.WHITE,
        input_func: Callable[[str], str] | None = None,
        output: Callable[[str], object] | None = None,
        depth: int = 4,
    ) -> None:
        self.board = Board()
        self.ai = ChessAI()
        self.human_color = human_color
        self.depth = depth
        self._input = input_func
        self._output = output

    def _ask(self, prompt: str) -> str:
        return (self._input or input)(prompt)

    def _say(self, text: str) -> None:
        (self._output or print)(text)

    def _outcome(self) -> str | None:
        board = self.board
        if board.is_checkmate(Color.WHITE):
            return "Black wins by checkmate!"
        if board.is_checkmate(Color.BLACK):
            return "White wins by checkmate!"
        if board.is_stalemate(Color.WHITE) or board.is_stalemate(Color.BLACK):
            return "Draw by stalemate!"
        if board.is_draw():
            return "Draw by insufficient material!"
        return None

    def play(self) -> str:
        """Run the game loop; return the message that ended the game."""
        while True:
            self._say(self.board.render())
            outcome = self._outcome()
            if outcome is not None:
                self._say(outcome)
                return outcome

            if self.board.is_in_check(Color.WHITE):
                self._say("White is in check!")
            if self.board.is_in_check(Color.BLACK):
                self._say("Black is in check!")

            human = self.human_color
            engine = human.opponent()
            if human is Color.WHITE:
                if not self.player_turn(human):
                    return QUIT_MESSAGE
                self._say(self.board.render())
                self.ai_turn(engine)
            else:
                self.ai_turn(engine)
                self._say(self.board.render())
                if not self.player_turn(human):
                    return QUIT_MESSAGE

    def player_turn(self, color: Color) -> bool:
        """Ask until a legal move is entered and play it; False if the player quits."""
        while True:
            try:
                text = self._ask(PROMPT).strip()
            except EOFError:
                self._say(QUIT_MESSAGE)
                return False
            if text in _QUIT_WORDS:
                self._say(QUIT_MESSAGE)
                return False
            try:
                request = parse_move(text)
            except MoveInputError as error:
                self._say(str(error))
                continue

            move = next(
                (m for m in self.board.generate_legal_moves(color) if request.matches(m)),
                None,
            )
            if move is None:
                self._say(_ILLEGAL_MOVE)
                continue
            self.board.make_move(move)
            return True

    def ai_turn(self, color: Color) -> Move | None:
        """Let the engine choose and play a move for color; return it, or None if it has none."""
        self._say("AI is thinking...")
        start = time.perf_counter()
        best = self.ai.best_move(self.board, color, self.depth)
        elapsed = time.perf_counter() - start
        if best is not None:
            self._say(f"Nodes explored: {self.ai.nodes_explored}")
        self._say(f"AI took {elapsed:g} seconds to decide the move.")

        if best is None:
            self._say("AI has no legal moves!")
            return None
        self.board.make_move(best)
        self._say(f"AI played: {format_move(best)}")
        return best


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point: play a game, or time the engine with --benchmark."""
    parser = argparse.ArgumentParser(
        prog="pawnstorm", description="Play chess against a minimax engine."
    )
    parser.add_argument("--black", action="store_true", help="play the black pieces")
    parser.add_argument("--depth", type=int, default=4, help="engine search depth in plies")
    parser.add_argument(
        "--benchmark", action="store_true", help="time the engine instead of playing"
    )
    args = parser.parse_args(argv)
    if args.depth < 1:
        parser.error("--depth must be at least 1")

    if args.benchmark:
        print(format_results(run_benchmark()))
        return 0

    print("Starting a new game...")
    human = Color.BLACK if args.black else Color.WHITE
    Game(human_color=human, depth=args.depth).play()
    return 0