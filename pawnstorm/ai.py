"""Minimax search with alpha-beta pruning over a Board."""

from __future__ import annotations

import math

from .board import Board
from .pieces import Color, Move

MATE_SCORE = 10000


class ChessAI:
    """Fixed-depth minimax engine that counts the nodes it visits."""

    def __init__(self) -> None:
        self.nodes_explored = 0

    def best_move(self, board: Board, color: Color, depth: int) -> Move | None:
        """Best move for color searched to depth plies, or None if it has no legal move.

        The board is left as it was found.
        """
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        self.nodes_explored = 0

        maximizing_root = color is Color.WHITE
        best_score = -math.inf if maximizing_root else math.inf
        best: Move | None = None

        for move in board.generate_legal_moves(color):
            with board.applied(move):
                score = self._minimax(
                    board,
                    depth - 1,
                    -math.inf,
                    math.inf,
                    color.opponent(),
                    maximizing=not maximizing_root,
                )
            if (maximizing_root and score > best_score) or (
                not maximizing_root and score < best_score
            ):
                best_score = score
                best = move
        return best

    def _minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        to_move: Color,
        maximizing: bool,
    ) -> float:
        self.nodes_explored += 1
        if depth == 0:
            return board.evaluate()
        if board.is_checkmate(to_move):
            return -MATE_SCORE if maximizing else MATE_SCORE
        if board.is_stalemate(to_move) or board.is_draw():
            return 0

        moves = board.generate_legal_moves(to_move)
        if maximizing:
            best = -math.inf
            for move in moves:
                with board.applied(move):
                    score = self._minimax(
                        board, depth - 1, alpha, beta, to_move.opponent(), False
                    )
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = math.inf
        for move in moves:
            with board.applied(move):
                score = self._minimax(board, depth - 1, alpha, beta, to_move.opponent(), True)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best