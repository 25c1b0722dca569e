import pytest

from pawnstorm.ai import ChessAI
from pawnstorm.board import Board
from pawnstorm.pieces import Color, Move, Piece, PieceType


def _back_rank_mate_for_white() -> Board:
    board = Board()
    board.clear()
    board.set_piece(0, 4, Piece(PieceType.KING, Color.WHITE))
    board.set_piece(0, 0, Piece(PieceType.ROOK, Color.WHITE))
    board.set_piece(7, 7, Piece(PieceType.KING, Color.BLACK))
    board.set_piece(6, 6, Piece(PieceType.PAWN, Color.BLACK))
    board.set_piece(6, 7, Piece(PieceType.PAWN, Color.BLACK))
    return board


def _back_rank_mate_for_black() -> Board:
    board = Board()
    board.clear()
    board.set_piece(7, 4, Piece(PieceType.KING, Color.BLACK))
    board.set_piece(7, 0, Piece(PieceType.ROOK, Color.BLACK))
    board.set_piece(0, 7, Piece(PieceType.KING, Color.WHITE))
    board.set_piece(1, 6, Piece(PieceType.PAWN, Color.WHITE))
    board.set_piece(1, 7, Piece(PieceType.PAWN, Color.WHITE))
    return board


def test_depth_below_one_is_rejected():
    with pytest.raises(ValueError):
        ChessAI().best_move(Board(), Color.WHITE, 0)


def test_white_finds_mate_in_one():
    board = _back_rank_mate_for_white()
    move = ChessAI().best_move(board, Color.WHITE, 2)
    assert move == Move(0, 0, 7, 0)
    board.make_move(move)
    assert board.is_checkmate(Color.BLACK)


def test_black_finds_mate_in_one():
    board = _back_rank_mate_for_black()
    move = ChessAI().best_move(board, Color.BLACK, 2)
    assert move == Move(7, 0, 0, 0)
    board.make_move(move)
    assert board.is_checkmate(Color.WHITE)


def test_takes_hanging_queen():
    board = Board()
    board.clear()
    board.set_piece(0, 7, Piece(PieceType.KING, Color.WHITE))
    board.set_piece(0, 0, Piece(PieceType.ROOK, Color.WHITE))
    board.set_piece(5, 0, Piece(PieceType.QUEEN, Color.BLACK))
    board.set_piece(7, 7, Piece(PieceType.KING, Color.BLACK))
    assert ChessAI().best_move(board, Color.WHITE, 1) == Move(0, 0, 5, 0)


def test_no_legal_moves_gives_none():
    board = Board()
    board.clear()
    board.set_piece(0, 0, Piece(PieceType.KING, Color.WHITE))
    board.set_piece(2, 1, Piece(PieceType.QUEEN, Color.BLACK))
    board.set_piece(7, 7, Piece(PieceType.KING, Color.BLACK))
    assert ChessAI().best_move(board, Color.WHITE, 2) is None


def test_search_leaves_board_untouched():
    board = _back_rank_mate_for_white()
    before = board.render()
    state = board.game_state
    ChessAI().best_move(board, Color.WHITE, 2)
    assert board.render() == before
    assert board.game_state == state


def test_move_from_start_is_legal():
    board = Board()
    move = ChessAI().best_move(board, Color.WHITE, 1)
    assert move in board.generate_legal_moves(Color.WHITE)


def test_node_count_resets_between_searches():
    ai = ChessAI()
    board = Board()
    ai.best_move(board, Color.WHITE, 1)
    first = ai.nodes_explored
    ai.best_move(board, Color.WHITE, 1)
    assert first == ai.nodes_explored
    assert first == len(board.generate_legal_moves(Color.WHITE))