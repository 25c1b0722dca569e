import pytest

from pawnstorm.board import Board, in_bounds
from pawnstorm.pieces import Color, GameState, Move, Piece, PieceType

W, B = Color.WHITE, Color.BLACK


def play(board, color, fx, fy, tx, ty, promotion=PieceType.EMPTY):
    for move in board.generate_legal_moves(color):
        if (move.from_x, move.from_y, move.to_x, move.to_y, move.promotion) == (
            fx,
            fy,
            tx,
            ty,
            promotion,
        ):
            board.make_move(move)
            return move
    raise AssertionError(f"no legal move {fx}{fy}->{tx}{ty}")


@pytest.fixture
def fools_mate():
    board = Board()
    play(board, W, 1, 5, 2, 5)
    play(board, B, 6, 4, 4, 4)
    play(board, W, 1, 6, 3, 6)
    play(board, B, 7, 3, 3, 7)
    return board


def test_in_bounds():
    assert in_bounds(0, 0)
    assert in_bounds(7, 7)
    assert not in_bounds(-1, 3)
    assert not in_bounds(3, 8)


def test_render_start_position():
    lines = Board().render().splitlines()
    assert lines[0] == "8 r n b q k b n r"
    assert lines[-1] == "  a b c d e f g h"
    assert lines[1].split()[1:] == ["p"] * 8
    assert lines[-3].split()[1:] == ["P"] * 8


def test_piece_at_off_board_raises():
    with pytest.raises(IndexError):
        Board().piece_at(8, 0)
    with pytest.raises(IndexError):
        Board().set_piece(0, -1, Piece())


def test_find_king_start():
    board = Board()
    assert board.find_king(W) == (0, 4)
    assert board.find_king(B) == (7, 4)


def test_start_has_twenty_legal_moves():
    board = Board()
    assert len(board.generate_legal_moves(W)) == 20
    assert len(board.generate_legal_moves(B)) == len(board.generate_legal_moves(W))


def test_start_attacks():
    board = Board()
    assert board.is_square_attacked(2, 0, W)
    assert board.is_square_attacked(5, 7, B)
    assert not board.is_square_attacked(4, 4, W)
    assert not board.is_square_attacked(3, 4, B)


def test_applied_context_restores_position():
    board = Board()
    before = board.render()
    move = Move(1, 4, 3, 4)
    with board.applied(move):
        assert board.piece_at(3, 4) == Piece(PieceType.PAWN, W)
        assert board.game_state.has_en_passant
    assert board.render() == before
    assert board.game_state == GameState()


def test_fools_mate_is_checkmate(fools_mate):
    assert fools_mate.is_in_check(W)
    assert fools_mate.is_checkmate(W)
    assert not fools_mate.is_stalemate(W)
    assert not fools_mate.is_checkmate(B)


def test_en_passant_capture_and_undo():
    board = Board()
    play(board, W, 1, 4, 3, 4)
    play(board, B, 6, 0, 5, 0)
    play(board, W, 3, 4, 4, 4)
    play(board, B, 6, 3, 4, 3)
    assert board.game_state.has_en_passant
    assert (board.game_state.en_passant_x, board.game_state.en_passant_y) == (5, 3)
    capture = Move(4, 4, 5, 3, is_en_passant=True)
    assert capture in board.generate_legal_moves(W)
    with board.applied(capture):
        assert board.piece_at(4, 3).is_empty
        assert board.piece_at(5, 3) == Piece(PieceType.PAWN, W)
    assert board.piece_at(4, 3) == Piece(PieceType.PAWN, B)
    assert board.piece_at(5, 3).is_empty


def test_kingside_castling():
    board = Board()
    board.clear()
    board.set_piece(0, 4, Piece(PieceType.KING, W))
    board.set_piece(0, 7, Piece(PieceType.ROOK, W))
    board.set_piece(7, 4, Piece(PieceType.KING, B))
    board.game_state = GameState()
    castle = Move(0, 4, 0, 6, is_castle=True)
    assert castle in board.generate_legal_moves(W)
    with board.applied(castle):
        assert board.piece_at(0, 6) == Piece(PieceType.KING, W)
        assert board.piece_at(0, 5) == Piece(PieceType.ROOK, W)
        assert board.piece_at(0, 7).is_empty
        assert not board.game_state.white_can_castle_kingside
        assert not board.game_state.white_can_castle_queenside
    assert board.piece_at(0, 7) == Piece(PieceType.ROOK, W)
    assert board.game_state.white_can_castle_kingside


def test_rook_move_drops_castling_right():
    board = Board()
    board.clear()
    board.set_piece(0, 4, Piece(PieceType.KING, W))
    board.set_piece(0, 7, Piece(PieceType.ROOK, W))
    board.set_piece(7, 4, Piece(PieceType.KING, B))
    board.game_state = GameState()
    play(board, W, 0, 7, 1, 7)
    assert not board.game_state.white_can_castle_kingside
    assert board.game_state.white_can_castle_queenside


def test_promotion_choices_and_undo():
    board = Board()
    board.clear()
    board.set_piece(6, 0, Piece(PieceType.PAWN, W))
    board.set_piece(0, 4, Piece(PieceType.KING, W))
    board.set_piece(7, 7, Piece(PieceType.KING, B))
    promotions = {
        m.promotion for m in board.generate_legal_moves(W) if (m.from_x, m.from_y) == (6, 0)
    }
    assert promotions == {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}
    move = Move(6, 0, 7, 0, PieceType.QUEEN)
    with board.applied(move):
        assert board.piece_at(7, 0) == Piece(PieceType.QUEEN, W)
        assert board.is_in_check(B)
    assert board.piece_at(6, 0) == Piece(PieceType.PAWN, W)
    assert board.piece_at(7, 0).is_empty


def test_stalemate():
    board = Board()
    board.clear()
    board.set_piece(7, 0, Piece(PieceType.KING, B))
    board.set_piece(5, 1, Piece(PieceType.QUEEN, W))
    board.set_piece(0, 4, Piece(PieceType.KING, W))
    assert board.generate_legal_moves(B) == []
    assert board.is_stalemate(B)
    assert not board.is_checkmate(B)


@pytest.mark.parametrize(
    "extra, expected",
    [
        (None, True),
        (Piece(PieceType.KNIGHT, W), True),
        (Piece(PieceType.BISHOP, B), True),
        (Piece(PieceType.ROOK, W), False),
        (Piece(PieceType.PAWN, B), False),
    ],
)
def test_insufficient_material(extra, expected):
    board = Board()
    board.clear()
    board.set_piece(0, 4, Piece(PieceType.KING, W))
    board.set_piece(7, 4, Piece(PieceType.KING, B))
    if extra is not None:
        board.set_piece(3, 3, extra)
    assert board.is_draw() is expected


def test_start_position_is_not_draw():
    assert not Board().is_draw()


def test_start_position_evaluates_even():
    assert Board().evaluate() == 0


def test_material_advantage_favours_owner():
    board = Board()
    board.set_piece(7, 3, Piece())
    assert board.evaluate() > 0
    board = Board()
    board.set_piece(0, 3, Piece())
    assert board.evaluate() < 0


def test_setup_resets_state():
    board = Board()
    play(board, W, 1, 4, 3, 4)
    board.setup()
    assert board.game_state == GameState()
    assert board.render() == Board().render()