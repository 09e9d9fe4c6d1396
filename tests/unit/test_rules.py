"""
走法规则单元测试
"""

import pytest

from xqengine.board import Board, initial_board
from xqengine.rules import (
    all_legal_moves,
    count_between,
    is_in_check,
    is_legal,
    is_pseudo_legal,
    legal_moves,
)
from xqengine.types import Move, Piece, PieceType, Side

RED_KING = Piece(PieceType.KING, Side.RED)
BLACK_KING = Piece(PieceType.KING, Side.BLACK)


def red(piece_type: PieceType) -> Piece:
    return Piece(piece_type, Side.RED)


def black(piece_type: PieceType) -> Piece:
    return Piece(piece_type, Side.BLACK)


class TestCommonRules:
    """通用规则测试"""

    def test_no_piece_at_origin(self):
        assert not is_pseudo_legal(initial_board(), 4, 4, 4, 5)

    def test_out_of_board(self):
        board = initial_board()
        assert not is_pseudo_legal(board, 0, 9, -1, 9)
        assert not is_pseudo_legal(board, 0, 9, 0, 10)
        assert not is_pseudo_legal(board, 9, 9, 8, 9)

    def test_cannot_capture_own_piece(self):
        """不能吃己方棋子"""
        assert not is_pseudo_legal(initial_board(), 0, 9, 1, 9)

    def test_cannot_stay_in_place(self):
        assert not is_pseudo_legal(initial_board(), 1, 7, 1, 7)

    def test_count_between(self):
        board = initial_board()
        assert count_between(board, 4, 0, 4, 9) == 2
        assert count_between(board, 0, 3, 8, 3) == 3
        assert count_between(board, 0, 4, 8, 4) == 0


class TestKing:
    """将/帅测试"""

    def test_one_step_orthogonal(self):
        board = Board.from_pieces({(4, 9): RED_KING})
        assert is_pseudo_legal(board, 4, 9, 4, 8)
        assert is_pseudo_legal(board, 4, 9, 3, 9)
        assert not is_pseudo_legal(board, 4, 9, 3, 8)
        assert not is_pseudo_legal(board, 4, 9, 4, 7)

    def test_confined_to_palace(self):
        """不能出九宫"""
        board = Board.from_pieces({(3, 7): RED_KING, (5, 2): BLACK_KING})
        assert not is_pseudo_legal(board, 3, 7, 3, 6)
        assert not is_pseudo_legal(board, 3, 7, 2, 7)
        assert is_pseudo_legal(board, 3, 7, 4, 7)
        assert not is_pseudo_legal(board, 5, 2, 5, 3)
        assert not is_pseudo_legal(board, 5, 2, 6, 2)
        assert is_pseudo_legal(board, 5, 2, 5, 1)


class TestAdvisor:
    """士/仕测试"""

    def test_diagonal_in_palace(self):
        board = Board.from_pieces({(3, 9): red(PieceType.ADVISOR), (4, 8): red(PieceType.ADVISOR)})
        assert not is_pseudo_legal(board, 3, 9, 4, 8)
        assert is_pseudo_legal(board, 4, 8, 5, 7)
        assert is_pseudo_legal(board, 4, 8, 3, 7)

    def test_cannot_leave_palace(self):
        board = Board.from_pieces({(3, 9): red(PieceType.ADVISOR), (5, 2): black(PieceType.ADVISOR)})
        assert not is_pseudo_legal(board, 3, 9, 2, 8)
        assert not is_pseudo_legal(board, 5, 2, 6, 3)
        assert is_pseudo_legal(board, 5, 2, 4, 1)

    def test_orthogonal_not_allowed(self):
        board = Board.from_pieces({(4, 8): red(PieceType.ADVISOR)})
        assert not is_pseudo_legal(board, 4, 8, 4, 7)


class TestElephant:
    """象/相测试"""

    def test_two_step_diagonal(self):
        board = Board.from_pieces({(2, 9): red(PieceType.ELEPHANT)})
        assert is_pseudo_legal(board, 2, 9, 4, 7)
        assert is_pseudo_legal(board, 2, 9, 0, 7)
        assert not is_pseudo_legal(board, 2, 9, 3, 8)
        assert not is_pseudo_legal(board, 2, 9, 2, 7)

    @pytest.mark.parametrize("eye_piece", [red(PieceType.PAWN), black(PieceType.PAWN)])
    def test_blocked_eye(self, eye_piece):
        """象眼有子（无论哪方）则不能走"""
        board = Board.from_pieces({(2, 9): red(PieceType.ELEPHANT), (3, 8): eye_piece})
        assert not is_pseudo_legal(board, 2, 9, 4, 7)
        assert is_pseudo_legal(board, 2, 9, 0, 7)

    def test_cannot_cross_river(self):
        """不能过河"""
        board = Board.from_pieces({(2, 5): red(PieceType.ELEPHANT), (2, 4): black(PieceType.ELEPHANT)})
        assert not is_pseudo_legal(board, 2, 5, 4, 3)
        assert is_pseudo_legal(board, 2, 5, 4, 7)
        assert not is_pseudo_legal(board, 2, 4, 4, 6)
        assert is_pseudo_legal(board, 2, 4, 0, 2)


class TestHorse:
    """马测试"""

    def test_l_shape(self):
        board = Board.from_pieces({(4, 5): red(PieceType.HORSE)})
        targets = set(legal_moves(board, 4, 5))
        assert targets == {(3, 3), (5, 3), (3, 7), (5, 7), (2, 4), (2, 6), (6, 4), (6, 6)}

    def test_blocked_leg_vertical(self):
        """纵向马腿被绊"""
        board = Board.from_pieces({(1, 9): red(PieceType.HORSE), (1, 8): black(PieceType.PAWN)})
        assert not is_pseudo_legal(board, 1, 9, 2, 7)
        assert not is_pseudo_legal(board, 1, 9, 0, 7)

    def test_blocked_leg_horizontal(self):
        """横向马腿被绊"""
        board = Board.from_pieces({(1, 9): red(PieceType.HORSE), (2, 9): red(PieceType.ELEPHANT)})
        assert not is_pseudo_legal(board, 1, 9, 3, 8)
        assert is_pseudo_legal(board, 1, 9, 2, 7)

    def test_diagonal_neighbour_does_not_block(self):
        board = Board.from_pieces({(4, 5): red(PieceType.HORSE), (5, 4): black(PieceType.PAWN)})
        assert is_pseudo_legal(board, 4, 5, 5, 3)
        assert is_pseudo_legal(board, 4, 5, 6, 4)


class TestChariot:
    """车测试"""

    def test_open_lines(self):
        board = Board.from_pieces({(0, 9): red(PieceType.CHARIOT)})
        assert is_pseudo_legal(board, 0, 9, 0, 0)
        assert is_pseudo_legal(board, 0, 9, 8, 9)
        assert not is_pseudo_legal(board, 0, 9, 1, 8)
        assert len(legal_moves(board, 0, 9)) == 17

    def test_blocked(self):
        board = Board.from_pieces({(0, 9): red(PieceType.CHARIOT), (0, 5): black(PieceType.PAWN)})
        assert is_pseudo_legal(board, 0, 9, 0, 5)
        assert not is_pseudo_legal(board, 0, 9, 0, 4)


class TestCannon:
    """炮测试"""

    def _board(self, *screens: tuple[int, int]) -> Board:
        pieces = {(1, 7): red(PieceType.CANNON), (1, 0): black(PieceType.CHARIOT)}
        for pos in screens:
            pieces[pos] = black(PieceType.PAWN)
        return Board.from_pieces(pieces)

    def test_capture_without_screen(self):
        """无炮架不能吃子"""
        assert not is_pseudo_legal(self._board(), 1, 7, 1, 0)

    def test_capture_with_one_screen(self):
        """隔一子可以吃"""
        assert is_pseudo_legal(self._board((1, 3)), 1, 7, 1, 0)

    def test_capture_with_two_screens(self):
        """隔两子不能吃"""
        assert not is_pseudo_legal(self._board((1, 3), (1, 4)), 1, 7, 1, 0)

    def test_quiet_move_needs_clear_path(self):
        board = self._board((1, 3))
        assert is_pseudo_legal(board, 1, 7, 1, 4)
        assert not is_pseudo_legal(board, 1, 7, 1, 2)

    def test_horizontal_capture(self):
        board = Board.from_pieces(
            {(0, 5): red(PieceType.CANNON), (4, 5): red(PieceType.PAWN), (8, 5): black(PieceType.HORSE)}
        )
        assert is_pseudo_legal(board, 0, 5, 8, 5)
        assert not is_pseudo_legal(board, 0, 5, 4, 5)


class TestPawn:
    """兵/卒测试"""

    def test_red_before_river(self):
        """红兵未过河只能前进"""
        board = Board.from_pieces({(4, 6): red(PieceType.PAWN)})
        assert legal_moves(board, 4, 6) == [(4, 5)]

    def test_red_at_river_bank(self):
        board = Board.from_pieces({(4, 5): red(PieceType.PAWN)})
        assert legal_moves(board, 4, 5) == [(4, 4)]

    def test_red_after_river(self):
        """过河后可以左右走，不能后退"""
        board = Board.from_pieces({(4, 4): red(PieceType.PAWN)})
        assert set(legal_moves(board, 4, 4)) == {(4, 3), (3, 4), (5, 4)}

    def test_black_before_river(self):
        board = Board.from_pieces({(4, 3): black(PieceType.PAWN)})
        assert legal_moves(board, 4, 3) == [(4, 4)]

    def test_black_after_river(self):
        board = Board.from_pieces({(4, 5): black(PieceType.PAWN)})
        assert set(legal_moves(board, 4, 5)) == {(3, 5), (5, 5), (4, 6)}

    def test_no_forward_at_last_rank(self):
        board = Board.from_pieces({(0, 0): red(PieceType.PAWN)})
        assert legal_moves(board, 0, 0) == [(1, 0)]


class TestCheck:
    """将军测试"""

    def test_flying_general(self):
        """将帅对面双方都算被将军"""
        board = Board.from_pieces({(4, 0): BLACK_KING, (4, 9): RED_KING})
        assert is_in_check(board, Side.RED)
        assert is_in_check(board, Side.BLACK)

    def test_flying_general_blocked(self):
        board = Board.from_pieces({(4, 0): BLACK_KING, (4, 9): RED_KING, (4, 5): red(PieceType.PAWN)})
        assert not is_in_check(board, Side.RED)
        assert not is_in_check(board, Side.BLACK)

    def test_chariot_check(self):
        board = Board.from_pieces({(4, 0): BLACK_KING, (3, 9): RED_KING, (0, 0): red(PieceType.CHARIOT)})
        assert is_in_check(board, Side.BLACK)
        assert not is_in_check(board, Side.RED)

    def test_horse_check(self):
        board = Board.from_pieces({(4, 0): BLACK_KING, (3, 9): RED_KING, (5, 2): red(PieceType.HORSE)})
        assert is_in_check(board, Side.BLACK)

    def test_missing_king_not_in_check(self):
        """没有将时不算被将军"""
        board = Board.from_pieces({(4, 9): RED_KING, (4, 5): red(PieceType.CHARIOT)})
        assert not is_in_check(board, Side.BLACK)

    def test_initial_position(self):
        board = initial_board()
        assert not is_in_check(board, Side.RED)
        assert not is_in_check(board, Side.BLACK)


class TestLegalMoves:
    """合法走法生成测试"""

    def test_initial_move_count(self):
        """开局双方各 44 种走法"""
        board = initial_board()
        assert len(all_legal_moves(board, Side.RED)) == 44
        assert len(all_legal_moves(board, Side.BLACK)) == 44

    def test_deterministic_order(self):
        board = initial_board()
        assert all_legal_moves(board, Side.RED) == all_legal_moves(board, Side.RED)

    def test_self_check_filtered(self):
        """不能走出让自己被将军的棋（车被钉住）"""
        board = Board.from_pieces(
            {
                (4, 9): RED_KING,
                (4, 7): red(PieceType.CHARIOT),
                (4, 2): black(PieceType.CHARIOT),
                (3, 0): BLACK_KING,
            }
        )
        moves = all_legal_moves(board, Side.RED)
        assert Move(4, 7, 3, 7) not in moves
        assert Move(4, 7, 4, 2) in moves
        assert not is_legal(board, Move(4, 7, 0, 7), Side.RED)

    def test_king_cannot_face_king(self):
        board = Board.from_pieces({(3, 9): RED_KING, (4, 0): BLACK_KING})
        moves = all_legal_moves(board, Side.RED)
        assert Move(3, 9, 4, 9) not in moves
        assert Move(3, 9, 3, 8) in moves

    def test_checkmated_side_has_no_moves(self):
        board = Board.from_fen("R3k4/8R/9/9/9/9/9/9/9/3K5")
        assert is_in_check(board, Side.BLACK)
        assert all_legal_moves(board, Side.BLACK) == []

    def test_stalemated_side_has_no_moves(self):
        """未被将军，但将的每一步都送将"""
        board = Board.from_fen("4k4/5R3/9/9/9/R8/9/9/9/3K5")
        assert not is_in_check(board, Side.BLACK)
        assert legal_moves(board, 4, 0) == []
        assert all_legal_moves(board, Side.BLACK) == []
        # 三个去处都是伪合法的，只是全被自将过滤掉
        assert is_pseudo_legal(board, 4, 0, 3, 0)
        assert is_pseudo_legal(board, 4, 0, 5, 0)
        assert is_pseudo_legal(board, 4, 0, 4, 1)

    def test_is_legal_wrong_side(self):
        assert not is_legal(initial_board(), Move(0, 0, 0, 1), Side.RED)
        assert is_legal(initial_board(), Move(0, 0, 0, 1), Side.BLACK)
