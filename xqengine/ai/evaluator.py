"""
棋局评估器

提供棋局状态的评分函数，用于 AI 决策
"""

from xqengine.board import BOARD_HEIGHT, Board
from xqengine.rules import all_legal_moves
from xqengine.types import PieceType, Side


class Evaluator:
    """棋局评估器

    子力价值 + 位置加分 + 机动性
    """

    # 棋子基础价值
    PIECE_VALUES = {
        PieceType.KING: 10000,
        PieceType.CHARIOT: 900,
        PieceType.CANNON: 450,
        PieceType.HORSE: 400,
        PieceType.ADVISOR: 200,
        PieceType.ELEPHANT: 200,
        PieceType.PAWN: 100,
    }

    # 兵/卒的位置分数表（黑方视角，row 0 = 黑方底线）
    # 只有过河后的几行有加分
    PAWN_POSITION_TABLE = [
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [10, 20, 30, 40, 40, 40, 30, 20, 10],  # row 5: 刚过河
        [10, 20, 30, 40, 40, 40, 30, 20, 10],
        [10, 20, 30, 35, 35, 35, 30, 20, 10],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
    ]

    # 车马炮向己方中心点靠拢
    CENTRAL_PIECES = (PieceType.HORSE, PieceType.CHARIOT, PieceType.CANNON)
    CENTER = {Side.BLACK: (4, 2), Side.RED: (4, 7)}

    MOBILITY_WEIGHT = 5

    def position_bonus(self, piece_type: PieceType, side: Side, x: int, y: int) -> int:
        """获取棋子在特定位置的加分"""
        if piece_type == PieceType.PAWN:
            # 红方需要翻转行坐标（位置表是以黑方视角设计的）
            row = y if side == Side.BLACK else BOARD_HEIGHT - 1 - y
            return self.PAWN_POSITION_TABLE[row][x]
        if piece_type in self.CENTRAL_PIECES:
            center_x, center_y = self.CENTER[side]
            dist = abs(x - center_x) + abs(y - center_y)
            return (10 - dist) * 2
        return 0

    def material(self, board: Board, side: Side) -> int:
        """子力和位置分，side 视角"""
        score = 0
        for x, y, piece in board.pieces():
            value = self.PIECE_VALUES[piece.type]
            value += self.position_bonus(piece.type, piece.side, x, y)
            if piece.side == side:
                score += value
            else:
                score -= value
        return score

    def mobility(self, board: Board, side: Side) -> int:
        our_moves = len(all_legal_moves(board, side))
        their_moves = len(all_legal_moves(board, side.opposite))
        return (our_moves - their_moves) * self.MOBILITY_WEIGHT

    def evaluate(self, board: Board, side: Side) -> int:
        """评估棋局

        返回正值表示有利于指定阵营，负值表示不利

        Args:
            board: 棋盘状态
            side: 评估视角的阵营

        Returns:
            评估分数
        """
        return self.material(board, side) + self.mobility(board, side)


_default_evaluator = Evaluator()


def evaluate(board: Board, side: Side) -> int:
    return _default_evaluator.evaluate(board, side)
