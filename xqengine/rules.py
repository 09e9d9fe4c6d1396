"""
走法规则

每种棋子有独立的走法判断函数，以及将军检测和合法走法生成。
所有函数都是纯函数，不修改传入的棋盘。
"""

from typing import Callable

from xqengine.board import BOARD_HEIGHT, BOARD_WIDTH, Board, is_inside
from xqengine.types import Move, Piece, PieceType, Side


def in_palace(x: int, y: int, side: Side) -> bool:
    """检查位置是否在该方九宫格内"""
    if not (3 <= x <= 5):
        return False
    if side == Side.BLACK:
        return 0 <= y <= 2
    return 7 <= y <= 9


def on_own_side(y: int, side: Side) -> bool:
    """检查行是否在己方半场（未过河）"""
    if side == Side.BLACK:
        return y <= 4
    return y >= 5


def count_between(board: Board, x1: int, y1: int, x2: int, y2: int) -> int:
    """统计同一行或同一列上两点之间（不含端点）的棋子数"""
    count = 0
    if x1 == x2:
        for y in range(min(y1, y2) + 1, max(y1, y2)):
            if board.piece_at(x1, y) is not None:
                count += 1
    elif y1 == y2:
        for x in range(min(x1, x2) + 1, max(x1, x2)):
            if board.piece_at(x, y1) is not None:
                count += 1
    return count


# 各棋子的走法判断，参数: (board, piece, from_x, from_y, to_x, to_y, dx, dy)
RuleFn = Callable[[Board, Piece, int, int, int, int, int, int], bool]


def _king_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    # 九宫内上下左右一格
    if not in_palace(tx, ty, piece.side):
        return False
    return abs(dx) + abs(dy) == 1


def _advisor_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    # 九宫内斜走一格
    if not in_palace(tx, ty, piece.side):
        return False
    return abs(dx) == 1 and abs(dy) == 1


def _elephant_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    # 走田字，不能过河，象眼不能有子
    if not on_own_side(ty, piece.side):
        return False
    if abs(dx) != 2 or abs(dy) != 2:
        return False
    return board.piece_at(fx + dx // 2, fy + dy // 2) is None


def _horse_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    # 走日字，马腿（长边方向紧邻起点的格子）不能有子
    if abs(dx) == 2 and abs(dy) == 1:
        return board.piece_at(fx + dx // 2, fy) is None
    if abs(dx) == 1 and abs(dy) == 2:
        return board.piece_at(fx, fy + dy // 2) is None
    return False


def _chariot_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    if dx != 0 and dy != 0:
        return False
    return count_between(board, fx, fy, tx, ty) == 0


def _cannon_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    # 不吃子时路径要空，吃子时要隔一个炮架
    if dx != 0 and dy != 0:
        return False
    between = count_between(board, fx, fy, tx, ty)
    if board.piece_at(tx, ty) is not None:
        return between == 1
    return between == 0


def _pawn_rule(
    board: Board, piece: Piece, fx: int, fy: int, tx: int, ty: int, dx: int, dy: int
) -> bool:
    forward = 1 if piece.side == Side.BLACK else -1
    if dy == forward and dx == 0:
        return True
    # 过河后（按起点判断）可以左右走一格
    if not on_own_side(fy, piece.side):
        return dy == 0 and abs(dx) == 1
    return False


_RULES: dict[PieceType, RuleFn] = {
    PieceType.KING: _king_rule,
    PieceType.ADVISOR: _advisor_rule,
    PieceType.ELEPHANT: _elephant_rule,
    PieceType.HORSE: _horse_rule,
    PieceType.CHARIOT: _chariot_rule,
    PieceType.CANNON: _cannon_rule,
    PieceType.PAWN: _pawn_rule,
}


def is_pseudo_legal(board: Board, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
    """检查走法是否符合棋子走法规则（不考虑是否送将）"""
    if not is_inside(from_x, from_y) or not is_inside(to_x, to_y):
        return False
    piece = board.piece_at(from_x, from_y)
    if piece is None:
        return False
    target = board.piece_at(to_x, to_y)
    if target is not None and target.side == piece.side:
        return False
    dx = to_x - from_x
    dy = to_y - from_y
    if dx == 0 and dy == 0:
        return False
    return _RULES[piece.type](board, piece, from_x, from_y, to_x, to_y, dx, dy)


def legal_moves(board: Board, x: int, y: int) -> list[tuple[int, int]]:
    """某个棋子所有符合走法规则的目标格（扫描全部 90 格）"""
    if board.piece_at(x, y) is None:
        return []
    return [
        (tx, ty)
        for ty in range(BOARD_HEIGHT)
        for tx in range(BOARD_WIDTH)
        if is_pseudo_legal(board, x, y, tx, ty)
    ]


def kings_facing(board: Board) -> bool:
    """将帅是否在同一列且中间无子（飞将）"""
    red_king = board.find_king(Side.RED)
    black_king = board.find_king(Side.BLACK)
    if red_king is None or black_king is None:
        return False
    if red_king[0] != black_king[0]:
        return False
    return count_between(board, *red_king, *black_king) == 0


def is_in_check(board: Board, side: Side) -> bool:
    """检查指定阵营的将/帅是否被将军

    没有将/帅时返回 False
    """
    king_pos = board.find_king(side)
    if king_pos is None:
        return False
    kx, ky = king_pos

    for x, y, _ in board.pieces(side.opposite):
        if is_pseudo_legal(board, x, y, kx, ky):
            return True

    return kings_facing(board)


def all_legal_moves(board: Board, side: Side) -> list[Move]:
    """获取指定阵营的所有合法走法（走完不能让自己被将军）

    返回空列表表示该方无棋可走，即输棋
    """
    moves = []
    for x, y, _ in board.pieces(side):
        for tx, ty in legal_moves(board, x, y):
            if not is_in_check(board.apply_move(x, y, tx, ty), side):
                moves.append(Move(x, y, tx, ty))
    return moves


def is_legal(board: Board, move: Move, side: Side) -> bool:
    """检查某一方的走法是否完全合法"""
    piece = board.piece_at(move.from_x, move.from_y)
    if piece is None or piece.side != side:
        return False
    if not is_pseudo_legal(board, *move):
        return False
    return not is_in_check(board.apply_move(*move), side)
