"""
棋盘类定义

不可变的 9 列 × 10 行棋盘，任何走棋都返回新棋盘

坐标系统：
- x 0-8: 列，从左到右
- y 0-9: 行，0 是黑方底线，9 是红方底线（0-4 黑方半场，5-9 红方半场）
"""

from typing import Iterator, Mapping

from xqengine.types import Piece, PieceType, Side

BOARD_WIDTH = 9
BOARD_HEIGHT = 10

Row = tuple[Piece | None, ...]

_BACK_ROW = [
    (PieceType.CHARIOT, "r"),
    (PieceType.HORSE, "h"),
    (PieceType.ELEPHANT, "e"),
    (PieceType.ADVISOR, "a"),
    (PieceType.KING, "k"),
    (PieceType.ADVISOR, "a"),
    (PieceType.ELEPHANT, "e"),
    (PieceType.HORSE, "h"),
    (PieceType.CHARIOT, "r"),
]

PIECE_NAMES = {
    Side.RED: {
        PieceType.KING: "帥",
        PieceType.ADVISOR: "仕",
        PieceType.ELEPHANT: "相",
        PieceType.HORSE: "馬",
        PieceType.CHARIOT: "車",
        PieceType.CANNON: "炮",
        PieceType.PAWN: "兵",
    },
    Side.BLACK: {
        PieceType.KING: "將",
        PieceType.ADVISOR: "士",
        PieceType.ELEPHANT: "象",
        PieceType.HORSE: "馬",
        PieceType.CHARIOT: "車",
        PieceType.CANNON: "砲",
        PieceType.PAWN: "卒",
    },
}

_FEN_TYPES = {piece_type.value: piece_type for piece_type in PieceType}


def is_inside(x: int, y: int) -> bool:
    """检查坐标是否在棋盘范围内"""
    return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT


def _check_inside(x: int, y: int) -> None:
    # 负数下标会绕到另一边，必须显式拒绝
    if not is_inside(x, y):
        raise ValueError(f"Square out of board: ({x}, {y})")


class Board:
    """象棋棋盘

    内部用元组的元组保存，构造后不可修改。
    相等比较只看每格棋子的类型和阵营，不看 id。
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: tuple[Row, ...]):
        if len(cells) != BOARD_HEIGHT or any(len(row) != BOARD_WIDTH for row in cells):
            raise ValueError("Board must be 10 rows of 9 cells")
        self._cells = tuple(tuple(row) for row in cells)

    @classmethod
    def empty(cls) -> "Board":
        """空棋盘"""
        return cls(tuple((None,) * BOARD_WIDTH for _ in range(BOARD_HEIGHT)))

    @classmethod
    def initial(cls) -> "Board":
        """标准开局"""
        grid: list[list[Piece | None]] = [[None] * BOARD_WIDTH for _ in range(BOARD_HEIGHT)]
        # 黑方在上方 (y 0-3)，红方在下方 (y 6-9)
        for side, prefix, back_y, cannon_y, pawn_y in (
            (Side.BLACK, "b", 0, 2, 3),
            (Side.RED, "r", 9, 7, 6),
        ):
            counters: dict[str, int] = {}
            for x, (piece_type, code) in enumerate(_BACK_ROW):
                if piece_type == PieceType.KING:
                    piece_id = f"{prefix}k0"
                else:
                    counters[code] = counters.get(code, 0) + 1
                    piece_id = f"{prefix}{code}{counters[code]}"
                grid[back_y][x] = Piece(piece_type, side, piece_id)
            for n, x in enumerate((1, 7), start=1):
                grid[cannon_y][x] = Piece(PieceType.CANNON, side, f"{prefix}c{n}")
            for n, x in enumerate((0, 2, 4, 6, 8), start=1):
                grid[pawn_y][x] = Piece(PieceType.PAWN, side, f"{prefix}p{n}")
        return cls(tuple(tuple(row) for row in grid))

    @classmethod
    def from_pieces(cls, pieces: Mapping[tuple[int, int], Piece]) -> "Board":
        """由 {(x, y): piece} 构造棋盘，常用于测试残局"""
        grid: list[list[Piece | None]] = [[None] * BOARD_WIDTH for _ in range(BOARD_HEIGHT)]
        for (x, y), piece in pieces.items():
            _check_inside(x, y)
            grid[y][x] = piece
        return cls(tuple(tuple(row) for row in grid))

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """从 FEN 解析棋盘（只含棋子部分，行从 y=0 到 y=9）"""
        placement = fen.strip().split(" ")[0]
        rows = placement.split("/")
        if len(rows) != BOARD_HEIGHT:
            raise ValueError(f"FEN must have {BOARD_HEIGHT} rows, got {len(rows)}")

        grid: list[list[Piece | None]] = []
        counters: dict[str, int] = {}
        for y, row_str in enumerate(rows):
            row: list[Piece | None] = []
            for char in row_str:
                if char.isdigit():
                    row.extend([None] * int(char))
                    continue
                piece_type = _FEN_TYPES.get(char.upper())
                if piece_type is None:
                    raise ValueError(f"Unknown piece {char!r} in FEN row {y}")
                side = Side.RED if char.isupper() else Side.BLACK
                counters[char] = counters.get(char, 0) + 1
                piece_id = f"{side.value[0]}{char.lower()}{counters[char]}"
                row.append(Piece(piece_type, side, piece_id))
            if len(row) != BOARD_WIDTH:
                raise ValueError(f"FEN row {y} has {len(row)} cells, expected {BOARD_WIDTH}")
            grid.append(row)
        return cls(tuple(tuple(row) for row in grid))

    def piece_at(self, x: int, y: int) -> Piece | None:
        """获取指定位置的棋子，越界返回 None"""
        if not is_inside(x, y):
            return None
        return self._cells[y][x]

    def apply_move(self, from_x: int, from_y: int, to_x: int, to_y: int) -> "Board":
        """走棋（不检查合法性），返回新棋盘

        目标格原有的棋子被吃掉，起点清空。只复制改动的行。
        坐标越界抛出 ValueError。
        """
        _check_inside(from_x, from_y)
        _check_inside(to_x, to_y)
        piece =self._cells[from_y][from_x]
        rows = list(self._cells)
        from_row = list(rows[from_y])
        from_row[from_x] = None
        rows[from_y] = tuple(from_row)
        to_row = list(rows[to_y])
        to_row[to_x] = piece
        rows[to_y] = tuple(to_row)
        return Board(tuple(rows))

    def with_piece(self, x: int, y: int, piece: Piece | None) -> "Board":
        """放置或移除一个棋子，返回新棋盘"""
        _check_inside(x, y)
        rows = list(self._cells)
        row = list(rows[y])
        row[x] = piece
        rows[y] = tuple(row)
        return Board(tuple(rows))

    @property
    def rows(self) -> tuple[Row, ...]:
        return self._cells

    def pieces(self, side: Side | None = None) -> Iterator[tuple[int, int, Piece]]:
        """按行优先顺序遍历棋子 (x, y, piece)，可按阵营过滤"""
        for y, row in enumerate(self._cells):
            for x, piece in enumerate(row):
                if piece is not None and (side is None or piece.side == side):
                    yield x, y, piece

    def find_king(self, side: Side) -> tuple[int, int] | None:
        """找到指定阵营的将/帅位置"""
        for x, y, piece in self.pieces(side):
            if piece.type == PieceType.KING:
                return x, y
        return None

    def to_fen(self) -> str:
        """转换为 FEN 格式（只含棋子部分）"""
        rows = []
        for row in self._cells:
            row_str = ""
            empty_count = 0
            for piece in row:
                if piece is None:
                    empty_count += 1
                else:
                    if empty_count > 0:
                        row_str += str(empty_count)
                        empty_count = 0
                    row_str += piece.to_fen_char()
            if empty_count > 0:
                row_str += str(empty_count)
            rows.append(row_str)
        return "/".join(rows)

    def display(self) -> str:
        """返回棋盘的文本表示"""
        lines = []
        for y, row in enumerate(self._cells):
            line = f"{y} "
            for piece in row:
                line += ("十" if piece is None else PIECE_NAMES[piece.side][piece.type]) + " "
            lines.append(line.rstrip())
            if y == 4:
                lines.append("  ～～～～ 楚河  漢界 ～～～～")
        lines.append("  0  1  2  3  4  5  6  7  8")
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"Board({self.to_fen()!r})"


def initial_board() -> Board:
    return Board.initial()


def piece_at(board: Board, x: int, y: int) -> Piece | None:
    return board.piece_at(x, y)


def apply_move(board: Board, from_x: int, from_y: int, to_x: int, to_y: int) -> Board:
    return board.apply_move(from_x, from_y, to_x, to_y)
