"""
核心类型定义

定义象棋中所有基础数据类型
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class Side(Enum):
    """棋子阵营"""

    RED = "red"
    BLACK = "black"

    @property
    def opposite(self) -> "Side":
        """获取对方阵营"""
        return Side.BLACK if self == Side.RED else Side.RED

    @classmethod
    def parse(cls, name: str) -> "Side":
        """从字符串解析阵营，接受 red/black/r/b/w"""
        key = name.strip().lower()
        if key in ("red", "r", "w"):
            return cls.RED
        if key in ("black", "b"):
            return cls.BLACK
        raise ValueError(f"Unknown side: {name!r}")


def opponent(side: Side) -> Side:
    return side.opposite


class PieceType(Enum):
    """棋子类型"""

    # 将/帅
    KING = "K"
    # 士/仕
    ADVISOR = "A"
    # 象/相
    ELEPHANT = "E"
    # 马
    HORSE = "H"
    # 车
    CHARIOT = "R"
    # 炮
    CANNON = "C"
    # 卒/兵
    PAWN = "P"


@dataclass(frozen=True)
class Piece:
    """棋子

    id 只用于表现层跟踪同一枚棋子（动画），不参与比较和规则判断
    """

    type: PieceType
    side: Side
    id: str = field(default="", compare=False)

    def to_fen_char(self) -> str:
        """棋子转 FEN 字符，红方大写"""
        char = self.type.value
        return char if self.side == Side.RED else char.lower()

    def __repr__(self) -> str:
        return f"{self.type.name.lower()}({self.side.value})"


class Move(NamedTuple):
    """走棋动作

    x 是列 (0-8)，y 是行 (0-9，0 是黑方底线)
    """

    from_x: int
    from_y: int
    to_x: int
    to_y: int

    def to_notation(self) -> str:
        """转换为记谱 (简化版)，例如 "47-44" """
        return f"{self.from_x}{self.from_y}-{self.to_x}{self.to_y}"

    @classmethod
    def from_notation(cls, notation: str) -> "Move":
        """从记谱解析，格式 "x1y1-x2y2" """
        parts = notation.strip().split("-")
        if len(parts) != 2 or len(parts[0]) != 2 or len(parts[1]) != 2:
            raise ValueError(f"Bad move notation: {notation!r}")
        if not (parts[0].isdigit() and parts[1].isdigit()):
            raise ValueError(f"Bad move notation: {notation!r}")
        return cls(int(parts[0][0]), int(parts[0][1]), int(parts[1][0]), int(parts[1][1]))


class GameResult(Enum):
    """游戏结果"""

    ONGOING = "ongoing"
    RED_WIN = "red_win"
    BLACK_WIN = "black_win"
    DRAW = "draw"

    @classmethod
    def win_for(cls, side: Side) -> "GameResult":
        return cls.RED_WIN if side == Side.RED else cls.BLACK_WIN
