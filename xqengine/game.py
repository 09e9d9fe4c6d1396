"""
游戏管理类

管理游戏状态、玩家回合和历史记录
"""

from dataclasses import dataclass
from uuid import uuid4

from loguru import logger

from xqengine.ai.base import AIConfig, AIStrategy
from xqengine.ai.minimax_ai import MinimaxAI
from xqengine.board import Board
from xqengine.rules import all_legal_moves, is_in_check, is_legal
from xqengine.types import GameResult, Move, Piece, Side


@dataclass
class MoveRecord:
    """走棋记录，board_before 是走棋前的棋盘快照"""

    move: Move
    side: Side
    captured: Piece | None
    board_before: Board

    @property
    def notation(self) -> str:
        piece = self.board_before.piece_at(self.move.from_x, self.move.from_y)
        notation = piece.type.name.lower() if piece else ""
        if self.captured:
            notation += "x"
        return notation + self.move.to_notation()


@dataclass
class GameConfig:
    """游戏配置"""

    # AI 搜索深度
    ai_depth: int = 3
    # 最大步数，超过判和；None 表示不限
    max_moves: int | None = None


class Game:
    """象棋游戏"""

    def __init__(
        self,
        board: Board | None = None,
        current_turn: Side = Side.RED,
        game_id: str | None = None,
        config: GameConfig | None = None,
    ):
        self.game_id = game_id or str(uuid4())
        self.config = config or GameConfig()
        self._start_board = board or Board.initial()
        self._start_turn = current_turn
        self.board = self._start_board
        self.current_turn = current_turn
        self.move_history: list[MoveRecord] = []
        self.result = GameResult.ONGOING
        self._update_result()

    @property
    def history(self) -> list[Board]:
        """之前各步的棋盘快照，按时间顺序"""
        return [record.board_before for record in self.move_history]

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1].move if self.move_history else None

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.ONGOING

    @property
    def winner(self) -> Side | None:
        if self.result == GameResult.RED_WIN:
            return Side.RED
        if self.result == GameResult.BLACK_WIN:
            return Side.BLACK
        return None

    def make_move(self, move: Move) -> bool:
        """执行走棋

        返回：是否成功
        """
        if self.result != GameResult.ONGOING:
            return False

        if not is_legal(self.board, move, self.current_turn):
            logger.debug(f"Rejected {self.current_turn.value} move {move.to_notation()}")
            return False

        captured = self.board.piece_at(move.to_x, move.to_y)
        self.move_history.append(MoveRecord(move, self.current_turn, captured, self.board))
        self.board = self.board.apply_move(*move)
        logger.debug(f"{self.current_turn.value} played {self.move_history[-1].notation}")

        # 切换回合
        self.current_turn = self.current_turn.opposite

        # 检查游戏结果
        self._update_result()
        return True

    def undo_move(self, plies: int = 1) -> bool:
        """撤销最近 plies 步，恢复当时的棋盘和走棋方

        人机对战时撤销一个回合（自己一步 + AI 一步）用 plies=2
        """
        if plies < 1 or len(self.move_history) < plies:
            return False

        for _ in range(plies):
            record = self.move_history.pop()
            self.board = record.board_before
            self.current_turn = record.side

        self.result = GameResult.ONGOING
        self._update_result()
        logger.debug(f"Undid {plies} ply, {self.current_turn.value} to move")
        return True

    def play_ai_move(self, strategy: AIStrategy | None = None) -> Move | None:
        """让 AI 为当前走棋方走一步

        不传 strategy 时用 config.ai_depth 深度的 MinimaxAI。
        AI 返回 None 时当前方判负
        """
        if self.result != GameResult.ONGOING:
            return None

        if strategy is None:
            strategy = MinimaxAI(AIConfig(depth=self.config.ai_depth))

        move = strategy.select_move(self.board, self.current_turn)
        if move is None:
            self.result = GameResult.win_for(self.current_turn.opposite)
            logger.info(f"Game {self.game_id} over: {self.result.value}")
            return None

        if not self.make_move(move):
            raise ValueError(f"Strategy {strategy.name} returned illegal move {move.to_notation()}")
        return move

    def reset(self) -> None:
        """回到开局"""
        self.board = self._start_board
        self.current_turn = self._start_turn
        self.move_history.clear()
        self.result = GameResult.ONGOING
        self._update_result()

    def get_legal_moves(self) -> list[Move]:
        """获取当前方的所有合法走法"""
        return all_legal_moves(self.board, self.current_turn)

    def is_in_check(self) -> bool:
        """当前方是否被将军"""
        return is_in_check(self.board, self.current_turn)

    def _update_result(self) -> None:
        # 当前方无棋可走即判负（被将死和困毙都算输）
        if not all_legal_moves(self.board, self.current_turn):
            self.result = GameResult.win_for(self.current_turn.opposite)
            logger.info(f"Game {self.game_id} over: {self.result.value}")
        elif self.config.max_moves is not None and len(self.move_history) >= self.config.max_moves:
            self.result = GameResult.DRAW
            logger.info(f"Game {self.game_id} drawn after {len(self.move_history)} moves")

    def to_dict(self) -> dict:
        """序列化为字典"""
        last = self.last_move
        return {
            "game_id": self.game_id,
            "fen": self.board.to_fen(),
            "current_turn": self.current_turn.value,
            "result": self.result.value,
            "move_count": len(self.move_history),
            "is_in_check": self.is_in_check(),
            "last_move": last.to_notation() if last else None,
            "legal_moves": [m.to_notation() for m in self.get_legal_moves()],
        }

    def __repr__(self) -> str:
        return f"Game({self.game_id}, turn={self.current_turn.value}, moves={len(self.move_history)})"
