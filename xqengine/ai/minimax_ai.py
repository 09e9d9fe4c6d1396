"""
Minimax AI 策略

带 Alpha-Beta 剪枝的 Minimax 搜索 AI
"""

import math
import random
from typing import ClassVar

from loguru import logger

from xqengine.ai.base import AIConfig, AIEngine, AIStrategy
from xqengine.ai.evaluator import Evaluator
from xqengine.board import Board
from xqengine.rules import all_legal_moves
from xqengine.types import Move, Side

# 无棋可走时的分数（将死或困毙）
MATE_SCORE = 20000

DEFAULT_DEPTH = 3


@AIEngine.register
class MinimaxAI(AIStrategy):
    """Minimax AI

    使用 Minimax 算法和 Alpha-Beta 剪枝进行搜索。
    根节点的走法先随机打乱，同分时保留先搜到的走法。
    """

    name: ClassVar[str] = "minimax"

    def __init__(
        self,
        config: AIConfig | None = None,
        rng: random.Random | None = None,
        evaluator: Evaluator | None = None,
    ):
        super().__init__(config)
        self.evaluator = evaluator or Evaluator()
        self._rng = rng or random.Random(self.config.seed)
        self._nodes_searched = 0

    def select_move(self, board: Board, side: Side) -> Move | None:
        return self.get_best_move(board, side, self.config.depth)

    def get_best_move(self, board: Board, ai_side: Side, depth: int) -> Move | None:
        """搜索 ai_side 的最佳走法，没有合法走法时返回 None"""
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        moves = all_legal_moves(board, ai_side)
        if not moves:
            logger.debug(f"{ai_side.value} has no legal moves")
            return None

        self._nodes_searched = 0
        self._rng.shuffle(moves)

        best_move: Move | None = None
        best_value = -math.inf

        for move in moves:
            next_board = board.apply_move(*move)
            # 用当前最好分数作为 alpha：分数不超过它的走法不会被选中
            value = self.minimax(next_board, depth - 1, best_value, math.inf, False, ai_side)
            if value > best_value:
                best_value = value
                best_move = move

        logger.debug(
            f"{ai_side.value} depth={depth} moves={len(moves)} "
            f"nodes={self._nodes_searched} best={best_move.to_notation()} score={best_value}"
        )
        return best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        ai_side: Side,
    ) -> float:
        """Minimax 搜索，带 Alpha-Beta 剪枝

        分数总是 ai_side 视角。maximizing 为真时轮到 ai_side 走棋。
        """
        self._nodes_searched += 1

        # 达到搜索深度，返回评估值
        if depth == 0:
            return self.evaluator.evaluate(board, ai_side)

        side_to_move = ai_side if maximizing else ai_side.opposite
        moves = all_legal_moves(board, side_to_move)

        if not moves:
            return -MATE_SCORE if maximizing else MATE_SCORE

        if maximizing:
            max_eval = -math.inf
            for move in moves:
                evaluation = self.minimax(board.apply_move(*move), depth - 1, alpha, beta, False, ai_side)
                max_eval = max(max_eval, evaluation)
                alpha = max(alpha, evaluation)
                if beta <= alpha:
                    break
            return max_eval

        min_eval = math.inf
        for move in moves:
            evaluation = self.minimax(board.apply_move(*move), depth - 1, alpha, beta, True, ai_side)
            min_eval = min(min_eval, evaluation)
            beta = min(beta, evaluation)
            if beta <= alpha:
                break
        return min_eval

    @property
    def nodes_searched(self) -> int:
        """返回上次搜索的节点数"""
        return self._nodes_searched


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    ai_side: Side,
) -> float:
    return MinimaxAI().minimax(board, depth, alpha, beta, maximizing, ai_side)


def get_best_move(
    board: Board,
    ai_side: Side,
    depth: int = DEFAULT_DEPTH,
    rng: random.Random | None = None,
) -> Move | None:
    """选择 ai_side 的走法

    rng 控制根节点走法的打乱顺序，传入固定种子的 Random 可复现结果
    """
    return MinimaxAI(AIConfig(depth=depth), rng=rng).get_best_move(board, ai_side, depth)
