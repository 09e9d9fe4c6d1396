"""
随机 AI 策略

最简单的 AI 实现，随机选择合法走法
"""

import random
from typing import ClassVar

from xqengine.ai.base import AIConfig, AIEngine, AIStrategy
from xqengine.board import Board
from xqengine.rules import all_legal_moves
from xqengine.types import Move, Side


@AIEngine.register
class RandomAI(AIStrategy):
    """随机 AI

    随机选择一个合法走法，适合作为对战基准和调试
    """

    name: ClassVar[str] = "random"

    def __init__(self, config: AIConfig | None = None, rng: random.Random | None = None):
        super().__init__(config)
        self._rng = rng or random.Random(self.config.seed)

    def select_move(self, board: Board, side: Side) -> Move | None:
        legal_moves = all_legal_moves(board, side)
        if not legal_moves:
            return None
        return self._rng.choice(legal_moves)
