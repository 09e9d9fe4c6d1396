"""
AI 引擎基类和策略接口

定义可扩展的 AI 架构，支持策略模式和注册机制
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from xqengine.board import Board
from xqengine.types import Move, Side


@dataclass
class AIConfig:
    """AI 配置"""

    name: str = "AI"
    # 搜索深度（对于搜索类 AI）
    depth: int = 3
    # 随机种子，None 表示不固定
    seed: int | None = None


class AIStrategy(ABC):
    """AI 策略接口

    所有 AI 实现必须继承此类，实现可插拔的 AI 策略
    """

    # 策略名称，用于注册和识别
    name: ClassVar[str] = "base"

    def __init__(self, config: AIConfig | None = None):
        self.config = config or AIConfig()

    @abstractmethod
    def select_move(self, board: Board, side: Side) -> Move | None:
        """选择一步走法

        Args:
            board: 当前棋盘
            side: 走棋方

        Returns:
            选择的走法，如果没有合法走法则返回 None
        """
        pass


class AIEngine:
    """AI 引擎

    管理 AI 策略的注册和选择
    """

    # 已注册的策略
    _strategies: ClassVar[dict[str, type[AIStrategy]]] = {}

    @classmethod
    def register(cls, strategy_class: type[AIStrategy]) -> type[AIStrategy]:
        """注册 AI 策略（可用作装饰器）"""
        cls._strategies[strategy_class.name] = strategy_class
        return strategy_class

    @classmethod
    def get_strategy(cls, name: str, config: AIConfig | None = None) -> AIStrategy:
        """获取指定名称的策略实例"""
        if name not in cls._strategies:
            available = ", ".join(cls._strategies.keys())
            raise ValueError(f"Unknown AI strategy: {name}. Available: {available}")
        return cls._strategies[name](config)

    @classmethod
    def list_strategies(cls) -> list[str]:
        """列出所有已注册的策略"""
        return list(cls._strategies.keys())
