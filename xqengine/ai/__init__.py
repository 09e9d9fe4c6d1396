"""
AI Engine Module

Extensible AI engine with pluggable strategies.
"""

from xqengine.ai.base import AIConfig, AIEngine, AIStrategy
from xqengine.ai.evaluator import Evaluator, evaluate
from xqengine.ai.minimax_ai import MATE_SCORE, MinimaxAI, get_best_move, minimax
from xqengine.ai.random_ai import RandomAI

__all__ = [
    "AIConfig",
    "AIEngine",
    "AIStrategy",
    "Evaluator",
    "MATE_SCORE",
    "MinimaxAI",
    "RandomAI",
    "evaluate",
    "get_best_move",
    "minimax",
]
