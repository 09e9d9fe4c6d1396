"""
Xiangqi rules engine and alpha-beta search.

表现层只需要调用这里导出的纯函数：
查询合法走法、走棋得到新棋盘、检测将军、让 AI 选一步。
"""

import random

from xqengine.ai import get_best_move as _search_best_move
from xqengine.board import Board, apply_move, initial_board, piece_at
from xqengine.game import Game, GameConfig
from xqengine.rules import all_legal_moves, is_in_check, is_pseudo_legal, legal_moves
from xqengine.types import GameResult, Move, Piece, PieceType, Side, opponent

__version__ = "0.1.0"


def is_valid_move(board: Board, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
    return is_pseudo_legal(board, from_x, from_y, to_x, to_y)


def get_possible_moves(board: Board, x: int, y: int) -> list[tuple[int, int]]:
    return legal_moves(board, x, y)


def make_move(board: Board, from_x: int, from_y: int, to_x: int, to_y: int) -> Board:
    return apply_move(board, from_x, from_y, to_x, to_y)


def is_check(board: Board, side: Side) -> bool:
    return is_in_check(board, side)


def get_all_legal_moves(board: Board, side: Side) -> list[Move]:
    return all_legal_moves(board, side)


def get_best_move(
    board: Board, side: Side, depth: int = 3, rng: random.Random | None = None
) -> Move | None:
    return _search_best_move(board, side, depth, rng)


__all__ = [
    "Board",
    "Game",
    "GameConfig",
    "GameResult",
    "Move",
    "Piece",
    "PieceType",
    "Side",
    "get_all_legal_moves",
    "get_best_move",
    "get_possible_moves",
    "initial_board",
    "is_check",
    "is_valid_move",
    "make_move",
    "opponent",
    "piece_at",
]
