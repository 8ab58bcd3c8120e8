"""
走法规则引擎模块

包含多维棋盘表示、声明式走法规则、路径求值和将军检测等核心功能。
"""

from .vec import Vec
from .move import Move
from .piece import Piece, PieceVec, FLAG_FIRST_MOVE, FLAG_CASTLE_LEFT, FLAG_CASTLE_RIGHT
from .path_rules import (
    Condition, PathNode, Leaf, Branches, PieceReference, PieceRule,
    RuleDictionary, UNBOUNDED, build_default_rules, load_rules_file
)
from .move_cache import MoveCache
from .game_board import GameBoard
from .layout_parser import DEFAULT_LAYOUT, parse_layout, to_layout
from .rule_engine import RuleEngine
from .board_validator import BoardValidator

__all__ = [
    'Vec', 'Move', 'Piece', 'PieceVec',
    'FLAG_FIRST_MOVE', 'FLAG_CASTLE_LEFT', 'FLAG_CASTLE_RIGHT',
    'Condition', 'PathNode', 'Leaf', 'Branches', 'PieceReference', 'PieceRule',
    'RuleDictionary', 'UNBOUNDED', 'build_default_rules', 'load_rules_file',
    'MoveCache', 'GameBoard', 'DEFAULT_LAYOUT', 'parse_layout', 'to_layout',
    'RuleEngine', 'BoardValidator'
]
