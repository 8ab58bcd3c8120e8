"""
Hika 多维棋类走法引擎

以声明式路径树描述棋子走法的通用走法生成引擎，支持最多四个空间维度。
包括规则引擎、棋盘模型、将军检测和走法缓存。
"""

__version__ = "1.0.0"
__author__ = "Hika Team"

from .rules_engine import Vec, Move, Piece, GameBoard, RuleEngine, RuleDictionary
from .game import HikaGame
from .config import ConfigManager, EngineConfig, LoggingConfig
from .utils import setup_logger, get_logger, HikaError, OutOfBoundsError, MissingRuleError

__all__ = [
    "__version__", "__author__",
    "Vec", "Move", "Piece", "GameBoard", "RuleEngine", "RuleDictionary",
    "HikaGame",
    "ConfigManager", "EngineConfig", "LoggingConfig",
    "setup_logger", "get_logger", "HikaError", "OutOfBoundsError", "MissingRuleError"
]
