"""
棋子数据结构

定义棋子、棋子标志和占位索引条目。
"""

from dataclasses import dataclass, field
from typing import Set, Optional

from .vec import Vec


# 棋子标志
FLAG_FIRST_MOVE = 0       # 首次移动尚未使用 (兵的两步走)
FLAG_CASTLE_LEFT = 1      # 王车易位类标志
FLAG_CASTLE_RIGHT = 2

# 棋子初始标志
INITIAL_FLAGS = {
    'P': {FLAG_FIRST_MOVE},
    'K': {FLAG_CASTLE_LEFT, FLAG_CASTLE_RIGHT},
}


@dataclass(eq=False)
class Piece:
    """
    棋子类

    按对象身份比较：同类型同队伍的两个棋子仍是不同的棋子。
    """
    id: str                     # 棋子类型
    team: int                   # 队伍 (0: 大写, 1: 小写)
    flags: Set[int] = field(default_factory=set)

    @classmethod
    def create(cls, piece_id: str, team: int) -> 'Piece':
        """按类型创建带初始标志的棋子"""
        piece_id = piece_id.upper()
        return cls(piece_id, team, set(INITIAL_FLAGS.get(piece_id, ())))

    def symbol(self) -> str:
        """布局字符串中的符号"""
        return self.id.upper() if self.team == 0 else self.id.lower()

    def __repr__(self) -> str:
        return f"Piece(id={self.id!r}, team={self.team}, flags={sorted(self.flags)})"


@dataclass(frozen=True)
class PieceVec:
    """占位索引条目：位置和棋子"""
    pos: Vec
    piece: Piece


def piece_symbol(piece: Optional[Piece]) -> str:
    return piece.symbol() if piece is not None else "."
