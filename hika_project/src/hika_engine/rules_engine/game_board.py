"""
多维棋盘数据结构

四轴 (x, y, z, w) 稠密棋盘，加上与之严格同步的占位索引。
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .vec import Vec
from .move import Move
from .piece import Piece, PieceVec, FLAG_FIRST_MOVE
from .move_cache import MoveCache
from ..utils.exceptions import OutOfBoundsError

logger = logging.getLogger(__name__)


@dataclass
class UndoRecord:
    """模拟走子的撤销记录：只记录被改动的格子"""
    move: Move
    src_piece: Optional[Piece]
    dst_piece: Optional[Piece]
    flags: Optional[frozenset]
    index: Dict[Vec, Piece]


class GameBoard:
    """
    多维棋盘类

    维护棋盘数组 grid[w, z, y, x] 和占位索引。每个修改入口都同时更新二者，
    并清空走法缓存。
    """

    def __init__(self, size: Vec, cache: Optional[MoveCache] = None):
        """
        初始化空棋盘

        Args:
            size: 各轴尺寸
            cache: 修改时需要清空的走法缓存
        """
        self.size = size
        self.grid = np.empty(size.to_index(), dtype=object)
        # 位置 -> 棋子，插入顺序即迭代顺序
        self._index: Dict[Vec, Piece] = {}
        self.cache = cache

    @classmethod
    def from_placements(cls, size: Vec, placements: List[Tuple[Vec, Piece]],
                        cache: Optional[MoveCache] = None) -> 'GameBoard':
        board = cls(size, cache)
        for pos, piece in placements:
            board._write(pos, piece)
        return board

    # ==================== 基本访问 ====================

    def is_in_bounds(self, pos: Vec) -> bool:
        return (0 <= pos.x < self.size.x and
                0 <= pos.y < self.size.y and
                0 <= pos.z < self.size.z and
                0 <= pos.w < self.size.w)

    def _check_bounds(self, pos: Vec):
        if not self.is_in_bounds(pos):
            raise OutOfBoundsError(pos.serialize(), self.size.serialize())

    def get_piece(self, pos: Vec) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Raises:
            OutOfBoundsError: 坐标越界
        """
        self._check_bounds(pos)
        return self.grid[pos.to_index()]

    def _write(self, pos: Vec, piece: Optional[Piece]) -> Optional[Piece]:
        """同时写入棋盘和占位索引"""
        index = pos.to_index()
        previous = self.grid[index]
        self.grid[index] = piece
        self._index.pop(pos, None)
        if piece is not None:
            self._index[pos] = piece
        return previous

    def invalidate_cache(self):
        if self.cache is not None:
            self.cache.clear()

    # ==================== 修改入口 ====================

    def set_piece(self, pos: Vec, piece: Optional[Piece] = None) -> Optional[Piece]:
        """
        放置或移除棋子

        Args:
            pos: 位置
            piece: 新棋子，None表示清空

        Returns:
            Optional[Piece]: 原来的棋子

        Raises:
            OutOfBoundsError: 坐标越界
        """
        self._check_bounds(pos)
        self.invalidate_cache()
        return self._write(pos, piece)

    def move(self, move: Move, invalidate_cache: bool = True) -> Optional[Piece]:
        """
        移动棋子，终点上的棋子被吃掉

        移动的棋子若带有首步标志，移动后清除该标志。

        Args:
            move: 走法
            invalidate_cache: 是否清空走法缓存，模拟走子时为False

        Returns:
            Optional[Piece]: 被吃掉的棋子

        Raises:
            OutOfBoundsError: 起点或终点越界
        """
        self._check_bounds(move.src)
        self._check_bounds(move.dst)
        if invalidate_cache:
            self.invalidate_cache()

        piece = self._write(move.src, None)
        captured = self._write(move.dst, piece)
        if piece is not None:
            piece.flags.discard(FLAG_FIRST_MOVE)
        return captured

    def apply_undoable(self, move: Move) -> UndoRecord:
        """
        执行不清空缓存的走子，并返回恢复所需的撤销记录

        Returns:
            UndoRecord: 传给 undo 以精确恢复
        """
        src_piece = self.get_piece(move.src)
        record = UndoRecord(
            move=move,
            src_piece=src_piece,
            dst_piece=self.get_piece(move.dst),
            flags=frozenset(src_piece.flags) if src_piece is not None else None,
            index=dict(self._index)
        )
        self.move(move, invalidate_cache=False)
        return record

    def undo(self, record: UndoRecord):
        """按撤销记录恢复棋盘、标志和占位索引"""
        self.grid[record.move.dst.to_index()] = record.dst_piece
        self.grid[record.move.src.to_index()] = record.src_piece
        if record.src_piece is not None:
            record.src_piece.flags.clear()
            record.src_piece.flags.update(record.flags)
        self._index = record.index

    # ==================== 查询 ====================

    def get_pois(self) -> List[PieceVec]:
        """返回占位索引的副本"""
        return [PieceVec(pos, piece) for pos, piece in self._index.items()]

    def piece_count(self) -> int:
        return len(self._index)

    def teams(self) -> List[int]:
        return sorted({piece.team for piece in self._index.values()})

    def find_pieces(self, team: int, piece_ids) -> List[Vec]:
        """查找指定队伍中指定类型棋子的位置"""
        return [pos for pos, piece in self._index.items()
                if piece.team == team and piece.id in piece_ids]

    def iter_cells(self) -> Iterator[Tuple[Vec, Optional[Piece]]]:
        """按 w -> z -> y -> x 的顺序遍历所有格子"""
        for w in range(self.size.w):
            for z in range(self.size.z):
                for y in range(self.size.y):
                    for x in range(self.size.x):
                        pos = Vec(x, y, z, w)
                        yield pos, self.grid[pos.to_index()]

    def for_each_cell(self, fn: Callable[[Vec, Optional[Piece]], None]):
        for pos, piece in self.iter_cells():
            fn(pos, piece)
