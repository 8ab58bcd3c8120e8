"""
走法缓存

按起点缓存经过将军检测的走法列表，任何棋盘修改都会清空整个缓存。
"""

import logging
from typing import Dict, List, Optional

from .vec import Vec
from .move import Move

logger = logging.getLogger(__name__)


class MoveCache:
    """起点坐标 -> 合法走法列表"""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._entries: Dict[str, List[Move]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, pos: Vec) -> Optional[List[Move]]:
        """返回缓存走法的副本，未命中返回None"""
        if not self.enabled:
            return None
        moves = self._entries.get(pos.serialize())
        if moves is None:
            self.misses += 1
            return None
        self.hits += 1
        return list(moves)

    def store(self, pos: Vec, moves: List[Move]):
        if self.enabled:
            self._entries[pos.serialize()] = list(moves)

    def clear(self):
        if self._entries:
            logger.debug(f"清空走法缓存 ({len(self._entries)} 项)")
        self._entries.clear()

    def __contains__(self, pos: Vec) -> bool:
        return pos.serialize() in self._entries

    def __len__(self) -> int:
        return len(self._entries)
