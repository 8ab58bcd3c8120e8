"""
走法数据结构

定义走法的表示和字符串转换功能。
"""

from dataclasses import dataclass, field
from typing import Optional, List

from .vec import Vec


@dataclass
class Move:
    """
    走法类

    表示从起点到终点的一次移动。waypoints 为途经点，目前走法生成不使用。
    相等性只比较起点和终点。
    """
    src: Vec
    dst: Vec
    waypoints: Optional[List[Vec]] = field(default=None, compare=False)

    def serialize(self) -> str:
        """
        序列化为 "src/dst[/wp...]" 字符串

        Returns:
            str: 例如 "0,1,0,0/0,2,0,0"
        """
        text = f"{self.src.serialize()}/{self.dst.serialize()}"
        if self.waypoints is not None:
            text += "".join(f"/{point.serialize()}" for point in self.waypoints)
        return text

    @classmethod
    def deserialize(cls, text: str) -> 'Move':
        """
        从字符串创建Move对象

        Args:
            text: serialize 生成的字符串

        Returns:
            Move: Move对象
        """
        parts = text.split("/")
        if len(parts) < 2:
            raise ValueError(f"无效的走法字符串: {text}")

        waypoints = None
        if len(parts) > 2:
            waypoints = [Vec.deserialize(part) for part in parts[2:]]
        return cls(Vec.deserialize(parts[0]), Vec.deserialize(parts[1]), waypoints)

    def to_notation(self) -> str:
        """可读记法，如 "a2a3" """
        return f"{self.src.to_notation()}{self.dst.to_notation()}"

    def __str__(self) -> str:
        return self.to_notation()

    def __hash__(self) -> int:
        return hash((self.src, self.dst))
