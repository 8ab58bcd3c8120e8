"""
四维坐标

定义棋盘坐标向量 (x, y, z, w) 及其字符串转换。
"""

import math
from dataclasses import dataclass
from typing import Tuple


def _coerce(value) -> int:
    """非数值或NaN输入一律视为0"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def to_letters(n: int) -> str:
    """双射26进制字母编号: 0->a, 25->z, 26->aa"""
    mod = n % 26
    out = chr(97 + mod)
    rest = (n - mod) // 26
    if rest > 0:
        out = to_letters(rest - 1) + out
    return out


@dataclass(frozen=True)
class Vec:
    """
    四维向量

    不可变的值类型，按分量比较相等，可作为字典键。
    """
    x: int = 0
    y: int = 0
    z: int = 0
    w: int = 0

    def __post_init__(self):
        for name in ('x', 'y', 'z', 'w'):
            object.__setattr__(self, name, _coerce(getattr(self, name)))

    def __add__(self, other: 'Vec') -> 'Vec':
        return Vec(self.x + other.x, self.y + other.y,
                   self.z + other.z, self.w + other.w)

    def add(self, other: 'Vec') -> 'Vec':
        return self + other

    def scale(self, factor: int) -> 'Vec':
        return Vec(self.x * factor, self.y * factor,
                   self.z * factor, self.w * factor)

    def to_index(self) -> Tuple[int, int, int, int]:
        """转换为棋盘数组下标 (w, z, y, x)"""
        return (self.w, self.z, self.y, self.x)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.z, self.w)

    def serialize(self) -> str:
        """
        序列化为 "x,y,z,w" 字符串

        Returns:
            str: 序列化字符串，用作走法缓存键
        """
        return f"{self.x},{self.y},{self.z},{self.w}"

    @classmethod
    def deserialize(cls, text: str) -> 'Vec':
        """
        从 "x,y,z,w" 字符串还原坐标

        缺失或无法解析的分量按0处理。
        """
        parts = [part.strip() for part in text.split(",")]
        parts += [0] * (4 - len(parts))
        return cls(*parts[:4])

    def to_notation(self) -> str:
        """
        转换为可读记法

        Returns:
            str: 例如 Vec(1, 2, 3, 4) -> "b3d5"
        """
        return f"{to_letters(self.x)}{self.y + 1}{to_letters(self.z)}{self.w + 1}"

    def __str__(self) -> str:
        return self.to_notation()


