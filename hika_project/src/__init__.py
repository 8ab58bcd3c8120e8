"""
Hika 源代码模块

包含子系统：
- hika_engine: 多维棋类走法引擎
"""

from . import hika_engine

__all__ = [
    "hika_engine",
]
