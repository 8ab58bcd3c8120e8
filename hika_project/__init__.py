"""
Hika 多维棋类走法引擎

数据驱动的棋类走法生成库：棋子走法由声明式规则树描述，支持最多四个空间维度。
"""

__version__ = "0.1.0"
__author__ = "Hika Team"
__description__ = "多维棋类走法引擎 - 声明式规则树、将军检测和走法缓存"

from hika_project.src import hika_engine

__all__ = [
    "hika_engine",
    "__version__",
    "__author__",
    "__description__",
]
