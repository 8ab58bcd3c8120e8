"""
引擎配置数据结构

定义各种配置类和默认参数。
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..rules_engine.layout_parser import DEFAULT_LAYOUT


@dataclass
class EngineConfig:
    """走法引擎配置"""
    default_layout: str = DEFAULT_LAYOUT                            # 默认布局
    royal_piece_ids: List[str] = field(default_factory=lambda: ['K'])  # 王类棋子
    enable_move_cache: bool = True                                  # 是否缓存合法走法
    custom_rules_file: Optional[str] = None                         # 自定义规则YAML文件


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = 'INFO'                     # 日志级别
    log_file: Optional[str] = None          # 日志文件名，None表示不写文件
    log_dir: str = 'logs/hika_engine'       # 日志目录
    max_size: int = 10                      # 单个日志文件大小(MB)
    backup_count: int = 5                   # 备份文件数量
    console_output: bool = True             # 是否输出到控制台


# 默认配置实例
DEFAULT_ENGINE_CONFIG = EngineConfig()
DEFAULT_LOGGING_CONFIG = LoggingConfig()
