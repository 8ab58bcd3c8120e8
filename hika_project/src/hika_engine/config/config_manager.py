"""
配置管理器

负责加载、保存和管理各种配置。
"""

import yaml
import json
from pathlib import Path
from typing import Dict, Any, Type, TypeVar
from dataclasses import asdict, fields
import logging

from .engine_config import (
    EngineConfig, LoggingConfig,
    DEFAULT_ENGINE_CONFIG, DEFAULT_LOGGING_CONFIG
)
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    配置管理器

    负责加载、保存和管理引擎的各种配置。
    """

    def __init__(self, config_dir: str = "hika_project/configs/hika_engine"):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_files = {
            'engine': self.config_dir / 'engine_config.yaml',
            'logging': self.config_dir / 'logging_config.yaml'
        }

        self.default_configs = {
            'engine': DEFAULT_ENGINE_CONFIG,
            'logging': DEFAULT_LOGGING_CONFIG
        }

        self.config_types = {
            'engine': EngineConfig,
            'logging': LoggingConfig
        }

        self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        文件不存在或无法解析时返回默认配置。

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file or not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return self.default_configs[config_name]

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix == '.yaml':
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)

            config = self._dict_to_dataclass(data or {}, config_class)
            logger.info(f"成功加载配置: {config_file}")
            return config

        except (OSError, yaml.YAMLError, json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return self.default_configs[config_name]

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ConfigurationError(config_name, "未知的配置名称")

        data = asdict(config_obj)
        with open(config_file, 'w', encoding='utf-8') as f:
            if config_file.suffix == '.yaml':
                yaml.dump(data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(f"成功保存配置: {config_file}")

    def get_engine_config(self) -> EngineConfig:
        """获取引擎配置"""
        return self.load_config('engine', EngineConfig)

    def get_logging_config(self) -> LoggingConfig:
        """获取日志配置"""
        return self.load_config('logging', LoggingConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        if config_name not in self.config_types:
            raise ConfigurationError(config_name, "未知的配置名称")

        config = self.load_config(config_name, self.config_types[config_name])
        config = self._dict_to_dataclass(asdict(config), self.config_types[config_name])

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """重置配置为默认值"""
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效
        """
        config = self.load_config(config_name, self.config_types[config_name])

        if config_name == 'engine':
            return (isinstance(config.default_layout, str) and
                    len(config.default_layout.split()) >= 1 and
                    len(config.royal_piece_ids) > 0)
        elif config_name == 'logging':
            return (str(config.level).upper() in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL') and
                    config.max_size > 0 and
                    config.backup_count >= 0)

        return True

    def get_all_configs(self) -> Dict[str, Any]:
        """获取所有配置"""
        return {name: self.load_config(name, config_class)
                for name, config_class in self.config_types.items()}

    def export_configs(self, export_path: str):
        """
        导出所有配置到文件

        Args:
            export_path: 导出文件路径 (.yaml 或 .json)
        """
        export_data = {name: asdict(config)
                       for name, config in self.get_all_configs().items()}

        export_file = Path(export_path)
        with open(export_file, 'w', encoding='utf-8') as f:
            if export_file.suffix == '.yaml':
                yaml.dump(export_data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(export_data, f, ensure_ascii=False, indent=2)

        logger.info(f"配置已导出到: {export_path}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """将字典转换为数据类对象，忽略未知字段"""
        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
