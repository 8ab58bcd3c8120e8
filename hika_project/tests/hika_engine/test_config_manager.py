"""
测试配置管理

测试默认配置文件生成、加载、更新、重置和导出。
"""

import json
import tempfile
from pathlib import Path

import pytest
import yaml
from hika_project.src.hika_engine.config import ConfigManager, EngineConfig, LoggingConfig
from hika_project.src.hika_engine.rules_engine import DEFAULT_LAYOUT, load_rules_file, UNBOUNDED
from hika_project.src.hika_engine.utils import ConfigurationError, RuleDefinitionError


class TestConfigManager:
    """ConfigManager类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_dir = Path(self.temp_dir.name) / "configs"
        self.manager = ConfigManager(str(self.config_dir))

    def teardown_method(self):
        """每个测试方法后的清理"""
        self.temp_dir.cleanup()

    def test_default_files_created(self):
        """测试创建默认配置文件"""
        assert (self.config_dir / "engine_config.yaml").exists()
        assert (self.config_dir / "logging_config.yaml").exists()

    def test_load_defaults(self):
        """测试加载默认配置"""
        engine_config = self.manager.get_engine_config()
        assert isinstance(engine_config, EngineConfig)
        assert engine_config.default_layout == DEFAULT_LAYOUT
        assert engine_config.royal_piece_ids == ['K']
        assert engine_config.enable_move_cache
        assert engine_config.custom_rules_file is None

        logging_config = self.manager.get_logging_config()
        assert isinstance(logging_config, LoggingConfig)
        assert logging_config.level == 'INFO'

    def test_update_config(self):
        """测试更新配置"""
        self.manager.update_config('engine', enable_move_cache=False, unknown_key=1)
        assert not self.manager.get_engine_config().enable_move_cache
        assert ConfigManager(str(self.config_dir)).get_engine_config().enable_move_cache is False

        # 默认实例不被修改
        assert EngineConfig().enable_move_cache

        with pytest.raises(ConfigurationError):
            self.manager.update_config('bogus', level='DEBUG')

    def test_reset_config(self):
        """测试重置配置"""
        self.manager.update_config('logging', level='DEBUG')
        assert self.manager.get_logging_config().level == 'DEBUG'
        self.manager.reset_config('logging')
        assert self.manager.get_logging_config().level == 'INFO'

    def test_validate_config(self):
        """测试配置验证"""
        assert self.manager.validate_config('engine')
        assert self.manager.validate_config('logging')

        self.manager.update_config('logging', level='LOUD')
        assert not self.manager.validate_config('logging')

        self.manager.update_config('engine', royal_piece_ids=[])
        assert not self.manager.validate_config('engine')

    def test_save_unknown_config(self):
        """测试保存未知配置"""
        with pytest.raises(ConfigurationError):
            self.manager.save_config('bogus', EngineConfig())

    def test_corrupt_file_falls_back(self):
        """测试无法解析的配置文件回退到默认配置"""
        (self.config_dir / "engine_config.yaml").write_text("{not: [valid", encoding='utf-8')
        config = self.manager.get_engine_config()
        assert config.default_layout == DEFAULT_LAYOUT

    def test_unknown_fields_ignored(self):
        """测试忽略未知字段"""
        with open(self.config_dir / "engine_config.yaml", 'w', encoding='utf-8') as f:
            yaml.dump({'default_layout': '4,4,1,1 K3', 'legacy': True}, f)
        config = self.manager.get_engine_config()
        assert config.default_layout == '4,4,1,1 K3'
        assert config.enable_move_cache

    def test_export_configs(self):
        """测试导出配置"""
        export_file = Path(self.temp_dir.name) / "export.json"
        self.manager.export_configs(str(export_file))
        with open(export_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        assert set(data) == {'engine', 'logging'}
        assert data['engine']['royal_piece_ids'] == ['K']

        export_yaml = Path(self.temp_dir.name) / "export.yaml"
        self.manager.export_configs(str(export_yaml))
        with open(export_yaml, 'r', encoding='utf-8') as f:
            assert yaml.safe_load(f)['logging']['backup_count'] == 5

    def test_get_all_configs(self):
        """测试获取所有配置"""
        configs = self.manager.get_all_configs()
        assert isinstance(configs['engine'], EngineConfig)
        assert isinstance(configs['logging'], LoggingConfig)


class TestRulesFile:
    """自定义规则文件的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.rules_file = Path(self.temp_dir.name) / "rules.yaml"

    def teardown_method(self):
        """每个测试方法后的清理"""
        self.temp_dir.cleanup()

    def test_load_rules_file(self):
        """测试加载规则文件"""
        self.rules_file.write_text(
            "c:\n"
            "  path_tree:\n"
            "    - repeat: inf\n"
            "      attack: 1\n"
            "      conditions:\n"
            "        - {team: 0}\n"
            "      branches:\n"
            "        - direction: [1, 0]\n"
            "        - B\n",
            encoding='utf-8'
        )
        rules = load_rules_file(self.rules_file)
        assert list(rules) == ['C']

        root = rules['C'].path_tree[0]
        assert root.repeat == UNBOUNDED
        assert root.attack == 1
        assert root.conditions[0].team == 0
        assert root.branches[1].piece_id == 'B'

    def test_invalid_rules_file(self):
        """测试顶层不是映射的规则文件"""
        self.rules_file.write_text("- just\n- a list\n", encoding='utf-8')
        with pytest.raises(RuleDefinitionError):
            load_rules_file(self.rules_file)

    def test_empty_rules_file(self):
        """测试空规则文件"""
        self.rules_file.write_text("", encoding='utf-8')
        assert load_rules_file(self.rules_file) == {}
