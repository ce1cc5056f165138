#!/usr/bin/env python3
"""
ConfigService - 配置管理服务

负责集中化管理所有配置，包括：
- 账本构建配置（不变量检查、缓存）
- 筹码展示配置（面额表）
- 日志配置

面额表可以从YAML文件加载，读取失败时使用内置面额表。
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.chips.denomination import ChipCategory, ChipDenomination, ChipLadder, DEFAULT_CHIP_LADDER
from .types import QueryResult, ConfigurationError

__all__ = [
    'ConfigType',
    'LedgerConfig',
    'ChipDisplayConfig',
    'LoggingConfig',
    'ConfigService',
    'DEFAULT_LADDER_FILE',
    'configure_logging',
    'parse_chip_ladder',
    'get_config_service',
]

DEFAULT_LADDER_FILE = Path(__file__).with_name("default_chip_ladder.yaml")

_PACKAGE_LOGGER = "table_ledger"


class ConfigType(Enum):
    """配置类型枚举"""
    LEDGER = "ledger"
    CHIP_DISPLAY = "chip_display"
    LOGGING = "logging"


@dataclass
class LedgerConfig:
    """账本构建配置"""
    check_invariants: bool = True
    raise_on_violation: bool = False
    cache_size: int = 128

    def __post_init__(self):
        if self.cache_size < 0:
            raise ValueError(f"cache_size不能为负数: {self.cache_size}")


@dataclass
class ChipDisplayConfig:
    """筹码展示配置"""
    ladder: ChipLadder = DEFAULT_CHIP_LADDER
    check_invariants: bool = True
    raise_on_violation: bool = False
    cache_size: int = 256

    def __post_init__(self):
        if self.cache_size < 0:
            raise ValueError(f"cache_size不能为负数: {self.cache_size}")


@dataclass
class LoggingConfig:
    """日志配置"""
    log_level: str = 'INFO'
    enable_file_logging: bool = False
    log_file_path: str = "logs/table_ledger.log"
    enable_console_logging: bool = True
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConfigService:
    """配置管理服务"""

    def __init__(self, ladder_file: Union[str, Path] = DEFAULT_LADDER_FILE):
        """
        初始化配置服务

        Args:
            ladder_file: 默认筹码展示配置使用的面额表文件
        """
        self.logger = logging.getLogger(__name__)
        self._ladder_file = ladder_file
        self._configs: Dict[ConfigType, Dict[str, Any]] = {}
        self._load_default_configs()

    def _load_default_configs(self):
        """加载默认配置"""
        self._configs[ConfigType.LEDGER] = {
            'default': LedgerConfig(),
            'strict': LedgerConfig(raise_on_violation=True),
            'unchecked': LedgerConfig(check_invariants=False),
        }

        ladder = self.load_chip_ladder_file(self._ladder_file)
        self._configs[ConfigType.CHIP_DISPLAY] = {
            'default': ChipDisplayConfig(ladder=ladder),
            'strict': ChipDisplayConfig(ladder=ladder, raise_on_violation=True),
        }

        self._configs[ConfigType.LOGGING] = {
            'default': LoggingConfig(),
            'debug': LoggingConfig(
                log_level='DEBUG',
                enable_file_logging=True
            ),
            'production': LoggingConfig(
                log_level='WARNING',
                enable_console_logging=False
            ),
        }

        self.logger.debug("默认配置加载完成")

    def _get_profile(self, config_type: ConfigType, profile: str) -> Any:
        config_profiles = self._configs[config_type]
        if profile not in config_profiles:
            self.logger.warning(f"未找到{config_type.value}配置 '{profile}'，使用默认配置")
            profile = "default"
        return config_profiles[profile]

    def get_ledger_config(self, profile: str = "default") -> QueryResult[LedgerConfig]:
        """
        获取账本构建配置

        Args:
            profile: 配置文件名 (default, strict, unchecked)

        Returns:
            查询结果，包含账本构建配置
        """
        return QueryResult.success_result(self._get_profile(ConfigType.LEDGER, profile))

    def get_chip_display_config(self, profile: str = "default") -> QueryResult[ChipDisplayConfig]:
        """
        获取筹码展示配置

        Args:
            profile: 配置文件名 (default, strict 或通过register_chip_ladder注册的币种族)

        Returns:
            查询结果，包含筹码展示配置
        """
        return QueryResult.success_result(self._get_profile(ConfigType.CHIP_DISPLAY, profile))

    def get_logging_config(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        """
        获取日志配置

        Args:
            profile: 配置文件名 (default, debug, production)

        Returns:
            查询结果，包含日志配置
        """
        return QueryResult.success_result(self._get_profile(ConfigType.LOGGING, profile))

    def update_config(self, config_type: ConfigType, profile: str, updates: Dict[str, Any]) -> QueryResult[bool]:
        """
        更新配置

        Args:
            config_type: 配置类型
            profile: 配置文件名
            updates: 更新的配置项

        Returns:
            查询结果，包含更新是否成功
        """
        config_profiles = self._configs.get(config_type)
        if config_profiles is None:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )
        if profile not in config_profiles:
            return QueryResult.failure_result(
                f"配置文件 {profile} 不存在",
                error_code="CONFIG_PROFILE_NOT_FOUND"
            )

        current_config = config_profiles[profile]
        known = {key: value for key, value in updates.items() if hasattr(current_config, key)}
        for key in updates:
            if key not in known:
                self.logger.warning(f"配置项 {key} 不存在于 {config_type.value}.{profile} 中")

        try:
            config_profiles[profile] = replace(current_config, **known)
        except ValueError as e:
            return QueryResult.validation_error(
                f"更新配置失败: {e}",
                error_code="INVALID_CONFIG_VALUE"
            )

        self.logger.info(f"配置 {config_type.value}.{profile} 更新成功")
        return QueryResult.success_result(True)

    def register_chip_ladder(self, profile: str, ladder: ChipLadder, **options: Any) -> QueryResult[ChipDisplayConfig]:
        """
        为某个币种族注册面额表

        Args:
            profile: 配置文件名
            ladder: 面额表
            options: ChipDisplayConfig的其他配置项

        Returns:
            查询结果，包含注册后的筹码展示配置
        """
        config = ChipDisplayConfig(ladder=ladder, **options)
        self._configs[ConfigType.CHIP_DISPLAY][profile] = config
        self.logger.info(f"面额表 '{profile}' 注册成功，共{len(ladder)}种面额")
        return QueryResult.success_result(config)

    def load_chip_ladder_file(self, path: Union[str, Path] = DEFAULT_LADDER_FILE) -> ChipLadder:
        """
        从YAML文件加载面额表

        文件无法读取或解析时使用内置面额表；文件内容不合法时抛出ConfigurationError。

        Args:
            path: YAML文件路径

        Returns:
            面额表
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self.logger.warning(f"无法加载面额表文件 {path}: {e}，使用内置面额表")
            return DEFAULT_CHIP_LADDER

        try:
            return parse_chip_ladder(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"面额表文件 {path} 内容不合法: {e}", "INVALID_CHIP_LADDER") from e

    def list_available_profiles(self, config_type: ConfigType) -> QueryResult[List[str]]:
        """
        列出可用的配置文件

        Args:
            config_type: 配置类型

        Returns:
            查询结果，包含可用配置文件列表
        """
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )
        return QueryResult.success_result(list(self._configs[config_type].keys()))


def parse_chip_ladder(raw: Dict[str, Any]) -> ChipLadder:
    """
    把YAML解析结果转换为面额表

    Args:
        raw: 形如 {'denominations': [{'value': 1, 'category': 'small', 'max_stack_height': 10}, ...]}

    Returns:
        面额表
    """
    if not isinstance(raw, dict):
        raise TypeError("面额表文件顶层必须是映射")
    entries = raw['denominations']
    return ChipLadder.from_denominations([
        ChipDenomination(
            value=int(entry['value']),
            category=ChipCategory(entry['category']),
            max_stack_height=int(entry['max_stack_height']),
            name=str(entry.get('name', '')),
            key=str(entry.get('key', '')),
        )
        for entry in entries
    ])


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """
    按日志配置设置table_ledger包的日志处理器

    重复调用会替换之前安装的处理器，不会重复添加。

    Args:
        config: 日志配置

    Returns:
        table_ledger包的logger
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    level = getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        raise ConfigurationError(f"未知日志级别: {config.log_level}", "INVALID_LOG_LEVEL")

    for handler in logger.handlers[:]:
        if getattr(handler, '_table_ledger_handler', False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(config.log_format)
    handlers: List[logging.Handler] = []
    if config.enable_console_logging:
        handlers.append(logging.StreamHandler())
    if config.enable_file_logging:
        log_path = Path(config.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler._table_ledger_handler = True
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# 全局单例
_config_service_instance: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """
    获取配置服务的全局单例

    Returns:
        ConfigService: 配置服务实例
    """
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance
