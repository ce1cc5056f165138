"""
Application Layer - 应用服务层

应用层可以访问核心层，但不能被核心层访问。

Services:
    TableDisplayService: 牌桌展示数据服务（阶段账本、筹码拆分）
    ConfigService: 配置管理服务

Types:
    QueryResult: 查询结果
    ResultStatus: 结果状态
"""

from .types import (
    ResultStatus,
    QueryResult,
    ApplicationError,
    ConfigurationError,
)

from .config_service import (
    ConfigType,
    LedgerConfig,
    ChipDisplayConfig,
    LoggingConfig,
    ConfigService,
    configure_logging,
    get_config_service,
)
from .table_display_service import TableDisplayService

__all__ = [
    # 类型
    "ResultStatus",
    "QueryResult",
    "ApplicationError",
    "ConfigurationError",

    # 配置
    "ConfigType",
    "LedgerConfig",
    "ChipDisplayConfig",
    "LoggingConfig",
    "ConfigService",
    "configure_logging",
    "get_config_service",

    # 服务
    "TableDisplayService",
]
