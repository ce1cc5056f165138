"""
Invariant Module - 数学不变量

该模块实现账本和筹码拆分的数学不变量检查，包括：
- 底池结转守恒
- 抽水一致性
- 筹码拆分守恒和顺序

Classes:
    LedgerInvariantChecker: 阶段账本检查器
    ChipDecompositionChecker: 筹码拆分检查器
    BaseInvariantChecker: 不变量检查器基类

Types:
    InvariantType: 不变量类型枚举
    InvariantViolation: 不变量违反记录
    InvariantCheckResult: 不变量检查结果
    InvariantError: 不变量错误异常
"""

from .types import (
    InvariantType,
    InvariantViolation,
    InvariantCheckResult,
    InvariantError
)
from .base_checker import BaseInvariantChecker
from .ledger_checker import LedgerInvariantChecker
from .decomposition_checker import ChipDecompositionChecker

__all__ = [
    # 具体检查器
    'LedgerInvariantChecker',
    'ChipDecompositionChecker',
    'BaseInvariantChecker',

    # 类型定义
    'InvariantType',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError'
]
