"""
Core Module - 纯领域逻辑层

该模块包含牌桌账本重建和筹码拆分的核心逻辑。
核心模块只能依赖其他核心模块，不能依赖应用层；不做I/O，不写日志。

Modules:
    stages: 发牌阶段及其归一化
    actions: 行动日志条目
    seats: 座位映射
    ledger: 按阶段的下注/底池/抽水账本
    chips: 筹码面额表与拆分规划
    invariant: 数学不变量检查
"""

__all__ = []
