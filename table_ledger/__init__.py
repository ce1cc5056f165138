"""
table_ledger - 牌桌展示状态重建

把牌桌的追加式行动日志和筹码金额转换为展示层所需的结构化数据：

- core: 纯领域逻辑（阶段归一化、行动日志回放、底池/抽水账本、筹码面额拆分、不变量检查）
- application: 应用服务层（配置、日志、不变量执行、结果缓存）
"""

__version__ = "1.0.0"
