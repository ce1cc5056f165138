"""
反作弊检查 - 确保测试使用真实的核心对象
"""

from .core_usage_checker import CoreUsageChecker

__all__ = ['CoreUsageChecker']
