"""
行动日志模块

提供行动类型和行动日志条目。
"""

from .types import ActionType, ActionLogEntry

__all__ = [
    'ActionType',
    'ActionLogEntry'
]
