"""
筹码模块

提供筹码面额表、币种换算和面额拆分规划功能。
"""

from .denomination import ChipCategory, ChipDenomination, ChipLadder, DEFAULT_CHIP_LADDER
from .value_per_chip import CurrencyKind, value_per_chip, chips_for_value
from .chip_planner import ChipCount, ChipGroup, DecomposedStack, ChipDenominationPlanner

__all__ = [
    'ChipCategory',
    'ChipDenomination',
    'ChipLadder',
    'DEFAULT_CHIP_LADDER',
    'CurrencyKind',
    'value_per_chip',
    'chips_for_value',
    'ChipCount',
    'ChipGroup',
    'DecomposedStack',
    'ChipDenominationPlanner'
]
