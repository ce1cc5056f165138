"""
阶段模块

提供原始发牌阶段、规范阶段和阶段归一化功能。
"""

from .types import DealStage, CanonicalStage, CANONICAL_STAGE_ORDER, StageKeyNormalizer

__all__ = [
    'DealStage',
    'CanonicalStage',
    'CANONICAL_STAGE_ORDER',
    'StageKeyNormalizer'
]
