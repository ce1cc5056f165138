"""
发牌阶段类型定义

定义牌桌日志中的原始发牌阶段，以及账本使用的五个规范阶段。
"""

from enum import Enum, auto
from typing import Dict, Tuple

__all__ = [
    'DealStage',
    'CanonicalStage',
    'CANONICAL_STAGE_ORDER',
    'StageKeyNormalizer',
]


class DealStage(Enum):
    """原始发牌阶段（日志中的阶段标签）"""
    FRESH = auto()      # 新的一局
    BLINDS = auto()     # 下盲注
    OPENING = auto()    # 发底牌
    FLOP = auto()       # 翻牌
    TURN = auto()       # 转牌
    RIVER = auto()      # 河牌
    SHOWDOWN = auto()   # 摊牌


class CanonicalStage(Enum):
    """规范阶段，翻牌前的所有子阶段都归入INITIAL"""
    INITIAL = auto()
    FLOP = auto()
    TURN = auto()
    RIVER = auto()
    SHOWDOWN = auto()

    @property
    def order(self) -> int:
        """阶段在规范顺序中的位置"""
        return CANONICAL_STAGE_ORDER.index(self)


CANONICAL_STAGE_ORDER: Tuple[CanonicalStage, ...] = (
    CanonicalStage.INITIAL,
    CanonicalStage.FLOP,
    CanonicalStage.TURN,
    CanonicalStage.RIVER,
    CanonicalStage.SHOWDOWN,
)

_STAGE_BUCKETS: Dict[DealStage, CanonicalStage] = {
    DealStage.FRESH: CanonicalStage.INITIAL,
    DealStage.BLINDS: CanonicalStage.INITIAL,
    DealStage.OPENING: CanonicalStage.INITIAL,
    DealStage.FLOP: CanonicalStage.FLOP,
    DealStage.TURN: CanonicalStage.TURN,
    DealStage.RIVER: CanonicalStage.RIVER,
    DealStage.SHOWDOWN: CanonicalStage.SHOWDOWN,
}

_uncovered = set(DealStage) - set(_STAGE_BUCKETS)
if _uncovered:
    raise RuntimeError(f"发牌阶段缺少规范映射: {sorted(s.name for s in _uncovered)}")


class StageKeyNormalizer:
    """
    阶段归一化器

    把原始发牌阶段映射为规范阶段。
    """

    @staticmethod
    def normalize(stage: DealStage) -> CanonicalStage:
        """
        归一化发牌阶段

        Args:
            stage: 原始发牌阶段

        Returns:
            对应的规范阶段

        Raises:
            TypeError: stage不是DealStage
        """
        if not isinstance(stage, DealStage):
            raise TypeError(f"stage必须是DealStage，当前类型: {type(stage).__name__}")
        return _STAGE_BUCKETS[stage]

    @staticmethod
    def is_regression(current: CanonicalStage, new: CanonicalStage) -> bool:
        """判断阶段切换是否回退到更早的规范阶段"""
        return new.order < current.order

    @staticmethod
    def sort_stages(stages) -> Tuple[CanonicalStage, ...]:
        """按规范顺序排序阶段"""
        return tuple(sorted(set(stages), key=lambda s: s.order))
