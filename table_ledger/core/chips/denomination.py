"""
筹码面额表

定义筹码面额、展示类别和固定的升序面额表。
"""

from enum import Enum
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

__all__ = [
    'ChipCategory',
    'ChipDenomination',
    'ChipLadder',
    'DEFAULT_CHIP_LADDER',
]


class ChipCategory(Enum):
    """筹码展示类别，只用于分组，不参与计算"""
    SMALL = "small"
    BIG = "big"
    CARD = "card"


@dataclass(frozen=True)
class ChipDenomination:
    """筹码面额"""
    value: int
    category: ChipCategory
    max_stack_height: int
    name: str = ""
    key: str = ""

    def __post_init__(self):
        """验证面额的有效性"""
        if not isinstance(self.value, int) or self.value <= 0:
            raise ValueError(f"面额必须是正整数: {self.value!r}")
        if not isinstance(self.category, ChipCategory):
            raise ValueError(f"category必须是ChipCategory: {self.category!r}")
        if self.max_stack_height < 1:
            raise ValueError(f"面额{self.value}的max_stack_height必须至少为1: {self.max_stack_height}")


@dataclass(frozen=True)
class ChipLadder:
    """
    面额表

    严格升序的面额序列，每个币种族配置一次。
    """
    denominations: Tuple[ChipDenomination, ...]

    def __post_init__(self):
        """验证面额表的有效性"""
        if not self.denominations:
            raise ValueError("面额表不能为空")
        values = [d.value for d in self.denominations]
        for lower, higher in zip(values, values[1:]):
            if lower >= higher:
                raise ValueError(f"面额表必须严格升序: {lower} >= {higher}")

    @classmethod
    def from_denominations(cls, denominations: Sequence[ChipDenomination]) -> 'ChipLadder':
        """从面额序列创建面额表"""
        return cls(tuple(denominations))

    def __iter__(self) -> Iterator[ChipDenomination]:
        return iter(self.denominations)

    def __len__(self) -> int:
        return len(self.denominations)

    @property
    def values(self) -> List[int]:
        """升序的面额值"""
        return [d.value for d in self.denominations]

    @property
    def smallest(self) -> ChipDenomination:
        """最小面额"""
        return self.denominations[0]

    def get(self, value: int) -> Optional[ChipDenomination]:
        """按面额值查找，不存在时返回None"""
        for denomination in self.denominations:
            if denomination.value == value:
                return denomination
        return None

    def descending(self) -> List[ChipDenomination]:
        """从大到小的面额"""
        return list(reversed(self.denominations))


def _small(value: int, name: str, key: str) -> ChipDenomination:
    return ChipDenomination(value, ChipCategory.SMALL, 10, name, key)


def _big(value: int, name: str, key: str) -> ChipDenomination:
    return ChipDenomination(value, ChipCategory.BIG, 5, name, key)


def _card(value: int, name: str, key: str) -> ChipDenomination:
    return ChipDenomination(value, ChipCategory.CARD, 4, name, key)


DEFAULT_CHIP_LADDER = ChipLadder((
    _small(1, "White", "white"),
    _small(5, "Red", "red"),
    _small(25, "Green", "green"),
    _small(100, "Black", "black"),
    _small(500, "Purple", "purple"),
    _small(1000, "Yellow", "yellow"),
    _small(5000, "Orange", "orange"),
    _small(10000, "Gray", "gray"),
    _small(25000, "Light Blue", "light-blue"),

    _big(250000, "Big gray", "big-gray"),
    _big(1000000, "Big purple", "big-purple"),
    _big(5000000, "Big yellow", "big-yellow"),

    _card(20000000, "Card gray", "card-gray"),
    _card(100000000, "Card purple", "card-purple"),
    _card(500000000, "Card yellow", "card-yellow"),
    _card(1000000000, "Card black", "card-black"),
))
