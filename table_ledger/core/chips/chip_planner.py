"""
筹码面额拆分规划器

把非负整数筹码数拆分为固定面额的组合：贪心填充、按堆高上限整理，再按展示类别分组。
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..invariant.types import InvariantError, InvariantType, InvariantViolation
from .denomination import ChipCategory, ChipDenomination, ChipLadder, DEFAULT_CHIP_LADDER

__all__ = ['ChipCount', 'ChipGroup', 'DecomposedStack', 'ChipDenominationPlanner']


@dataclass(frozen=True)
class ChipCount:
    """某一面额的筹码数量"""
    denomination: ChipDenomination
    count: int

    def __post_init__(self):
        """验证数量的有效性"""
        if self.count <= 0:
            raise ValueError(f"筹码数量必须为正数: {self.count}")

    @property
    def value(self) -> int:
        """面额值"""
        return self.denomination.value

    @property
    def total(self) -> int:
        """该面额的总值"""
        return self.denomination.value * self.count


@dataclass(frozen=True)
class ChipGroup:
    """同一展示类别下连续的面额"""
    category: ChipCategory
    entries: Tuple[ChipCount, ...]

    @property
    def total(self) -> int:
        return sum(entry.total for entry in self.entries)


@dataclass(frozen=True)
class DecomposedStack:
    """
    拆分结果

    Attributes:
        chips: 待拆分的筹码数
        groups: 按类别分组的面额，组内和组间都按面额升序
        remainder: 小于最小面额、无法表示的剩余值
    """
    chips: int
    groups: Tuple[ChipGroup, ...] = ()
    remainder: int = 0

    @property
    def total_value(self) -> int:
        """拆分结果表示的总值"""
        return sum(group.total for group in self.groups)

    @property
    def is_exact(self) -> bool:
        """拆分是否完全覆盖筹码数"""
        return self.remainder == 0 and self.total_value == self.chips

    def counts(self) -> Dict[int, int]:
        """面额值 -> 数量"""
        return {entry.value: entry.count for group in self.groups for entry in group.entries}

    def as_pairs(self) -> List[Tuple[str, List[Tuple[int, int]]]]:
        """转换为 [(类别, [(面额, 数量)])] 格式"""
        return [
            (group.category.value, [(entry.value, entry.count) for entry in group.entries])
            for group in self.groups
        ]


class ChipDenominationPlanner:
    """
    筹码面额拆分规划器

    单次确定性计算，不重试；要么完整覆盖筹码数，要么通过remainder暴露无法表示的部分。
    """

    def __init__(self, ladder: ChipLadder = DEFAULT_CHIP_LADDER):
        """
        初始化规划器

        Args:
            ladder: 面额表
        """
        self._ladder = ladder

    @property
    def ladder(self) -> ChipLadder:
        return self._ladder

    def plan(self, chips: int) -> DecomposedStack:
        """
        拆分筹码数

        Args:
            chips: 非负整数筹码数（已按每筹码币值换算）

        Returns:
            拆分结果

        Raises:
            ValueError: chips为负数
            InvariantError: 整理过程改变了总值
        """
        if not isinstance(chips, int) or chips < 0:
            raise ValueError(f"chips必须是非负整数: {chips!r}")
        if chips == 0:
            return DecomposedStack(chips=0)

        counts, remainder = self.greedy_fill(chips)
        before = self._value_of(counts)
        counts = self.consolidate(counts)
        after = self._value_of(counts)
        if before != after:
            violation = InvariantViolation.create(
                InvariantType.CHIP_DECOMPOSITION,
                f"面额整理改变了总值: 整理前{before}, 整理后{after}",
                'CRITICAL',
                {'chips': chips, 'before': before, 'after': after},
            )
            raise InvariantError("筹码拆分总值不守恒", [violation])

        return DecomposedStack(chips=chips, groups=self.group(counts), remainder=remainder)

    def greedy_fill(self, chips: int) -> Tuple[Dict[int, int], int]:
        """
        贪心填充，从最大面额开始

        Args:
            chips: 筹码数

        Returns:
            (面额值 -> 数量, 剩余值)
        """
        counts: Dict[int, int] = {}
        remaining = chips
        for denomination in self._ladder.descending():
            if remaining == 0:
                break
            count, remaining = divmod(remaining, denomination.value)
            if count:
                counts[denomination.value] = count
        return counts, remaining

    def consolidate(self, counts: Dict[int, int]) -> Dict[int, int]:
        """
        按堆高上限整理

        超过堆高上限的面额，把超出的部分换成能整除它的更小面额，
        换入后目标面额不能超过自己的堆高上限。

        Args:
            counts: 面额值 -> 数量

        Returns:
            整理后的面额值 -> 数量（输入不被修改）
        """
        result = dict(counts)
        descending = self._ladder.descending()

        for index, denomination in enumerate(descending):
            excess = result.get(denomination.value, 0) - denomination.max_stack_height
            if excess <= 0:
                continue
            for smaller in descending[index + 1:]:
                if excess == 0:
                    break
                if denomination.value % smaller.value != 0:
                    continue
                ratio = denomination.value // smaller.value
                room = smaller.max_stack_height - result.get(smaller.value, 0)
                movable = min(excess, max(room, 0) // ratio)
                if movable <= 0:
                    continue
                result[denomination.value] -= movable
                result[smaller.value] = result.get(smaller.value, 0) + movable * ratio
                excess -= movable

        return {value: count for value, count in result.items() if count > 0}

    def group(self, counts: Dict[int, int]) -> Tuple[ChipGroup, ...]:
        """
        按面额升序排序，并把相邻的同类别面额合并为一组

        Args:
            counts: 面额值 -> 数量

        Returns:
            分组结果
        """
        groups: List[Tuple[ChipCategory, List[ChipCount]]] = []
        for value in sorted(counts):
            count = counts[value]
            if count <= 0:
                continue
            denomination = self._ladder.get(value)
            entry = ChipCount(denomination, count)
            if groups and groups[-1][0] is denomination.category:
                groups[-1][1].append(entry)
            else:
                groups.append((denomination.category, [entry]))
        return tuple(ChipGroup(category, tuple(entries)) for category, entries in groups)

    @staticmethod
    def _value_of(counts: Dict[int, int]) -> int:
        return sum(value * count for value, count in counts.items())
