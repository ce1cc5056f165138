"""
筹码拆分不变量检查器

检查拆分结果的总值守恒、面额顺序和分组。
"""

from typing import TYPE_CHECKING

from .base_checker import BaseInvariantChecker
from .types import InvariantType

if TYPE_CHECKING:
    from ..chips.chip_planner import DecomposedStack

__all__ = ['ChipDecompositionChecker']


class ChipDecompositionChecker(BaseInvariantChecker['DecomposedStack']):
    """筹码拆分不变量检查器

    验证以下规则：
    1. 没有无法表示的剩余值，且面额总值等于筹码数
    2. 组内和组间面额严格升序
    3. 相邻分组的类别不同
    4. 堆高超过上限时给出提示（INFO）
    """

    def _perform_check(self, stack: 'DecomposedStack') -> None:
        self._check_exactness(stack)
        self._check_ordering(stack)
        self._check_stack_heights(stack)

    def _check_exactness(self, stack: 'DecomposedStack') -> None:
        if stack.remainder != 0:
            self._create_violation(
                InvariantType.CHIP_DECOMPOSITION,
                f"筹码数{stack.chips}无法用面额表完整表示，剩余{stack.remainder}",
                'CRITICAL',
                {'chips': stack.chips, 'remainder': stack.remainder}
            )
        if stack.total_value + stack.remainder != stack.chips:
            self._create_violation(
                InvariantType.CHIP_DECOMPOSITION,
                f"拆分总值不守恒: 筹码数{stack.chips}, 面额总值{stack.total_value}, 剩余{stack.remainder}",
                'CRITICAL',
                {'chips': stack.chips, 'total_value': stack.total_value, 'remainder': stack.remainder}
            )

    def _check_ordering(self, stack: 'DecomposedStack') -> None:
        values = [entry.value for group in stack.groups for entry in group.entries]
        for lower, higher in zip(values, values[1:]):
            if lower >= higher:
                self._create_violation(
                    InvariantType.CHIP_ORDERING,
                    f"面额未严格升序: {lower} >= {higher}",
                    'CRITICAL',
                    {'values': values}
                )
                break

        categories = [group.category for group in stack.groups]
        for first, second in zip(categories, categories[1:]):
            if first is second:
                self._create_violation(
                    InvariantType.CHIP_ORDERING,
                    f"相邻分组类别相同: {first.value}",
                    'CRITICAL',
                    {'categories': [c.value for c in categories]}
                )
                break

    def _check_stack_heights(self, stack: 'DecomposedStack') -> None:
        for group in stack.groups:
            for entry in group.entries:
                if entry.count > entry.denomination.max_stack_height:
                    self._create_violation(
                        InvariantType.CHIP_DECOMPOSITION,
                        f"面额{entry.value}堆高{entry.count}超过上限{entry.denomination.max_stack_height}",
                        'INFO',
                        {'value': entry.value, 'count': entry.count}
                    )
