"""
底池结转计算器

根据上一阶段的下注推导每个阶段的起始底池和底池。
"""

from typing import Dict, Mapping

from ..stages.types import CanonicalStage
from .types import StageBets, StageState

__all__ = ['PotCarryoverCalculator']


class PotCarryoverCalculator:
    """
    底池结转计算器

    对按规范顺序排列的已出现阶段做左折叠，未到达的阶段不打断折叠。
    """

    @staticmethod
    def calculate(stage_bets: Mapping[CanonicalStage, StageBets], opening_pot: int = 0) -> Dict[CanonicalStage, StageState]:
        """
        计算各阶段底池

        Args:
            stage_bets: 按规范顺序排列的阶段下注
            opening_pot: 第一个阶段的底池

        Returns:
            阶段账本（抽水尚未计算）
        """
        if opening_pot < 0:
            raise ValueError(f"opening_pot不能为负数: {opening_pot}")

        states: Dict[CanonicalStage, StageState] = {}
        previous = None

        for stage, bets in stage_bets.items():
            if previous is None:
                pot = opening_pot
                starting_pot = 0
            else:
                pot = PotCarryoverCalculator.expected_pot(previous, previous.starting_pot)
                starting_pot = pot

            state = StageState(
                bets=dict(bets.bets),
                winnings=dict(bets.winnings),
                starting_pot=starting_pot,
                pot=pot,
            )
            states[stage] = state
            previous = state

        return states

    @staticmethod
    def expected_pot(previous: StageBets, previous_starting_pot: int) -> int:
        """上一阶段结转到下一阶段的底池"""
        return previous_starting_pot + previous.total_bets
