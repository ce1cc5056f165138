"""
奖金分配与抽水提取

把获胜者列表记到最后一个阶段，并把底池与已派发奖金之间的差额识别为抽水。
"""

from dataclasses import replace
from typing import Dict, Mapping, Sequence

from ..seats.seat_map import SeatMap
from ..stages.types import CanonicalStage
from .types import StageBets, StageState, Winner

__all__ = ['WinningsAllocator', 'RakeExtractor']


class WinningsAllocator:
    """奖金分配器"""

    @staticmethod
    def has_winners(winners: Sequence[Winner]) -> bool:
        """是否存在赢得金额大于0的获胜者"""
        return any(winner.amount_won > 0 for winner in winners)

    @staticmethod
    def allocate(stage_bets: Mapping[CanonicalStage, StageBets], winners: Sequence[Winner],
                 seat_map: SeatMap, winners_known: bool) -> Dict[CanonicalStage, StageBets]:
        """
        把奖金记到最后一个出现的阶段

        Args:
            stage_bets: 按规范顺序排列的阶段下注
            winners: 获胜者列表
            seat_map: 座位映射
            winners_known: 本局是否已有获胜者

        Returns:
            新的阶段下注（输入不被修改）
        """
        allocated = dict(stage_bets)
        if not winners_known or not allocated:
            return allocated

        terminal_stage = list(allocated)[-1]
        terminal = allocated[terminal_stage]
        winnings = dict(terminal.winnings)

        for winner in winners:
            seat_index = seat_map.resolve(winner.identity)
            if seat_index is None:
                continue
            # 同一座位可能出现多次，累加
            winnings[seat_index] = winnings.get(seat_index, 0) + winner.amount_won

        allocated[terminal_stage] = StageBets(bets=dict(terminal.bets), winnings=winnings)
        return allocated


class RakeExtractor:
    """抽水提取器"""

    @staticmethod
    def extract(states: Mapping[CanonicalStage, StageState]) -> Dict[CanonicalStage, StageState]:
        """
        计算每个阶段的抽水

        奖金总额大于0的阶段: rake = pot - 奖金总额，pot清零；
        否则rake为0，pot保持不变。负数抽水原样保留。

        Args:
            states: 阶段账本

        Returns:
            计算抽水后的阶段账本
        """
        extracted: Dict[CanonicalStage, StageState] = {}
        for stage, state in states.items():
            total_winnings = state.total_winnings
            if total_winnings > 0:
                extracted[stage] = replace(state, rake=state.pot - total_winnings, pot=0)
            else:
                extracted[stage] = replace(state, rake=0)
        return extracted
