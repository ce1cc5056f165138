"""
阶段账本构建器

串联回放、奖金分配、底池结转和抽水提取，从完整的行动日志构建按阶段的账本。
"""

from typing import Mapping, Optional, Sequence, Union

from ..actions.types import ActionLogEntry
from ..seats.seat_map import SeatMap
from .action_replayer import ActionLogReplayer
from .pot_carryover import PotCarryoverCalculator
from .types import StageLedger, Winner
from .winnings_allocator import WinningsAllocator, RakeExtractor

__all__ = [
    'StageLedgerBuilder',
    'build_stage_ledger',
    'winners_from_ranked_groups',
    'has_ranked_winners',
]


def winners_from_ranked_groups(ranked_groups: Sequence[Sequence[Winner]]) -> Sequence[Winner]:
    """排名最高的获胜者组，没有分组时返回空列表"""
    if not ranked_groups:
        return []
    return list(ranked_groups[0])


def has_ranked_winners(ranked_groups: Sequence[Sequence[Winner]]) -> bool:
    """任意排名组中存在赢得金额大于0的获胜者"""
    return any(WinningsAllocator.has_winners(group) for group in ranked_groups)


class StageLedgerBuilder:
    """
    阶段账本构建器

    每次调用都从头重新计算，相同输入得到结构相等的结果。
    """

    @staticmethod
    def build(action_log: Sequence[ActionLogEntry],
              seat_map: Union[SeatMap, Mapping[str, int]],
              small_blind: int = 0,
              big_blind: int = 0,
              pot: int = 0,
              winners: Sequence[Winner] = (),
              winners_known: Optional[bool] = None) -> StageLedger:
        """
        构建阶段账本

        Args:
            action_log: 按顺序排列的行动日志
            seat_map: 座位映射（SeatMap或身份->座位索引的映射）
            small_blind: 小盲注金额
            big_blind: 大盲注金额
            pot: 牌桌报告的底池，仅用于交叉校验和翻牌前结束时的底池
            winners: 获胜者列表
            winners_known: 是否已有获胜者，None时由winners推断

        Returns:
            阶段账本
        """
        if pot < 0:
            raise ValueError(f"pot不能为负数: {pot}")
        if not isinstance(seat_map, SeatMap):
            seat_map = SeatMap(seat_map)
        if winners_known is None:
            winners_known = WinningsAllocator.has_winners(winners)

        replay = ActionLogReplayer.replay(action_log, seat_map, small_blind, big_blind)
        stage_bets = WinningsAllocator.allocate(replay.stages, winners, seat_map, winners_known)

        # 只有一个阶段时没有可结转的上一阶段，用牌桌底池作为该阶段底池
        opening_pot = pot if winners_known and len(stage_bets) == 1 else 0
        states = PotCarryoverCalculator.calculate(stage_bets, opening_pot)
        states = RakeExtractor.extract(states)

        return StageLedger(
            stages=states,
            final_stage=replay.final_stage,
            reported_pot=pot,
            winners_known=winners_known,
            regressions=replay.regressions,
        )


def build_stage_ledger(action_log: Sequence[ActionLogEntry],
                       seat_map: Union[SeatMap, Mapping[str, int]],
                       small_blind: int = 0,
                       big_blind: int = 0,
                       pot: int = 0,
                       winners: Sequence[Winner] = (),
                       winners_known: Optional[bool] = None) -> StageLedger:
    """StageLedgerBuilder.build的函数形式"""
    return StageLedgerBuilder.build(
        action_log, seat_map, small_blind, big_blind, pot, winners, winners_known
    )
