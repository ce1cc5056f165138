"""
行动日志回放器

按日志顺序回放一次，跟踪每个阶段内的当前注额，并记录每个座位在该阶段的最后一次下注。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from ..actions.types import ActionType, ActionLogEntry
from ..seats.seat_map import SeatMap
from ..stages.types import CanonicalStage, StageKeyNormalizer
from .types import StageBets, StageRegression

__all__ = ['ReplayResult', 'ActionLogReplayer']


@dataclass(frozen=True)
class ReplayResult:
    """回放结果"""
    stages: Mapping[CanonicalStage, StageBets]
    final_stage: CanonicalStage
    regressions: Tuple[StageRegression, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'stages', MappingProxyType(dict(self.stages)))


# 下注处理函数: (当前注额, 日志条目, 小盲, 大盲) -> (新的当前注额, 座位下注)
_BetHandler = Callable[[int, ActionLogEntry, int, int], Tuple[int, int]]


def _handle_call(current_bet: int, entry: ActionLogEntry, small_blind: int, big_blind: int) -> Tuple[int, int]:
    return current_bet, current_bet


def _handle_raise(current_bet: int, entry: ActionLogEntry, small_blind: int, big_blind: int) -> Tuple[int, int]:
    return entry.amount, entry.amount


def _handle_small_blind(current_bet: int, entry: ActionLogEntry, small_blind: int, big_blind: int) -> Tuple[int, int]:
    return max(current_bet, small_blind), small_blind


def _handle_big_blind(current_bet: int, entry: ActionLogEntry, small_blind: int, big_blind: int) -> Tuple[int, int]:
    return max(current_bet, big_blind), big_blind


def _handle_all_in(current_bet: int, entry: ActionLogEntry, small_blind: int, big_blind: int) -> Tuple[int, int]:
    return max(current_bet, entry.amount), entry.amount


_BET_HANDLERS: Dict[ActionType, _BetHandler] = {
    ActionType.CALL: _handle_call,
    ActionType.RAISE: _handle_raise,
    ActionType.SMALL_BLIND: _handle_small_blind,
    ActionType.BIG_BLIND: _handle_big_blind,
    ActionType.ALL_IN: _handle_all_in,
}

# 不影响账本的行动类型（BET由牌桌以RAISE/ALL_IN记录实际注额）
_IGNORED_ACTIONS = frozenset({
    ActionType.JOIN,
    ActionType.LEAVE,
    ActionType.FOLD,
    ActionType.BET,
    ActionType.CHECK,
    ActionType.WIN,
    ActionType.PLAYERS_HANDS_RANKED_MAIN_POT,
    ActionType.PLAYERS_HANDS_RANKED_SIDE_POT,
    ActionType.KICKED,
    ActionType.SIDE_POT_CREATED,
})

_unclassified = set(ActionType) - set(_BET_HANDLERS) - _IGNORED_ACTIONS - {ActionType.STAGE}
if _unclassified:
    raise RuntimeError(f"行动类型未分类: {sorted(a.name for a in _unclassified)}")


class ActionLogReplayer:
    """
    行动日志回放器

    回放过程中的可变状态只存在于replay调用内部，返回值是不可变的回放结果。
    """

    @staticmethod
    def replay(action_log: Sequence[ActionLogEntry], seat_map: SeatMap,
               small_blind: int = 0, big_blind: int = 0) -> ReplayResult:
        """
        回放行动日志

        Args:
            action_log: 按顺序排列的行动日志
            seat_map: 座位映射
            small_blind: 小盲注金额
            big_blind: 大盲注金额

        Returns:
            回放结果，INITIAL阶段总是存在
        """
        if small_blind < 0 or big_blind < 0:
            raise ValueError(f"盲注不能为负数: small_blind={small_blind}, big_blind={big_blind}")

        stage_bets: Dict[CanonicalStage, Dict[int, int]] = {CanonicalStage.INITIAL: {}}
        regressions: List[StageRegression] = []
        current_stage = CanonicalStage.INITIAL
        current_bet = 0

        for index, entry in enumerate(action_log):
            if entry.is_stage_transition():
                new_stage = StageKeyNormalizer.normalize(entry.stage)
                if new_stage is current_stage:
                    continue
                if StageKeyNormalizer.is_regression(current_stage, new_stage):
                    regressions.append(StageRegression(current_stage, new_stage, index))
                current_stage = new_stage
                stage_bets.setdefault(current_stage, {})
                current_bet = 0
                continue

            seat_index = seat_map.resolve(entry.actor)
            if seat_index is None:
                continue

            bets = stage_bets[current_stage]
            bets.setdefault(seat_index, 0)

            handler = _BET_HANDLERS.get(entry.action_type)
            if handler is None:
                continue
            current_bet, bets[seat_index] = handler(current_bet, entry, small_blind, big_blind)

        ordered = StageKeyNormalizer.sort_stages(stage_bets)
        return ReplayResult(
            stages={stage: StageBets(bets=dict(stage_bets[stage])) for stage in ordered},
            final_stage=current_stage,
            regressions=tuple(regressions),
        )
