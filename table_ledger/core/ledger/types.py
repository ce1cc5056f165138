"""
账本类型定义

定义按阶段的下注/赢取/底池/抽水账本的数据结构。
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..stages.types import CanonicalStage, CANONICAL_STAGE_ORDER

__all__ = [
    'Winner',
    'StageBets',
    'StageState',
    'StageRegression',
    'StageLedger',
]


@dataclass(frozen=True)
class Winner:
    """获胜者及其赢得金额"""
    identity: str
    amount_won: int

    def __post_init__(self):
        """验证获胜者数据的有效性"""
        if not self.identity:
            raise ValueError("identity不能为空")
        if not isinstance(self.amount_won, int) or self.amount_won < 0:
            raise ValueError(f"amount_won必须是非负整数: {self.amount_won!r}")


@dataclass(frozen=True)
class StageBets:
    """单个阶段的回放结果：座位下注和座位赢取"""
    bets: Mapping[int, int] = field(default_factory=dict)
    winnings: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self):
        """冻结座位映射"""
        object.__setattr__(self, 'bets', MappingProxyType(dict(self.bets)))
        object.__setattr__(self, 'winnings', MappingProxyType(dict(self.winnings)))

    @property
    def total_bets(self) -> int:
        """阶段下注总额"""
        return sum(self.bets.values())

    @property
    def total_winnings(self) -> int:
        """阶段赢取总额"""
        return sum(self.winnings.values())


@dataclass(frozen=True)
class StageState(StageBets):
    """单个阶段的完整账本"""
    starting_pot: int = 0
    pot: int = 0
    rake: int = 0  # 数据不一致时可能为负数，不做截断

    def __post_init__(self):
        """验证阶段账本的有效性"""
        super().__post_init__()
        if self.starting_pot < 0:
            raise ValueError(f"starting_pot不能为负数: {self.starting_pot}")
        if self.pot < 0:
            raise ValueError(f"pot不能为负数: {self.pot}")

    @property
    def pot_before_payout(self) -> int:
        """派奖前的底池"""
        if self.total_winnings > 0:
            return self.rake + self.total_winnings
        return self.pot


@dataclass(frozen=True)
class StageRegression:
    """回放中出现的阶段回退"""
    from_stage: CanonicalStage
    to_stage: CanonicalStage
    log_index: int


_EMPTY_STATE = StageState()


@dataclass(frozen=True)
class StageLedger:
    """
    按阶段的账本

    Attributes:
        stages: 规范阶段 -> 阶段账本（按规范顺序）
        final_stage: 回放结束时所处的阶段
        reported_pot: 牌桌报告的底池（仅用于交叉校验）
        winners_known: 本局是否已有获胜者
        regressions: 回放中出现的阶段回退
    """
    stages: Mapping[CanonicalStage, StageState]
    final_stage: CanonicalStage = CanonicalStage.INITIAL
    reported_pot: int = 0
    winners_known: bool = False
    regressions: Tuple[StageRegression, ...] = ()

    def __post_init__(self):
        """验证账本的有效性"""
        object.__setattr__(self, 'stages', MappingProxyType(dict(self.stages)))
        if CanonicalStage.INITIAL not in self.stages:
            raise ValueError("账本必须包含INITIAL阶段")
        if self.reported_pot < 0:
            raise ValueError(f"reported_pot不能为负数: {self.reported_pot}")
        ordered = [s for s in CANONICAL_STAGE_ORDER if s in self.stages]
        if list(self.stages) != ordered:
            raise ValueError("账本阶段必须按规范顺序排列")

    def __getitem__(self, stage: CanonicalStage) -> StageState:
        return self.stages[stage]

    def __contains__(self, stage: CanonicalStage) -> bool:
        return stage in self.stages

    def get_stage(self, stage: CanonicalStage) -> Optional[StageState]:
        """获取阶段账本，不存在时返回None"""
        return self.stages.get(stage)

    def present_stages(self) -> List[CanonicalStage]:
        """按规范顺序返回出现过的阶段"""
        return list(self.stages)

    def latest_stage(self) -> Tuple[CanonicalStage, StageState]:
        """最后一个出现的阶段"""
        return self._stage_at(-1)

    def previous_stage(self) -> Tuple[CanonicalStage, StageState]:
        """倒数第二个出现的阶段，不存在时返回空的INITIAL阶段"""
        return self._stage_at(-2)

    def _stage_at(self, position: int) -> Tuple[CanonicalStage, StageState]:
        items = list(self.stages.items())
        try:
            return items[position]
        except IndexError:
            return CanonicalStage.INITIAL, _EMPTY_STATE

    @property
    def total_rake(self) -> int:
        """所有阶段的抽水总额"""
        return sum(state.rake for state in self.stages.values())

    def to_dict(self) -> Dict[str, Dict[str, object]]:
        """转换为字典格式"""
        return {
            stage.name: {
                'bets': dict(state.bets),
                'winnings': dict(state.winnings),
                'starting_pot': state.starting_pot,
                'pot': state.pot,
                'rake': state.rake,
            }
            for stage, state in self.stages.items()
        }
