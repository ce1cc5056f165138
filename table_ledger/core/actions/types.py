"""
行动日志类型定义

定义牌桌行动日志的行动类型和日志条目结构。
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from ..stages.types import DealStage

__all__ = ['ActionType', 'ActionLogEntry']


class ActionType(Enum):
    """行动类型（牌桌日志会产生的全部行动）"""
    JOIN = auto()                           # 入座
    LEAVE = auto()                          # 离座
    FOLD = auto()                           # 弃牌
    BET = auto()                            # 下注
    CALL = auto()                           # 跟注
    RAISE = auto()                          # 加注
    ALL_IN = auto()                         # 全押
    CHECK = auto()                          # 过牌
    WIN = auto()                            # 赢得筹码
    PLAYERS_HANDS_RANKED_MAIN_POT = auto()  # 主池手牌排名
    PLAYERS_HANDS_RANKED_SIDE_POT = auto()  # 边池手牌排名
    BIG_BLIND = auto()                      # 大盲注
    SMALL_BLIND = auto()                    # 小盲注
    KICKED = auto()                         # 被踢出
    STAGE = auto()                          # 阶段切换
    SIDE_POT_CREATED = auto()               # 边池创建


# 携带金额的行动类型
_AMOUNT_ACTIONS = frozenset({
    ActionType.BET,
    ActionType.RAISE,
    ActionType.ALL_IN,
    ActionType.WIN,
})


@dataclass(frozen=True)
class ActionLogEntry:
    """行动日志条目"""
    action_type: ActionType
    actor: Optional[str] = None
    amount: int = 0
    stage: Optional[DealStage] = None
    reason: str = ""
    timestamp: Optional[int] = None  # 仅保留，回放只依赖日志顺序

    def __post_init__(self):
        """验证日志条目的有效性"""
        if not isinstance(self.action_type, ActionType):
            raise ValueError(f"action_type必须是ActionType: {self.action_type!r}")
        if not isinstance(self.amount, int) or self.amount < 0:
            raise ValueError(f"amount必须是非负整数: {self.amount!r}")
        if self.action_type is ActionType.STAGE:
            if not isinstance(self.stage, DealStage):
                raise ValueError("STAGE条目必须携带DealStage")
        elif self.stage is not None:
            raise ValueError(f"{self.action_type.name}条目不能携带stage")
        if self.action_type not in _AMOUNT_ACTIONS and self.amount != 0:
            raise ValueError(f"{self.action_type.name}操作的金额必须为0")
        if self.actor is not None and not self.actor:
            raise ValueError("actor不能为空字符串")

    @classmethod
    def stage_transition(cls, stage: DealStage, actor: Optional[str] = None) -> 'ActionLogEntry':
        """创建阶段切换条目"""
        return cls(action_type=ActionType.STAGE, actor=actor, stage=stage)

    @classmethod
    def call(cls, actor: Optional[str]) -> 'ActionLogEntry':
        """创建跟注条目"""
        return cls(action_type=ActionType.CALL, actor=actor)

    @classmethod
    def raise_to(cls, actor: Optional[str], amount: int) -> 'ActionLogEntry':
        """创建加注条目"""
        return cls(action_type=ActionType.RAISE, actor=actor, amount=amount)

    @classmethod
    def all_in(cls, actor: Optional[str], amount: int) -> 'ActionLogEntry':
        """创建全押条目"""
        return cls(action_type=ActionType.ALL_IN, actor=actor, amount=amount)

    @classmethod
    def small_blind(cls, actor: Optional[str]) -> 'ActionLogEntry':
        """创建小盲注条目"""
        return cls(action_type=ActionType.SMALL_BLIND, actor=actor)

    @classmethod
    def big_blind(cls, actor: Optional[str]) -> 'ActionLogEntry':
        """创建大盲注条目"""
        return cls(action_type=ActionType.BIG_BLIND, actor=actor)

    def is_stage_transition(self) -> bool:
        """判断是否为阶段切换"""
        return self.action_type is ActionType.STAGE
