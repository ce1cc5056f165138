"""
账本模块

提供行动日志回放、奖金分配、底池结转、抽水提取和阶段账本构建功能。
"""

from .types import Winner, StageBets, StageState, StageRegression, StageLedger
from .action_replayer import ActionLogReplayer, ReplayResult
from .pot_carryover import PotCarryoverCalculator
from .winnings_allocator import WinningsAllocator, RakeExtractor
from .ledger_builder import (
    StageLedgerBuilder,
    build_stage_ledger,
    winners_from_ranked_groups,
    has_ranked_winners,
)

__all__ = [
    'Winner',
    'StageBets',
    'StageState',
    'StageRegression',
    'StageLedger',
    'ActionLogReplayer',
    'ReplayResult',
    'PotCarryoverCalculator',
    'WinningsAllocator',
    'RakeExtractor',
    'StageLedgerBuilder',
    'build_stage_ledger',
    'winners_from_ranked_groups',
    'has_ranked_winners'
]
