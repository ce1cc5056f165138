"""
阶段账本不变量检查器

检查阶段账本的底池结转守恒、抽水一致性、与牌桌底池的一致性以及阶段顺序。
"""

from ..ledger.pot_carryover import PotCarryoverCalculator
from ..ledger.types import StageLedger
from .base_checker import BaseInvariantChecker
from .types import InvariantType

__all__ = ['LedgerInvariantChecker']


class LedgerInvariantChecker(BaseInvariantChecker[StageLedger]):
    """阶段账本不变量检查器

    验证以下规则：
    1. 底池结转：pot(S) == starting_pot(上一阶段) + 上一阶段下注总额（派奖前）
    2. 抽水：有奖金的阶段 pot == 0 且 rake >= 0；无奖金的阶段 rake == 0
    3. 牌桌报告的底池与最后阶段派奖前底池一致（警告）
    4. 回放中没有阶段回退（警告）
    """

    def _perform_check(self, ledger: StageLedger) -> None:
        self._check_pot_conservation(ledger)
        self._check_rake(ledger)
        self._check_reported_pot(ledger)
        self._check_stage_order(ledger)

    def _check_pot_conservation(self, ledger: StageLedger) -> None:
        previous = None
        for stage, state in ledger.stages.items():
            if previous is None:
                if state.starting_pot != 0:
                    self._create_violation(
                        InvariantType.POT_CONSERVATION,
                        f"第一个阶段{stage.name}的起始底池必须为0: {state.starting_pot}",
                        'CRITICAL',
                        {'stage': stage.name, 'starting_pot': state.starting_pot}
                    )
            else:
                previous_stage, previous_state = previous
                expected = PotCarryoverCalculator.expected_pot(previous_state, previous_state.starting_pot)
                actual = state.pot_before_payout
                if actual != expected or state.starting_pot != expected:
                    self._create_violation(
                        InvariantType.POT_CONSERVATION,
                        f"阶段{stage.name}底池不守恒: 期望{expected}, 实际{actual}",
                        'CRITICAL',
                        {
                            'stage': stage.name,
                            'previous_stage': previous_stage.name,
                            'expected': expected,
                            'pot_before_payout': actual,
                            'starting_pot': state.starting_pot
                        }
                    )
            previous = (stage, state)

    def _check_rake(self, ledger: StageLedger) -> None:
        for stage, state in ledger.stages.items():
            total_winnings = state.total_winnings
            if total_winnings > 0:
                if state.rake < 0:
                    self._create_violation(
                        InvariantType.RAKE_CONSISTENCY,
                        f"阶段{stage.name}抽水为负数: 奖金{total_winnings}超过底池{state.rake + total_winnings}",
                        'CRITICAL',
                        {'stage': stage.name, 'rake': state.rake, 'total_winnings': total_winnings}
                    )
                if state.pot != 0:
                    self._create_violation(
                        InvariantType.RAKE_CONSISTENCY,
                        f"阶段{stage.name}派奖后底池未清零: {state.pot}",
                        'CRITICAL',
                        {'stage': stage.name, 'pot': state.pot}
                    )
            elif state.rake != 0:
                self._create_violation(
                    InvariantType.RAKE_CONSISTENCY,
                    f"阶段{stage.name}没有奖金却有抽水: {state.rake}",
                    'CRITICAL',
                    {'stage': stage.name, 'rake': state.rake}
                )

    def _check_reported_pot(self, ledger: StageLedger) -> None:
        if not ledger.winners_known or ledger.reported_pot == 0 or len(ledger.stages) < 2:
            return
        stage, state = ledger.latest_stage()
        if state.pot_before_payout != ledger.reported_pot:
            self._create_violation(
                InvariantType.POT_INTEGRITY,
                f"阶段{stage.name}结转底池{state.pot_before_payout}与牌桌底池{ledger.reported_pot}不一致",
                'WARNING',
                {
                    'stage': stage.name,
                    'pot_before_payout': state.pot_before_payout,
                    'reported_pot': ledger.reported_pot
                }
            )

    def _check_stage_order(self, ledger: StageLedger) -> None:
        for regression in ledger.regressions:
            self._create_violation(
                InvariantType.PHASE_CONSISTENCY,
                f"日志第{regression.log_index}条从{regression.from_stage.name}回退到{regression.to_stage.name}",
                'WARNING',
                {
                    'from_stage': regression.from_stage.name,
                    'to_stage': regression.to_stage.name,
                    'log_index': regression.log_index
                }
            )
