"""
阶段账本构建器单元测试

从完整的行动日志构建账本，覆盖奖金、抽水、牌桌底池和阶段选择。
"""

from dataclasses import replace

import pytest

from table_ledger.core.actions.types import ActionLogEntry, ActionType
from table_ledger.core.ledger.ledger_builder import (
    StageLedgerBuilder,
    build_stage_ledger,
    winners_from_ranked_groups,
    has_ranked_winners,
)
from table_ledger.core.ledger.types import StageLedger, StageState, Winner
from table_ledger.core.seats.seat_map import SeatMap
from table_ledger.core.stages.types import CanonicalStage, DealStage
from table_ledger.tests.anti_cheat.core_usage_checker import CoreUsageChecker


class TestStageLedgerBuilder:
    """测试阶段账本构建"""

    def test_blinds_only_ledger(self, blinds_log, seat_map):
        """测试只有盲注时的账本"""
        ledger = StageLedgerBuilder.build(blinds_log, seat_map, 10, 20)

        CoreUsageChecker.verify_real_objects(ledger, "StageLedger")
        assert ledger.present_stages() == [CanonicalStage.INITIAL]
        initial = ledger[CanonicalStage.INITIAL]
        assert initial.bets == {0: 10, 1: 20}
        assert initial.winnings == {}
        assert (initial.starting_pot, initial.pot, initial.rake) == (0, 0, 0)
        assert not ledger.winners_known

    def test_flop_carries_preflop_bets(self, flop_log, seat_map):
        """测试翻牌圈底池来自翻牌前下注"""
        ledger = StageLedgerBuilder.build(flop_log, seat_map, 10, 20)

        assert ledger[CanonicalStage.INITIAL].pot == 0
        flop = ledger[CanonicalStage.FLOP]
        assert flop.bets == {0: 50, 1: 50}
        assert flop.starting_pot == 30
        assert flop.pot == 30

    def test_showdown_with_rake(self, showdown_log, seat_map):
        """测试摊牌阶段奖金和抽水"""
        ledger = StageLedgerBuilder.build(
            showdown_log, seat_map, 10, 20, pot=100, winners=[Winner("A", 80)]
        )

        assert ledger.present_stages() == [CanonicalStage.INITIAL, CanonicalStage.FLOP, CanonicalStage.SHOWDOWN]
        assert ledger[CanonicalStage.INITIAL].bets == {0: 20, 1: 20}
        assert ledger[CanonicalStage.FLOP].pot == 40
        showdown = ledger[CanonicalStage.SHOWDOWN]
        assert showdown.starting_pot == 100
        assert showdown.winnings == {0: 80}
        assert showdown.rake == 20
        assert showdown.pot == 0
        assert ledger.total_rake == 20
        assert ledger.winners_known
        assert ledger.reported_pot == 100
        CoreUsageChecker.verify_value_conservation(
            showdown.starting_pot, showdown.rake + showdown.total_winnings
        )

    def test_winnings_exceeding_pot_produce_negative_rake(self, showdown_log, seat_map):
        """测试奖金超过结转底池时抽水为负数"""
        ledger = StageLedgerBuilder.build(showdown_log, seat_map, 10, 20, winners=[Winner("A", 150)])
        assert ledger[CanonicalStage.SHOWDOWN].rake == -50

    def test_preflop_finish_uses_reported_pot(self, seat_map):
        """测试只有一个阶段且已有获胜者时，用牌桌底池作为该阶段底池"""
        log = [
            ActionLogEntry.small_blind("A"),
            ActionLogEntry.big_blind("B"),
            ActionLogEntry(ActionType.FOLD, actor="A"),
        ]
        ledger = StageLedgerBuilder.build(log, seat_map, 10, 20, pot=30, winners=[Winner("B", 28)])

        initial = ledger[CanonicalStage.INITIAL]
        assert initial.bets == {0: 10, 1: 20}
        assert initial.winnings == {1: 28}
        assert initial.rake == 2
        assert initial.pot == 0
        assert initial.starting_pot == 0

    def test_reported_pot_ignored_without_winners(self, blinds_log, seat_map):
        """测试没有获胜者时牌桌底池不影响账本"""
        ledger = StageLedgerBuilder.build(blinds_log, seat_map, 10, 20, pot=30)
        assert ledger[CanonicalStage.INITIAL].pot == 0

    def test_reported_pot_not_seeded_after_flop(self, showdown_log, seat_map):
        """测试多阶段时牌桌底池只用于交叉校验"""
        ledger = StageLedgerBuilder.build(
            showdown_log, seat_map, 10, 20, pot=999, winners=[Winner("A", 100)]
        )
        assert ledger[CanonicalStage.INITIAL].pot == 0
        assert ledger[CanonicalStage.SHOWDOWN].rake == 0
        assert ledger.reported_pot == 999

    def test_explicit_winners_known_false(self, showdown_log, seat_map):
        """测试显式声明没有获胜者时不分配奖金"""
        ledger = StageLedgerBuilder.build(
            showdown_log, seat_map, 10, 20, winners=[Winner("A", 80)], winners_known=False
        )
        showdown = ledger[CanonicalStage.SHOWDOWN]
        assert showdown.winnings == {}
        assert showdown.rake == 0
        assert showdown.pot == 100

    def test_winnings_go_to_last_present_stage_after_regression(self, seat_map):
        """测试阶段回退后奖金仍记到规范顺序中的最后一个阶段"""
        log = [
            ActionLogEntry.small_blind("A"),
            ActionLogEntry.big_blind("B"),
            ActionLogEntry.stage_transition(DealStage.FLOP),
            ActionLogEntry.raise_to("A", 40),
            ActionLogEntry.stage_transition(DealStage.OPENING),
            ActionLogEntry.call("B"),
        ]
        ledger = StageLedgerBuilder.build(log, seat_map, 10, 20, winners=[Winner("A", 10)])

        assert ledger.final_stage is CanonicalStage.INITIAL
        assert len(ledger.regressions) == 1
        assert ledger[CanonicalStage.FLOP].winnings == {0: 10}
        assert ledger[CanonicalStage.INITIAL].winnings == {}

    def test_accepts_plain_mapping(self, blinds_log):
        """测试座位映射可以是普通字典"""
        ledger = build_stage_ledger(blinds_log, {"A": 3, "B": 7}, 10, 20)
        assert ledger[CanonicalStage.INITIAL].bets == {3: 10, 7: 20}

    def test_idempotent(self, showdown_log, seat_map):
        """测试相同输入得到结构相等的账本"""
        first = StageLedgerBuilder.build(showdown_log, seat_map, 10, 20, 100, [Winner("A", 80)])
        second = StageLedgerBuilder.build(showdown_log, seat_map, 10, 20, 100, [Winner("A", 80)])
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_negative_pot_rejected(self, blinds_log, seat_map):
        """测试负数底池被拒绝"""
        with pytest.raises(ValueError):
            StageLedgerBuilder.build(blinds_log, seat_map, pot=-1)


class TestRankedWinners:
    """测试按排名分组的获胜者"""

    def test_top_group_only(self):
        """测试只取排名最高的一组"""
        groups = [[Winner("A", 50), Winner("B", 50)], [Winner("C", 20)]]
        assert winners_from_ranked_groups(groups) == [Winner("A", 50), Winner("B", 50)]
        assert winners_from_ranked_groups([]) == []

    def test_any_group_counts_as_winners(self):
        """测试任意一组存在奖金即视为已有获胜者"""
        assert has_ranked_winners([[Winner("A", 0)], [Winner("C", 20)]])
        assert not has_ranked_winners([[Winner("A", 0)]])
        assert not has_ranked_winners([])


class TestStageLedger:
    """测试阶段账本数据结构"""

    def setup_method(self):
        """测试设置"""
        self.ledger = StageLedger(stages={
            CanonicalStage.INITIAL: StageState(bets={0: 20, 1: 20}),
            CanonicalStage.FLOP: StageState(bets={0: 30}, starting_pot=40, pot=40),
            CanonicalStage.TURN: StageState(starting_pot=70, pot=70),
        })

    def test_latest_and_previous_stage(self):
        """测试最后一个和倒数第二个阶段"""
        stage, state = self.ledger.latest_stage()
        assert stage is CanonicalStage.TURN
        assert state.pot == 70
        stage, state = self.ledger.previous_stage()
        assert stage is CanonicalStage.FLOP
        assert state.bets == {0: 30}

    def test_previous_stage_defaults_to_empty_initial(self):
        """测试只有一个阶段时上一阶段为空的INITIAL"""
        ledger = StageLedger(stages={CanonicalStage.INITIAL: StageState(bets={0: 10})})
        stage, state = ledger.previous_stage()
        assert stage is CanonicalStage.INITIAL
        assert state == StageState()

    def test_lookup(self):
        """测试按阶段查询"""
        assert CanonicalStage.FLOP in self.ledger
        assert CanonicalStage.RIVER not in self.ledger
        assert self.ledger.get_stage(CanonicalStage.RIVER) is None
        assert self.ledger.get_stage(CanonicalStage.TURN).starting_pot == 70

    def test_to_dict(self):
        """测试转换为字典"""
        data = self.ledger.to_dict()
        assert list(data) == ["INITIAL", "FLOP", "TURN"]
        assert data["FLOP"] == {'bets': {0: 30}, 'winnings': {}, 'starting_pot': 40, 'pot': 40, 'rake': 0}

    def test_requires_initial_stage(self):
        """测试账本必须包含INITIAL阶段"""
        with pytest.raises(ValueError, match="INITIAL"):
            StageLedger(stages={CanonicalStage.FLOP: StageState()})

    def test_requires_canonical_order(self):
        """测试账本阶段必须按规范顺序排列"""
        with pytest.raises(ValueError, match="规范顺序"):
            StageLedger(stages={
                CanonicalStage.FLOP: StageState(),
                CanonicalStage.INITIAL: StageState(),
            })

    def test_maps_are_read_only(self):
        """测试账本中的映射只读，构造时传入的字典被复制"""
        bets = {0: 20, 1: 20}
        state = StageState(bets=bets)
        bets[0] = 999

        assert state.bets == {0: 20, 1: 20}
        with pytest.raises(TypeError):
            state.bets[0] = 1
        with pytest.raises(TypeError):
            state.winnings[0] = 1
        with pytest.raises(TypeError):
            self.ledger.stages[CanonicalStage.RIVER] = StageState()

    def test_replace_keeps_maps_read_only(self):
        """测试replace派生的阶段账本仍然只读"""
        state = replace(self.ledger[CanonicalStage.FLOP], rake=0, pot=0)
        assert state.bets == {0: 30}
        with pytest.raises(TypeError):
            state.bets[0] = 1

    def test_negative_pot_rejected(self):
        """测试阶段底池不能为负数，抽水可以"""
        with pytest.raises(ValueError):
            StageState(pot=-1)
        assert StageState(rake=-5).rake == -5
