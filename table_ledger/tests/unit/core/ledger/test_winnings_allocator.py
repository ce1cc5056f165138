"""
奖金分配与抽水提取单元测试
"""

from table_ledger.core.ledger.types import StageBets, StageState, Winner
from table_ledger.core.ledger.winnings_allocator import WinningsAllocator, RakeExtractor
from table_ledger.core.seats.seat_map import SeatMap
from table_ledger.core.stages.types import CanonicalStage


class TestWinningsAllocator:
    """测试奖金分配"""

    def setup_method(self):
        """测试设置"""
        self.seat_map = SeatMap({"A": 0, "B": 1})
        self.stage_bets = {
            CanonicalStage.INITIAL: StageBets(bets={0: 20, 1: 20}),
            CanonicalStage.FLOP: StageBets(bets={0: 30, 1: 30}),
        }

    def test_has_winners(self):
        """测试只有赢得金额大于0才算存在获胜者"""
        assert WinningsAllocator.has_winners([Winner("A", 10)])
        assert not WinningsAllocator.has_winners([Winner("A", 0)])
        assert not WinningsAllocator.has_winners([])

    def test_allocates_to_last_stage(self):
        """测试奖金记到最后一个出现的阶段"""
        allocated = WinningsAllocator.allocate(
            self.stage_bets, [Winner("A", 80)], self.seat_map, winners_known=True
        )

        assert allocated[CanonicalStage.FLOP].winnings == {0: 80}
        assert allocated[CanonicalStage.FLOP].bets == {0: 30, 1: 30}
        assert allocated[CanonicalStage.INITIAL].winnings == {}
        # 输入不被修改
        assert self.stage_bets[CanonicalStage.FLOP].winnings == {}

    def test_repeated_winner_accumulates(self):
        """测试同一座位多次出现时奖金累加"""
        winners = [Winner("A", 40), Winner("B", 5), Winner("A", 40)]
        allocated = WinningsAllocator.allocate(self.stage_bets, winners, self.seat_map, True)
        assert allocated[CanonicalStage.FLOP].winnings == {0: 80, 1: 5}

    def test_unresolved_winner_dropped(self):
        """测试无法解析的获胜者被丢弃"""
        winners = [Winner("Z", 100), Winner("B", 60)]
        allocated = WinningsAllocator.allocate(self.stage_bets, winners, self.seat_map, True)
        assert allocated[CanonicalStage.FLOP].winnings == {1: 60}

    def test_winners_unknown_skips_allocation(self):
        """测试本局没有获胜者时不分配奖金"""
        allocated = WinningsAllocator.allocate(self.stage_bets, [Winner("A", 80)], self.seat_map, False)
        assert allocated[CanonicalStage.FLOP].winnings == {}


class TestRakeExtractor:
    """测试抽水提取"""

    def test_rake_is_pot_minus_winnings(self):
        """测试有奖金的阶段抽水为底池减去奖金，底池清零"""
        states = {CanonicalStage.SHOWDOWN: StageState(winnings={0: 80}, starting_pot=100, pot=100)}
        state = RakeExtractor.extract(states)[CanonicalStage.SHOWDOWN]

        assert state.rake == 20
        assert state.pot == 0
        assert state.starting_pot == 100
        assert state.pot_before_payout == 100

    def test_no_winnings_means_no_rake(self):
        """测试没有奖金的阶段抽水为0，底池不变"""
        states = {CanonicalStage.FLOP: StageState(bets={0: 30}, starting_pot=40, pot=40)}
        state = RakeExtractor.extract(states)[CanonicalStage.FLOP]
        assert state.rake == 0
        assert state.pot == 40

    def test_negative_rake_is_preserved(self):
        """测试奖金超过底池时负数抽水原样保留"""
        states = {CanonicalStage.INITIAL: StageState(winnings={1: 30}, pot=0)}
        state = RakeExtractor.extract(states)[CanonicalStage.INITIAL]
        assert state.rake == -30
        assert state.pot == 0
