#!/usr/bin/env python3
"""
TableDisplayService - 牌桌展示数据服务

应用层入口，负责：
- 从行动日志构建阶段账本并执行账本不变量检查
- 把币值拆分为筹码面额并执行拆分不变量检查
- 按输入缓存计算结果
- 记录被暴露的数据一致性问题

核心算法都是纯函数，本服务只负责配置、日志、不变量执行和缓存。
"""

import logging
from collections import OrderedDict
from typing import Any, Hashable, Mapping, Optional, Sequence, Tuple, Union

from ..core.actions.types import ActionLogEntry
from ..core.chips.chip_planner import ChipDenominationPlanner, DecomposedStack
from ..core.chips.value_per_chip import CurrencyKind, chips_for_value, value_per_chip
from ..core.invariant.base_checker import BaseInvariantChecker
from ..core.invariant.decomposition_checker import ChipDecompositionChecker
from ..core.invariant.ledger_checker import LedgerInvariantChecker
from ..core.invariant.types import InvariantCheckResult, InvariantError
from ..core.ledger.ledger_builder import StageLedgerBuilder, has_ranked_winners, winners_from_ranked_groups
from ..core.ledger.types import StageLedger, Winner
from ..core.seats.seat_map import SeatMap, SeatStatus
from .config_service import ChipDisplayConfig, ConfigService, LedgerConfig, get_config_service
from .types import QueryResult

__all__ = ['ResultCache', 'TableDisplayService']


class ResultCache:
    """按输入缓存计算结果的LRU缓存"""

    def __init__(self, max_size: int):
        self._max_size = max_size
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        return None

    def put(self, key: Hashable, value: Any) -> None:
        if self._max_size == 0:
            return
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


class TableDisplayService:
    """牌桌展示数据服务"""

    def __init__(self, config_service: Optional[ConfigService] = None,
                 ledger_profile: str = "default", chip_profile: str = "default"):
        """
        初始化服务

        Args:
            config_service: 配置服务，None时使用全局单例
            ledger_profile: 账本构建配置文件名
            chip_profile: 筹码展示配置文件名
        """
        self.logger = logging.getLogger(__name__)
        self.config_service = config_service or get_config_service()
        self.ledger_config: LedgerConfig = self.config_service.get_ledger_config(ledger_profile).data
        self.chip_config: ChipDisplayConfig = self.config_service.get_chip_display_config(chip_profile).data

        self._planner = ChipDenominationPlanner(self.chip_config.ladder)
        self._ledger_checker = LedgerInvariantChecker()
        self._decomposition_checker = ChipDecompositionChecker()
        self._ledger_cache = ResultCache(self.ledger_config.cache_size)
        self._chip_cache = ResultCache(self.chip_config.cache_size)

    # ------------------------------------------------------------------
    # 阶段账本
    # ------------------------------------------------------------------

    def build_stage_ledger(self, action_log: Sequence[ActionLogEntry],
                           seat_map: Union[SeatMap, Mapping[str, int]],
                           small_blind: int = 0,
                           big_blind: int = 0,
                           pot: int = 0,
                           winners: Sequence[Winner] = (),
                           winners_known: Optional[bool] = None) -> QueryResult[StageLedger]:
        """
        构建阶段账本

        Args:
            action_log: 按顺序排列的行动日志
            seat_map: 座位映射
            small_blind: 小盲注金额
            big_blind: 大盲注金额
            pot: 牌桌报告的底池
            winners: 获胜者列表
            winners_known: 是否已有获胜者，None时由winners推断

        Returns:
            查询结果，包含阶段账本；存在CRITICAL违反时状态为BUSINESS_RULE_VIOLATION

        Raises:
            InvariantError: 配置要求严格模式且账本违反不变量
        """
        try:
            if not isinstance(seat_map, SeatMap):
                seat_map = SeatMap(seat_map)
            key = (
                tuple(action_log),
                seat_map.frozen_items(),
                small_blind,
                big_blind,
                pot,
                tuple(winners),
                winners_known,
            )
            ledger = self._ledger_cache.get(key)
            if ledger is None:
                ledger = StageLedgerBuilder.build(
                    action_log, seat_map, small_blind, big_blind, pot, winners, winners_known
                )
                self._ledger_cache.put(key, ledger)
                self.logger.debug(
                    f"阶段账本构建完成: 日志{len(key[0])}条, 阶段{[s.name for s in ledger.present_stages()]}"
                )
        except (TypeError, ValueError) as e:
            self.logger.warning(f"阶段账本输入无效: {e}")
            return QueryResult.validation_error(f"阶段账本输入无效: {e}", error_code="INVALID_LEDGER_INPUT")

        if not self.ledger_config.check_invariants:
            return QueryResult.success_result(ledger, "阶段账本构建成功")
        return self._checked_result(
            ledger, self._ledger_checker, self.ledger_config.raise_on_violation, "阶段账本"
        )

    def build_stage_ledger_for_table(self, action_log: Sequence[ActionLogEntry],
                                     seats: Sequence[SeatStatus],
                                     small_blind: int,
                                     big_blind: int,
                                     pot: int,
                                     ranked_winners: Sequence[Sequence[Winner]] = ()) -> QueryResult[StageLedger]:
        """
        从牌桌座位列表和按排名分组的获胜者构建阶段账本

        只有排名最高的一组获胜者计入奖金；任意一组存在奖金即视为已有获胜者。

        Args:
            action_log: 按顺序排列的行动日志
            seats: 按座位索引排列的座位状态
            small_blind: 小盲注金额
            big_blind: 大盲注金额
            pot: 牌桌报告的底池
            ranked_winners: 按排名分组的获胜者

        Returns:
            查询结果，包含阶段账本
        """
        try:
            seat_map = SeatMap.from_seats(seats)
        except ValueError as e:
            self.logger.warning(f"座位列表无效: {e}")
            return QueryResult.validation_error(f"座位列表无效: {e}", error_code="INVALID_SEATS")
        return self.build_stage_ledger(
            action_log,
            seat_map,
            small_blind,
            big_blind,
            pot,
            winners_from_ranked_groups(ranked_winners),
            has_ranked_winners(ranked_winners),
        )

    # ------------------------------------------------------------------
    # 筹码拆分
    # ------------------------------------------------------------------

    def plan_chip_stacks(self, value: int, per_chip: int = 1) -> QueryResult[DecomposedStack]:
        """
        把币值拆分为筹码面额

        Args:
            value: 币值（最小单位）
            per_chip: 每筹码币值，零头不参与拆分

        Returns:
            查询结果，包含拆分结果；存在CRITICAL违反时状态为BUSINESS_RULE_VIOLATION

        Raises:
            InvariantError: 配置要求严格模式且拆分违反不变量
        """
        try:
            chips, dust = chips_for_value(value, per_chip)
        except (TypeError, ValueError) as e:
            self.logger.warning(f"筹码拆分输入无效: {e}")
            return QueryResult.validation_error(f"筹码拆分输入无效: {e}", error_code="INVALID_CHIP_VALUE")
        if dust:
            self.logger.debug(f"币值{value}按每筹码{per_chip}换算后零头{dust}不以筹码展示")

        stack = self._chip_cache.get(chips)
        if stack is None:
            try:
                stack = self._planner.plan(chips)
            except InvariantError as e:
                self.logger.error(f"筹码拆分失败: {e}")
                if self.chip_config.raise_on_violation:
                    raise
                return QueryResult.business_rule_violation(
                    f"筹码拆分失败: {e}", violations=e.violations, error_code="CHIP_DECOMPOSITION_FAILED"
                )
            self._chip_cache.put(chips, stack)

        if not self.chip_config.check_invariants:
            return QueryResult.success_result(stack, "筹码拆分成功")
        return self._checked_result(
            stack, self._decomposition_checker, self.chip_config.raise_on_violation, "筹码拆分"
        )

    def plan_chip_stacks_for_currency(self, value: int, currency: CurrencyKind,
                                      decimals: Optional[int] = None) -> QueryResult[DecomposedStack]:
        """
        按币种换算后拆分筹码面额

        Args:
            value: 币值（最小单位）
            currency: 币种
            decimals: GENERIC_ICRC1代币的小数位数

        Returns:
            查询结果，包含拆分结果
        """
        try:
            per_chip = value_per_chip(currency, decimals)
        except ValueError as e:
            self.logger.warning(f"币种换算失败: {e}")
            return QueryResult.validation_error(f"币种换算失败: {e}", error_code="INVALID_CURRENCY")
        return self.plan_chip_stacks(value, per_chip)

    # ------------------------------------------------------------------
    # 缓存
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """清空所有缓存"""
        self._ledger_cache.clear()
        self._chip_cache.clear()

    def cache_info(self) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
        """((账本命中, 未命中, 条目数), (拆分命中, 未命中, 条目数))"""
        return (
            (self._ledger_cache.hits, self._ledger_cache.misses, len(self._ledger_cache)),
            (self._chip_cache.hits, self._chip_cache.misses, len(self._chip_cache)),
        )

    def _checked_result(self, data: Any, checker: BaseInvariantChecker,
                        raise_on_violation: bool, label: str) -> QueryResult:
        if raise_on_violation:
            result: InvariantCheckResult = checker.enforce(data)
        else:
            result = checker.check(data)

        for violation in result.get_warning_violations():
            self.logger.warning(f"{label}警告: {violation.description}")

        if not result.is_valid:
            for violation in result.get_critical_violations():
                self.logger.error(f"{label}数据不一致: {violation.description}")
            return QueryResult.business_rule_violation(
                f"{label}违反不变量",
                data=data,
                violations=result.violations,
                error_code="INVARIANT_VIOLATION"
            )
        return QueryResult.success_result(data, f"{label}成功", violations=result.violations)
