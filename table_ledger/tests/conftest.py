"""
Test Configuration - pytest配置文件

提供测试共用的fixture：座位映射、示例行动日志、独立的配置服务。
"""

import pytest

from table_ledger.application.config_service import ConfigService
from table_ledger.core.actions.types import ActionLogEntry, ActionType
from table_ledger.core.seats.seat_map import SeatMap
from table_ledger.core.stages.types import DealStage


SMALL_BLIND = 10
BIG_BLIND = 20


@pytest.fixture
def seat_map():
    """两名玩家A、B分别坐在0号和1号座位"""
    return SeatMap({"A": 0, "B": 1})


@pytest.fixture
def blinds_log():
    """只有盲注的行动日志"""
    return [
        ActionLogEntry.small_blind("A"),
        ActionLogEntry.big_blind("B"),
    ]


@pytest.fixture
def flop_log(blinds_log):
    """盲注后进入翻牌圈，A加注到50，B跟注"""
    return blinds_log + [
        ActionLogEntry.stage_transition(DealStage.FLOP),
        ActionLogEntry.raise_to("A", 50),
        ActionLogEntry.call("B"),
    ]


@pytest.fixture
def showdown_log():
    """
    一局完整的牌：翻牌前各投入20，翻牌圈各投入30，直接摊牌

    摊牌阶段底池 = 40 + 60 = 100
    """
    return [
        ActionLogEntry.stage_transition(DealStage.FRESH),
        ActionLogEntry(ActionType.JOIN, actor="A"),
        ActionLogEntry.stage_transition(DealStage.BLINDS),
        ActionLogEntry.small_blind("A"),
        ActionLogEntry.big_blind("B"),
        ActionLogEntry.stage_transition(DealStage.OPENING),
        ActionLogEntry.call("A"),
        ActionLogEntry(ActionType.CHECK, actor="B"),
        ActionLogEntry.stage_transition(DealStage.FLOP),
        ActionLogEntry.raise_to("A", 30),
        ActionLogEntry.call("B"),
        ActionLogEntry.stage_transition(DealStage.SHOWDOWN),
        ActionLogEntry(ActionType.PLAYERS_HANDS_RANKED_MAIN_POT),
    ]


@pytest.fixture
def config_service():
    """每个测试独立的配置服务，避免修改全局单例"""
    return ConfigService()
