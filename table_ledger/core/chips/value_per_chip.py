"""
每枚筹码对应的币值

不同币种的最小单位不同，先按币种换算成筹码单位再做面额拆分。
"""

from enum import Enum, auto
from typing import Optional, Tuple

__all__ = ['CurrencyKind', 'value_per_chip', 'chips_for_value']


class CurrencyKind(Enum):
    """币种"""
    FAKE = auto()
    ICP = auto()
    GENERIC_ICRC1 = auto()
    CKETH_ETH = auto()
    CKETH_USDC = auto()
    CKETH_USDT = auto()
    BTC = auto()


_FIXED_VALUE_PER_CHIP = {
    CurrencyKind.FAKE: 10_000,
    CurrencyKind.ICP: 10_000,
    CurrencyKind.CKETH_ETH: 10 ** 9,
    CurrencyKind.CKETH_USDC: 10 ** 3,
    CurrencyKind.CKETH_USDT: 10 ** 3,
    CurrencyKind.BTC: 10 ** 2,
}


def value_per_chip(currency: CurrencyKind, decimals: Optional[int] = None) -> int:
    """
    获取币种的每筹码币值

    Args:
        currency: 币种
        decimals: GENERIC_ICRC1代币的小数位数

    Returns:
        每枚面额为1的筹码对应的最小币值单位数
    """
    if currency is CurrencyKind.GENERIC_ICRC1:
        if decimals is None or decimals < 0:
            raise ValueError(f"GENERIC_ICRC1必须提供非负的decimals: {decimals!r}")
        return 10 ** decimals
    if currency not in _FIXED_VALUE_PER_CHIP:
        raise ValueError(f"未知币种: {currency!r}")
    return _FIXED_VALUE_PER_CHIP[currency]


def chips_for_value(value: int, per_chip: int) -> Tuple[int, int]:
    """
    把币值换算为筹码单位

    Args:
        value: 币值（最小单位）
        per_chip: 每筹码币值

    Returns:
        (筹码数, 无法用筹码表示的零头)
    """
    if value < 0:
        raise ValueError(f"value不能为负数: {value}")
    if per_chip <= 0:
        raise ValueError(f"per_chip必须为正数: {per_chip}")
    return divmod(value, per_chip)
