"""
座位模块

提供座位状态和身份到座位索引的映射。
"""

from .seat_map import SeatStatusType, SeatStatus, SeatMap

__all__ = [
    'SeatStatusType',
    'SeatStatus',
    'SeatMap'
]
