"""
座位映射

把玩家身份解析为座位索引。未入座的身份解析为None，由调用方丢弃。
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

__all__ = ['SeatStatusType', 'SeatStatus', 'SeatMap']


class SeatStatusType(Enum):
    """座位状态类型"""
    EMPTY = auto()                   # 空座
    RESERVED = auto()                # 已预留
    OCCUPIED = auto()                # 已入座
    QUEUED_FOR_NEXT_ROUND = auto()   # 等待下一局入座


@dataclass(frozen=True)
class SeatStatus:
    """座位状态"""
    status: SeatStatusType
    identity: Optional[str] = None

    def __post_init__(self):
        """验证座位状态的有效性"""
        if self.status is SeatStatusType.EMPTY:
            if self.identity is not None:
                raise ValueError("空座不能携带玩家身份")
        elif not self.identity:
            raise ValueError(f"{self.status.name}座位必须携带玩家身份")

    @classmethod
    def empty(cls) -> 'SeatStatus':
        """创建空座"""
        return cls(SeatStatusType.EMPTY)

    @classmethod
    def occupied(cls, identity: str) -> 'SeatStatus':
        """创建已入座座位"""
        return cls(SeatStatusType.OCCUPIED, identity)


class SeatMap(Mapping[str, int]):
    """
    座位映射表

    身份到座位索引的只读映射，每次计算构建一次。
    """

    def __init__(self, seats: Optional[Mapping[str, int]] = None):
        """
        初始化座位映射

        Args:
            seats: 身份到座位索引的映射
        """
        self._seats: Dict[str, int] = dict(seats) if seats else {}
        for identity, index in self._seats.items():
            if not isinstance(index, int) or index < 0:
                raise ValueError(f"玩家{identity}的座位索引必须是非负整数: {index!r}")

    @classmethod
    def from_seats(cls, seats: Sequence[SeatStatus]) -> 'SeatMap':
        """
        从座位列表构建映射，只有已入座的座位参与映射

        Args:
            seats: 按座位索引排列的座位状态列表

        Returns:
            座位映射
        """
        return cls({
            seat.identity: index
            for index, seat in enumerate(seats)
            if seat.status is SeatStatusType.OCCUPIED
        })

    def resolve(self, identity: Optional[str]) -> Optional[int]:
        """解析身份对应的座位索引，无法解析时返回None"""
        if identity is None:
            return None
        return self._seats.get(identity)

    def frozen_items(self) -> Tuple[Tuple[str, int], ...]:
        """可哈希的映射内容，用于缓存键"""
        return tuple(sorted(self._seats.items()))

    def __getitem__(self, identity: str) -> int:
        return self._seats[identity]

    def __iter__(self) -> Iterator[str]:
        return iter(self._seats)

    def __len__(self) -> int:
        return len(self._seats)

    def __repr__(self) -> str:
        return f"SeatMap({self._seats!r})"
