"""
不变量检查器类型定义

定义数学不变量检查相关的基础类型和枚举。
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import List, Dict, Any
import time
import uuid

__all__ = [
    'InvariantType',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError'
]

_SEVERITIES = ('CRITICAL', 'WARNING', 'INFO')


class InvariantType(Enum):
    """不变量类型枚举"""
    POT_CONSERVATION = auto()      # 底池结转守恒
    RAKE_CONSISTENCY = auto()      # 抽水一致性
    POT_INTEGRITY = auto()         # 与牌桌报告底池一致
    PHASE_CONSISTENCY = auto()     # 阶段顺序一致性
    CHIP_DECOMPOSITION = auto()    # 筹码拆分守恒
    CHIP_ORDERING = auto()         # 筹码拆分顺序


@dataclass(frozen=True)
class InvariantViolation:
    """不变量违反记录"""
    invariant_type: InvariantType
    violation_id: str
    description: str
    severity: str  # 'CRITICAL', 'WARNING', 'INFO'
    timestamp: float
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """验证违反记录的有效性"""
        if not self.violation_id:
            raise ValueError("violation_id不能为空")
        if not self.description:
            raise ValueError("description不能为空")
        if self.severity not in _SEVERITIES:
            raise ValueError("severity必须是CRITICAL、WARNING或INFO之一")
        if self.timestamp <= 0:
            raise ValueError("timestamp必须为正数")

    @classmethod
    def create(cls, invariant_type: InvariantType, description: str, severity: str = 'CRITICAL',
               context: Dict[str, Any] = None) -> 'InvariantViolation':
        """创建违反记录"""
        return cls(
            invariant_type=invariant_type,
            violation_id=f"{invariant_type.name.lower()}_{uuid.uuid4().hex[:8]}",
            description=description,
            severity=severity,
            timestamp=time.time(),
            context=context or {}
        )

    @property
    def is_critical(self) -> bool:
        return self.severity == 'CRITICAL'


@dataclass(frozen=True)
class InvariantCheckResult:
    """
    不变量检查结果

    只有CRITICAL违反会使检查失败，WARNING和INFO随成功结果一起返回。
    """
    checker_name: str
    is_valid: bool
    violations: List[InvariantViolation]
    check_duration: float  # 检查耗时（秒）
    timestamp: float

    def __post_init__(self):
        """验证检查结果的有效性"""
        if self.check_duration < 0:
            raise ValueError("check_duration不能为负数")
        if self.timestamp <= 0:
            raise ValueError("timestamp必须为正数")
        has_critical = any(v.is_critical for v in self.violations)
        if self.is_valid == has_critical:
            raise ValueError("is_valid必须与是否存在CRITICAL违反一致")

    @classmethod
    def from_violations(cls, checker_name: str, violations: List[InvariantViolation],
                        check_duration: float) -> 'InvariantCheckResult':
        """根据违反记录创建检查结果"""
        return cls(
            checker_name=checker_name,
            is_valid=not any(v.is_critical for v in violations),
            violations=list(violations),
            check_duration=check_duration,
            timestamp=time.time()
        )

    def get_critical_violations(self) -> List[InvariantViolation]:
        """获取严重违反记录"""
        return [v for v in self.violations if v.severity == 'CRITICAL']

    def get_warning_violations(self) -> List[InvariantViolation]:
        """获取警告违反记录"""
        return [v for v in self.violations if v.severity == 'WARNING']

    def of_type(self, invariant_type: InvariantType) -> List[InvariantViolation]:
        """按不变量类型筛选违反记录"""
        return [v for v in self.violations if v.invariant_type is invariant_type]


class InvariantError(Exception):
    """不变量错误异常"""

    def __init__(self, message: str, violations: List[InvariantViolation]):
        super().__init__(message)
        self.violations = violations

    def get_critical_violations(self) -> List[InvariantViolation]:
        """获取严重违反记录"""
        return [v for v in self.violations if v.severity == 'CRITICAL']

    def get_warning_violations(self) -> List[InvariantViolation]:
        """获取警告违反记录"""
        return [v for v in self.violations if v.severity == 'WARNING']
