"""
不变量检查器基础类

定义不变量检查器的抽象基类和通用功能。
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, TypeVar
import time

from .types import InvariantType, InvariantViolation, InvariantCheckResult, InvariantError

__all__ = ['BaseInvariantChecker']

T = TypeVar('T')


class BaseInvariantChecker(ABC, Generic[T]):
    """不变量检查器基础抽象类"""

    def __init__(self):
        self._violations: List[InvariantViolation] = []

    @abstractmethod
    def _perform_check(self, target: T) -> None:
        """执行具体的不变量检查逻辑，发现问题时调用_create_violation

        Args:
            target: 被检查的对象
        """

    def check(self, target: T) -> InvariantCheckResult:
        """执行不变量检查

        Args:
            target: 被检查的对象

        Returns:
            InvariantCheckResult: 检查结果
        """
        start_time = time.perf_counter()
        self._violations = []
        self._perform_check(target)
        check_duration = time.perf_counter() - start_time
        return InvariantCheckResult.from_violations(
            checker_name=type(self).__name__,
            violations=self._violations,
            check_duration=check_duration
        )

    def enforce(self, target: T) -> InvariantCheckResult:
        """执行检查，存在CRITICAL违反时抛出InvariantError

        Raises:
            InvariantError: 检查失败
        """
        result = self.check(target)
        if not result.is_valid:
            descriptions = "; ".join(v.description for v in result.get_critical_violations())
            raise InvariantError(f"{result.checker_name}检查失败: {descriptions}", result.violations)
        return result

    def _create_violation(self, invariant_type: InvariantType, description: str,
                          severity: str = 'CRITICAL', context: Dict[str, Any] = None) -> InvariantViolation:
        """创建违反记录

        Args:
            invariant_type: 不变量类型
            description: 违反描述
            severity: 严重程度
            context: 上下文信息

        Returns:
            InvariantViolation: 违反记录
        """
        violation = InvariantViolation.create(invariant_type, description, severity, context)
        self._violations.append(violation)
        return violation
