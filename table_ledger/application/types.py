"""
Application Layer Types - 应用层类型定义

定义应用服务层使用的基础类型，包括查询结果和应用层异常。
"""

from dataclasses import dataclass, field
from typing import List, Optional, Generic, TypeVar
from enum import Enum, auto

from ..core.invariant.types import InvariantViolation

T = TypeVar('T')


class ResultStatus(Enum):
    """操作结果状态"""
    SUCCESS = auto()
    FAILURE = auto()
    VALIDATION_ERROR = auto()
    BUSINESS_RULE_VIOLATION = auto()


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """查询结果"""
    success: bool
    status: ResultStatus
    data: Optional[T] = None
    message: str = ""
    error_code: Optional[str] = None
    violations: List[InvariantViolation] = field(default_factory=list)

    @classmethod
    def success_result(cls, data: T, message: str = "查询成功",
                       violations: Optional[List[InvariantViolation]] = None) -> 'QueryResult[T]':
        """创建成功结果"""
        return cls(
            success=True,
            status=ResultStatus.SUCCESS,
            data=data,
            message=message,
            violations=list(violations or [])
        )

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None,
                       status: ResultStatus = ResultStatus.FAILURE) -> 'QueryResult[T]':
        """创建失败结果"""
        return cls(
            success=False,
            status=status,
            message=message,
            error_code=error_code
        )

    @classmethod
    def validation_error(cls, message: str, error_code: Optional[str] = None) -> 'QueryResult[T]':
        """创建验证错误结果"""
        return cls.failure_result(message, error_code, ResultStatus.VALIDATION_ERROR)

    @classmethod
    def business_rule_violation(cls, message: str, data: Optional[T] = None,
                                violations: Optional[List[InvariantViolation]] = None,
                                error_code: Optional[str] = None) -> 'QueryResult[T]':
        """创建业务规则违反结果，携带计算出的数据以便展示层自行处理"""
        return cls(
            success=False,
            status=ResultStatus.BUSINESS_RULE_VIOLATION,
            data=data,
            message=message,
            error_code=error_code,
            violations=list(violations or [])
        )


class ApplicationError(Exception):
    """应用层异常基类"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(ApplicationError):
    """配置错误"""
    pass
