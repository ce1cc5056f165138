"""
Core Usage Checker - 核心模块使用检查器

确保测试真正使用核心模块而非mock数据。

Classes:
    CoreUsageChecker: 核心使用检查器
"""

from typing import Any
from unittest import mock


class CoreUsageChecker:
    """核心模块使用检查器"""

    @staticmethod
    def verify_real_objects(obj: Any, expected_type_name: str) -> None:
        """验证对象是真实的核心对象

        Args:
            obj: 要检查的对象
            expected_type_name: 期望的类型名称

        Raises:
            AssertionError: 如果对象不是期望的真实类型
        """
        actual_type_name = type(obj).__name__
        assert actual_type_name == expected_type_name, \
            f"必须使用真实的{expected_type_name}，当前类型: {actual_type_name}"

        assert not isinstance(obj, (mock.Mock, mock.MagicMock, mock.NonCallableMock)), \
            f"禁止使用mock对象，必须使用真实的{expected_type_name}"

        module_name = obj.__class__.__module__
        assert module_name.startswith('table_ledger.'), \
            f"对象必须来自table_ledger模块，当前模块: {module_name}"

    @staticmethod
    def verify_value_conservation(expected_total: int, actual_total: int) -> None:
        """验证总值守恒

        Args:
            expected_total: 期望总值
            actual_total: 实际总值

        Raises:
            AssertionError: 如果总值不守恒
        """
        assert isinstance(expected_total, int) and expected_total >= 0, \
            f"期望总值必须是非负整数: {expected_total}"
        assert isinstance(actual_total, int) and actual_total >= 0, \
            f"实际总值必须是非负整数: {actual_total}"
        assert expected_total == actual_total, \
            f"总值必须守恒: 期望{expected_total}, 实际{actual_total}, 差异{actual_total - expected_total}"
