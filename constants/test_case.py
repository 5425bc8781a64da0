# constants/test_case.py
"""
测试用例相关的枚举与常量集合
统一管理：
  - 优先级 Priority: high / medium / low（界面展示为 P1 / P2 / P3）
  - 状态 Status: pending / passed / failed / locked
提供:
  - Enum 定义
  - values() 方法：返回所有 value 列表
  - 校验辅助函数（失败抛 ValidationError）
"""

from enum import Enum
from utils.exceptions import ValidationError


class TestCasePriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def values(cls):
        return [m.value for m in cls]

    @property
    def label(self):
        return {"high": "P1", "medium": "P2", "low": "P3"}[self.value]


class TestCaseStatus(Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    LOCKED = "locked"

    @classmethod
    def values(cls):
        return [m.value for m in cls]


DEFAULT_PRIORITY = TestCasePriority.MEDIUM.value
DEFAULT_STATUS = TestCaseStatus.PENDING.value

# 已执行（终态）的状态；pending 以外都算
TERMINAL_STATUSES = frozenset({
    TestCaseStatus.PASSED.value,
    TestCaseStatus.FAILED.value,
    TestCaseStatus.LOCKED.value,
})


# -------- 校验辅助函数 --------
def validate_priority(priority: str):
    if priority not in TestCasePriority.values():
        raise ValidationError(f"优先级必须是 {TestCasePriority.values()} 之一")


def validate_status(status: str):
    if status not in TestCaseStatus.values():
        raise ValidationError(f"状态必须是 {TestCaseStatus.values()} 之一")


def validate_test_case_fields(
        *,
        priority: str = None,
        status: str = None,
        skip_none: bool = True
):
    """
    统一校验多个字段
    :param skip_none: True 时 None 值跳过校验
    """
    if priority is not None or not skip_none:
        validate_priority(priority)
    if status is not None or not skip_none:
        validate_status(status)
