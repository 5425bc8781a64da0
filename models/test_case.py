# -*- coding: utf-8 -*-
"""
test_case.py
--------------------------------------------------------------------
测试用例实体：
- 通过 group_id 关联到分组，group_name 为冗余展示字段（以 group_id 为准）
- precondition / steps / expected_result 为单个字符串，行之间用换行标记分隔
- status 是编写时的状态，与批次内的执行状态相互独立
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from constants.test_case import DEFAULT_PRIORITY, DEFAULT_STATUS
from .mixins import RecordMixin

# 编辑用例时允许整体替换的字段
EDITABLE_FIELDS = ("name", "description", "precondition", "steps", "expected_result", "priority", "status")


@dataclass
class TestCase(RecordMixin):
    __test__ = False  # 避免被 pytest 当作测试类收集

    id: Optional[int] = None
    name: str = ""
    description: str = ""
    precondition: str = ""
    steps: str = ""
    expected_result: str = field(default="", metadata={"key": "expectedResult"})
    priority: str = DEFAULT_PRIORITY
    status: str = DEFAULT_STATUS
    group_id: Optional[int] = field(default=None, metadata={"key": "groupId", "omit_none": True})
    group_name: Optional[str] = field(default=None, metadata={"key": "groupName", "omit_none": True})
    created_at: Optional[str] = field(default=None, metadata={"key": "createdAt"})
    updated_at: Optional[str] = field(default=None, metadata={"key": "updatedAt", "omit_none": True})
    extra: Dict[str, Any] = field(default_factory=dict)

    def searchable_texts(self):
        return (self.name, self.precondition, self.steps, self.expected_result)
