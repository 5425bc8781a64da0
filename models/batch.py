# -*- coding: utf-8 -*-
"""
batch.py
--------------------------------------------------------------------
执行批次与批次用例快照：
- BatchCase 是创建批次时对源用例的深拷贝，之后与用例库完全解耦：
  源用例被修改或删除都不影响已生成的快照
- 快照中只有 status / executed_at 可变，其余字段与成员关系不可变
- steps 在快照时由文本拆成有序的 [{action, description}]
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants.batch import DEFAULT_BATCH_STATUS
from constants.test_case import DEFAULT_PRIORITY, DEFAULT_STATUS
from utils.text_steps import normalize_steps
from .mixins import RecordMixin
from .test_case import TestCase


@dataclass
class BatchCase(RecordMixin):
    id: Optional[int] = None
    name: str = ""
    description: str = ""
    precondition: str = ""
    steps: List[Dict[str, str]] = field(default_factory=list)
    expected_result: str = field(default="", metadata={"key": "expectedResult"})
    priority: str = DEFAULT_PRIORITY
    status: str = DEFAULT_STATUS
    group_id: Optional[int] = field(default=None, metadata={"key": "groupId", "omit_none": True})
    group_name: Optional[str] = field(default=None, metadata={"key": "groupName", "omit_none": True})
    created_at: Optional[str] = field(default=None, metadata={"key": "createdAt"})
    updated_at: Optional[str] = field(default=None, metadata={"key": "updatedAt", "omit_none": True})
    executed_at: Optional[str] = field(default=None, metadata={"key": "executedAt", "omit_none": True})
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.steps = normalize_steps(self.steps)
        if not self.status:
            self.status = DEFAULT_STATUS

    @classmethod
    def snapshot_of(cls, case: TestCase) -> "BatchCase":
        data = copy.deepcopy(case.to_dict())
        data.pop("executedAt", None)
        data["status"] = DEFAULT_STATUS
        return cls.from_dict(data)


@dataclass
class ExecutionBatch(RecordMixin):
    id: Optional[int] = None
    name: str = ""
    group_id: Optional[int] = field(default=None, metadata={"key": "groupId"})
    cases: List[BatchCase] = field(default_factory=list)
    status: str = DEFAULT_BATCH_STATUS
    created_at: Optional[str] = field(default=None, metadata={"key": "createdAt"})
    updated_at: Optional[str] = field(default=None, metadata={"key": "updatedAt", "omit_none": True})
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.cases = [c if isinstance(c, BatchCase) else BatchCase.from_dict(c) for c in (self.cases or [])]

    def find_case(self, case_id) -> Optional[BatchCase]:
        for batch_case in self.cases:
            if batch_case.id == case_id:
                return batch_case
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["cases"] = [c.to_dict() for c in self.cases]
        return data
