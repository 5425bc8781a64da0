# -*- coding: utf-8 -*-
"""
case_group.py
--------------------------------------------------------------------
用例分组：
- 平铺结构，无父子层级
- case_count 为冗余计数，等于 groupId 指向本分组的用例数；
  只由服务层在同一次写入单元内维护，不允许调用方直接改
- 删除分组会级联删除组内用例
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .mixins import RecordMixin


@dataclass
class CaseGroup(RecordMixin):
    id: Optional[int] = None
    name: str = ""
    description: str = ""
    case_count: int = field(default=0, metadata={"key": "caseCount"})
    created_at: Optional[str] = field(default=None, metadata={"key": "createdAt"})
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.case_count = max(int(self.case_count or 0), 0)
        if self.description is None:
            self.description = ""
