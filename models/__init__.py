# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，外部模块可简化引用：from models import TestCase, ExecutionBatch
- StorageEntry 是唯一的数据库表（键值存储）
- 其余均为集合内记录（dataclass），通过 to_dict / from_dict 与存储互转
"""

from .mixins import TimestampMixin, RecordMixin
from .storage_entry import StorageEntry
from .case_group import CaseGroup
from .test_case import TestCase, EDITABLE_FIELDS
from .batch import BatchCase, ExecutionBatch
from .app_settings import AppSettings

__all__ = [
    "TimestampMixin", "RecordMixin", "StorageEntry",
    "CaseGroup", "TestCase", "EDITABLE_FIELDS",
    "BatchCase", "ExecutionBatch", "AppSettings",
]
