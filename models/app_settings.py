# -*- coding: utf-8 -*-
"""系统设置（单条记录，存于 appSettings）。"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .mixins import RecordMixin

DEFAULT_GROUP_NAME = "默认分组"
DEFAULT_PAGE_SIZE = 20
PAGE_SIZE_MIN = 1
PAGE_SIZE_MAX = 100


@dataclass
class AppSettings(RecordMixin):
    default_group: str = field(default=DEFAULT_GROUP_NAME, metadata={"key": "defaultGroup"})
    batch_size: int = field(default=DEFAULT_PAGE_SIZE, metadata={"key": "batchSize"})
    auto_save: bool = field(default=True, metadata={"key": "autoSave"})
    extra: Dict[str, Any] = field(default_factory=dict)
