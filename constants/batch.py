# -*- coding: utf-8 -*-
"""constants/batch.py
--------------------------------------------------------------------
执行批次相关的枚举常量。

- 批次状态 BatchStatus 不单独维护：每次用例状态变化后，由批次内用例的
  状态重新推导并随同一次写入落盘，保证只有一个数据来源。
- BatchProgress 是界面展示用的进度分类，与 BatchStatus 一一对应。
"""

from enum import Enum


class BatchStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


class BatchProgress(Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"

    @property
    def batch_status(self) -> BatchStatus:
        return _PROGRESS_TO_STATUS[self]


_PROGRESS_TO_STATUS = {
    BatchProgress.NOT_STARTED: BatchStatus.PENDING,
    BatchProgress.RUNNING: BatchStatus.RUNNING,
    BatchProgress.COMPLETED: BatchStatus.COMPLETED,
}

DEFAULT_BATCH_STATUS = BatchStatus.PENDING.value

# 多选创建批次时批次名称长度上限（可被 BATCH_NAME_MAX_LENGTH 配置覆盖）
BATCH_NAME_MAX_LENGTH = 50

# 仪表盘“最近执行”列表条数
RECENT_EXECUTION_LIMIT = 5
