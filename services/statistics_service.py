# -*- coding: utf-8 -*-
"""services/statistics_service.py
--------------------------------------------------------------------
统计引擎：纯函数，输入一组批次用例（BatchCase 或普通 dict），输出聚合结果。

通过率 = passed / (total - locked) * 100，四舍五入取整。
锁定的用例表示被有意排除在通过率之外，不计入分子也不计入分母。
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from constants.batch import BatchProgress, RECENT_EXECUTION_LIMIT
from constants.test_case import TERMINAL_STATUSES, TestCaseStatus
from utils.datetime_helpers import parse_timestamp

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ExecutionStats:
    total: int = 0
    locked: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    pass_rate: int = 0

    def to_dict(self):
        data = asdict(self)
        data["passRate"] = data.pop("pass_rate")
        return data


def status_of(item: Any) -> Optional[str]:
    if isinstance(item, Mapping):
        return item.get("status")
    return getattr(item, "status", None)


def _field_of(item: Any, key: str, attr: str):
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, attr, None)


def round_half_up(value: float) -> int:
    # 与前端 Math.round 一致，0.5 向上取整而不是银行家舍入
    return int(math.floor(value + 0.5))


def compute_stats(cases: Iterable[Any]) -> ExecutionStats:
    total = locked = passed = failed = pending = 0
    for item in cases:
        total += 1
        status = status_of(item)
        if status == TestCaseStatus.LOCKED.value:
            locked += 1
        elif status == TestCaseStatus.PASSED.value:
            passed += 1
        elif status == TestCaseStatus.FAILED.value:
            failed += 1
        elif not status or status == TestCaseStatus.PENDING.value:
            pending += 1

    available_total = total - locked
    pass_rate = round_half_up(passed / available_total * 100) if available_total > 0 else 0
    return ExecutionStats(
        total=total,
        locked=locked,
        passed=passed,
        failed=failed,
        pending=pending,
        pass_rate=pass_rate,
    )


def classify_progress(cases: Sequence[Any]) -> BatchProgress:
    """
    NOT_STARTED：没有任何用例处于终态（passed / failed / locked）
    COMPLETED：全部用例都处于终态
    RUNNING：其余情况
    空批次没有已执行的用例，归为 NOT_STARTED。
    """
    marked = sum(1 for item in cases if status_of(item) in TERMINAL_STATUSES)
    if marked == 0:
        return BatchProgress.NOT_STARTED
    if marked == len(cases):
        return BatchProgress.COMPLETED
    return BatchProgress.RUNNING


def _execution_time(item: Any) -> datetime:
    for key, attr in (("executedAt", "executed_at"), ("updatedAt", "updated_at"), ("createdAt", "created_at")):
        value = _field_of(item, key, attr)
        if value:
            return parse_timestamp(value) or _EPOCH
    return _EPOCH


def recent_executions(cases: Iterable[Any], limit: int = RECENT_EXECUTION_LIMIT) -> List[Any]:
    """最近执行过的用例（排除待执行和锁定），按执行时间倒序取前 limit 条。"""
    executed = [
        item for item in cases
        if status_of(item) and status_of(item) not in (TestCaseStatus.PENDING.value, TestCaseStatus.LOCKED.value)
    ]
    executed.sort(key=_execution_time, reverse=True)
    return executed[:limit]
