# -*- coding: utf-8 -*-
"""services/batch_service.py
--------------------------------------------------------------------
执行批次业务逻辑：
- 创建批次时对选中的用例做深拷贝快照，之后与用例库完全解耦
- 更新批次内用例的执行状态只写 testBatches，不会改动用例库
- 批次 status 由用例状态推导，在同一次写入里刷新
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from constants.batch import BATCH_NAME_MAX_LENGTH, DEFAULT_BATCH_STATUS
from constants.test_case import validate_status
from models.batch import BatchCase, ExecutionBatch
from models.test_case import TestCase
from repositories.batch_repository import BatchRepository
from repositories.case_group_repository import CaseGroupRepository
from repositories.test_case_repository import TestCaseRepository
from services.statistics_service import classify_progress, compute_stats
from utils.datetime_helpers import utc_now_iso
from utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class BatchService:
    """执行批次相关业务逻辑。"""

    def __init__(
        self,
        batches: BatchRepository,
        cases: TestCaseRepository,
        groups: CaseGroupRepository,
        name_max_length: int = BATCH_NAME_MAX_LENGTH,
    ):
        self.batches = batches
        self.cases = cases
        self.groups = groups
        self.name_max_length = name_max_length

    def next_batch_id(self) -> int:
        return self.batches.next_id()

    def list_batches(self) -> List[ExecutionBatch]:
        return self.batches.list()

    def get(self, batch_id) -> ExecutionBatch:
        batch = self.batches.get_by_id(batch_id)
        if not batch:
            raise NotFoundError("未找到该批次数据")
        return batch

    def create_batch(
        self,
        name: Optional[str],
        source_cases: Sequence[TestCase | Mapping[str, Any]],
        group_id=None,
    ) -> ExecutionBatch:
        name = (name or "").strip()
        if not name:
            raise ValidationError("批次名称不能为空")
        if not source_cases:
            raise ValidationError("请选择要执行的测试用例")

        snapshots = []
        for source in source_cases:
            if not isinstance(source, TestCase):
                source = TestCase.from_dict(dict(source))
            snapshots.append(BatchCase.snapshot_of(source))

        batch = ExecutionBatch(
            name=name,
            group_id=group_id,
            cases=snapshots,
            status=DEFAULT_BATCH_STATUS,
            created_at=utc_now_iso(),
        )
        batch = self.batches.append(batch)
        logger.info(f"创建批次 id={batch.id} name={batch.name} cases={len(batch.cases)}")
        return batch

    def create_batch_from_group(self, name: Optional[str], group_id) -> ExecutionBatch:
        """按分组创建：取该分组当前的全部用例。"""
        if not self.groups.get_by_id(group_id):
            raise NotFoundError("分组不存在")
        source_cases = list(self.cases.filter(group_id=group_id))
        return self.create_batch(name, source_cases, group_id=group_id)

    def create_batch_from_selection(self, name: Optional[str], case_ids: Iterable) -> ExecutionBatch:
        """用例列表多选创建：批次名称有长度上限，已被删除的用例 id 忽略。"""
        case_ids = list(case_ids or [])
        if not case_ids:
            raise ValidationError("请选择至少一条用例")
        if name and len(name.strip()) > self.name_max_length:
            raise ValidationError(f"批次名称不能超过{self.name_max_length}个字符")
        source_cases = self.cases.list_by_ids(case_ids)
        return self.create_batch(name, source_cases)

    def update_case_status(self, batch_id, case_id, new_status: str) -> ExecutionBatch:
        validate_status(new_status)
        batch = self.get(batch_id)
        batch_case = batch.find_case(case_id)
        if batch_case is None:
            raise NotFoundError("批次中不存在该用例")

        now = utc_now_iso()
        batch_case.status = new_status
        batch_case.executed_at = now
        batch.updated_at = now
        batch.status = classify_progress(batch.cases).batch_status.value

        if not self.batches.replace(batch):
            # 读取与写回之间批次被删除
            raise NotFoundError("未找到该批次数据")
        logger.info(f"批次 {batch_id} 用例 {case_id} 状态 -> {new_status}")
        return batch

    def delete_batch(self, batch_id) -> bool:
        deleted = self.batches.delete(batch_id)
        if deleted:
            logger.info(f"删除批次 id={batch_id}")
        return deleted

    @staticmethod
    def describe(batch: ExecutionBatch, include_cases: bool = True) -> Dict[str, Any]:
        """批次 + 进度 + 统计，供列表 / 详情接口使用。"""
        data = batch.to_dict()
        if not include_cases:
            data.pop("cases", None)
        data["caseCount"] = len(batch.cases)
        data["progress"] = classify_progress(batch.cases).value
        data["stats"] = compute_stats(batch.cases).to_dict()
        return data
