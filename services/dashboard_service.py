# -*- coding: utf-8 -*-
"""仪表盘：全部批次或单个批次的执行统计与最近执行记录。"""

from typing import Any, Dict, List
import logging

from constants.batch import RECENT_EXECUTION_LIMIT
from repositories.batch_repository import BatchRepository
from services.batch_service import BatchService
from services.statistics_service import compute_stats, recent_executions
from utils.datetime_helpers import datetime_to_beijing_iso, parse_timestamp
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class DashboardService:

    def __init__(self, batches: BatchRepository):
        self.batches = batches

    def overview(self, batch_id=None, recent_limit: int = RECENT_EXECUTION_LIMIT) -> Dict[str, Any]:
        """
        batch_id 为空时汇总所有批次，否则只统计指定批次。
        recent 中附带 batchId / batchName，便于跳转到批次详情。
        """
        all_batches = self.batches.list()
        if batch_id is None:
            targets = all_batches
        else:
            targets = [b for b in all_batches if b.id == batch_id]
            if not targets:
                raise NotFoundError("未找到该批次数据")

        case_rows: List[Dict[str, Any]] = []
        for batch in targets:
            for batch_case in batch.cases:
                row = batch_case.to_dict()
                row["batchId"] = batch.id
                row["batchName"] = batch.name
                case_rows.append(row)

        recent = []
        for row in recent_executions(case_rows, limit=recent_limit):
            executed = parse_timestamp(row.get("executedAt") or row.get("updatedAt") or row.get("createdAt"))
            recent.append({
                "id": row.get("id"),
                "name": row.get("name"),
                "status": row.get("status"),
                "batchId": row["batchId"],
                "batchName": row["batchName"],
                "executedAt": row.get("executedAt"),
                "executedAtLocal": datetime_to_beijing_iso(executed),
            })

        return {
            "selectedBatchId": batch_id,
            "batches": [BatchService.describe(b, include_cases=False) for b in all_batches],
            "stats": compute_stats(case_rows).to_dict(),
            "recent": recent,
        }
