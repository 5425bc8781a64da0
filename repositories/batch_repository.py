from typing import List, Optional
import logging

from constants.storage_keys import BATCH_ID_MARK_KEY, BATCHES_KEY
from models.batch import ExecutionBatch
from repositories.base_repository import CollectionRepository
from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class BatchRepository(CollectionRepository[ExecutionBatch]):
    key = BATCHES_KEY
    record_cls = ExecutionBatch

    def _issued_mark(self) -> int:
        """已分配过的最大批次 id（删除批次后仍保留），旧数据没有该键时为 0。"""
        try:
            value = self.store.read(BATCH_ID_MARK_KEY, default=0)
        except PersistenceError as exc:
            logger.warning(f"批次 id 水位读取失败，按 0 处理: {exc}")
            return 0
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    def next_id(self, batches: Optional[List[ExecutionBatch]] = None) -> int:
        """
        max(已持久化批次 id, 已分配水位) + 1；都没有时为 1。
        每次都从存储现读，不缓存计数器；删除最大 id 的批次后也不会复用该 id。
        """
        if batches is None:
            batches = self._load()
        ids = [int(b.id) for b in batches if isinstance(b.id, (int, float)) and not isinstance(b.id, bool)]
        return max(ids + [self._issued_mark()]) + 1

    def append(self, batch: ExecutionBatch) -> ExecutionBatch:
        batches = self._load_for_update()
        batch.id = self.next_id(batches)
        batches.append(batch)
        with self.store.atomic():
            self._save(batches)
            self.store.write(BATCH_ID_MARK_KEY, batch.id)
        return batch

    def replace(self, batch: ExecutionBatch) -> bool:
        batches = self._load_for_update()
        for index, existing in enumerate(batches):
            if existing.id == batch.id:
                batches[index] = batch
                self._save(batches)
                return True
        return False

    def delete(self, batch_id) -> bool:
        batches = self._load_for_update()
        remaining = [b for b in batches if b.id != batch_id]
        if len(remaining) == len(batches):
            return False
        self._save(remaining)
        return True
