# -*- coding: utf-8 -*-
"""集合仓储的公共读写逻辑：整体读出 -> 变换 -> 整体写回。"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from extensions.storage import KeyValueStore
from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionRepository(Generic[T]):
    key: str = ""
    record_cls: Type[T]

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load(self, strict: bool = False) -> List[T]:
        """
        读失败（数据损坏 / 后端异常）时：
          - 只读场景降级为空集合，保证界面可用
          - strict=True（写路径）抛出 PersistenceError，拒绝在空集合上写回覆盖已存数据
        """
        try:
            raw = self.store.read(self.key, default=[])
            if not isinstance(raw, list):
                raise PersistenceError(f"数据读取失败：{self.key} 不是数组", key=self.key)
            return [self.record_cls.from_dict(item) for item in raw]
        except (PersistenceError, TypeError, ValueError) as exc:
            if strict:
                logger.error(f"集合 {self.key} 数据损坏，拒绝写入: {exc}")
                if isinstance(exc, PersistenceError):
                    raise
                raise PersistenceError(f"数据读取失败：{self.key} 内容已损坏", key=self.key) from exc
            logger.warning(f"集合 {self.key} 读取失败，按空集合处理: {exc}")
            return []

    def _load_for_update(self) -> List[T]:
        return self._load(strict=True)

    def _save(self, records: List[T]) -> None:
        self.store.write(self.key, [r.to_dict() for r in records])

    def list(self, strict: bool = False) -> List[T]:
        return self._load(strict=strict)

    def get_by_id(self, record_id) -> Optional[T]:
        for record in self._load():
            if record.id == record_id:
                return record
        return None
