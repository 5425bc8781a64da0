# -*- coding: utf-8 -*-
"""
storage_entry.py
--------------------------------------------------------------------
键值存储表：
- 每个命名集合（testCaseGroups / testCases / testBatches / appSettings）占一行，
  另有 testBatchesLastId 记录已分配的最大批次 id
- value 保存整个集合的 JSON 文本，整体读、整体写
- 单行写入即原子操作；跨集合的一致性由 KeyValueStore.atomic() 包在同一事务里
"""

from sqlalchemy.dialects.mysql import LONGTEXT

from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS


class StorageEntry(TimestampMixin, db.Model):
    __tablename__ = "storage_entry"
    __table_args__ = (COMMON_TABLE_ARGS,)

    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text().with_variant(LONGTEXT(), "mysql"), nullable=False)
