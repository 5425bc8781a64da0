# -*- coding: utf-8 -*-
"""extensions/storage.py
--------------------------------------------------------------------
持久化适配层：同步的键值存储，按命名集合整体读写。

- read(key, default)：返回最后一次写入的值；不存在时返回 default 的副本；
  数据损坏或后端不可用时抛出 PersistenceError，由仓储层决定是否降级。
- write(key, value)：单键原子写入；失败抛出 PersistenceError，已存数据不变。
- atomic()：把多次 write 合并为一个提交单元（SQL 事务 / redis MULTI），
  用于级联删除、用例数量同步这类跨集合操作。

后端：
- SqlKeyValueStore：Flask-SQLAlchemy 的 storage_entry 表（默认）
- RedisKeyValueStore：redis 字符串键，键名带 STORAGE_KEY_PREFIX 前缀
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import redis
from sqlalchemy.exc import SQLAlchemyError

from extensions.database import db
from extensions.redis_client import get_redis
from models.storage_entry import StorageEntry
from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_EXTENSION_KEY = "kv_store"


def _dumps(key: str, value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.error(f"序列化失败 key={key}: {exc}")
        raise PersistenceError(f"数据保存失败：{key} 无法序列化", key=key) from exc


def _loads(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"数据读取失败：{key} 内容已损坏", key=key) from exc


class KeyValueStore:
    """键值存储接口，具体后端见下方实现。"""

    backend = "abstract"

    def read(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def write(self, key: str, value: Any) -> None:
        raise NotImplementedError

    @contextmanager
    def atomic(self) -> Iterator["KeyValueStore"]:
        raise NotImplementedError
        yield self  # pragma: no cover


class SqlKeyValueStore(KeyValueStore):
    backend = "sql"

    def __init__(self):
        self._local = threading.local()

    @property
    def _depth(self) -> int:
        return getattr(self._local, "depth", 0)

    @_depth.setter
    def _depth(self, value: int):
        self._local.depth = value

    def read(self, key: str, default: Any = None) -> Any:
        try:
            entry = db.session.get(StorageEntry, key)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"数据读取失败：{key}", key=key) from exc
        if entry is None:
            return copy.deepcopy(default)
        return _loads(key, entry.value)

    def write(self, key: str, value: Any) -> None:
        payload = _dumps(key, value)
        try:
            entry = db.session.get(StorageEntry, key)
            if entry is None:
                db.session.add(StorageEntry(key=key, value=payload))
            else:
                entry.value = payload
            if self._depth:
                db.session.flush()
            else:
                db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception(f"写入失败 key={key}")
            raise PersistenceError(f"数据保存失败：{key}", key=key) from exc

    @contextmanager
    def atomic(self):
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if not self._depth:
                db.session.rollback()
            raise
        self._depth -= 1
        if self._depth:
            return
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("事务提交失败")
            raise PersistenceError("数据保存失败：事务提交失败") from exc


class RedisKeyValueStore(KeyValueStore):
    backend = "redis"

    def __init__(self, client, prefix: str = ""):
        self.client = client
        self.prefix = prefix
        self._local = threading.local()

    def _name(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def _pending(self) -> Optional[Dict[str, str]]:
        return getattr(self._local, "pending", None)

    def read(self, key: str, default: Any = None) -> Any:
        pending = self._pending
        if pending is not None and key in pending:
            return _loads(key, pending[key])
        try:
            raw = self.client.get(self._name(key))
        except redis.RedisError as exc:
            raise PersistenceError(f"数据读取失败：{key}", key=key) from exc
        if raw is None:
            return copy.deepcopy(default)
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return _loads(key, raw)

    def write(self, key: str, value: Any) -> None:
        payload = _dumps(key, value)
        pending = self._pending
        if pending is not None:
            pending[key] = payload
            return
        try:
            self.client.set(self._name(key), payload)
        except redis.RedisError as exc:
            logger.exception(f"写入失败 key={key}")
            raise PersistenceError(f"数据保存失败：{key}", key=key) from exc

    @contextmanager
    def atomic(self):
        if self._pending is not None:
            # 嵌套调用并入外层
            yield self
            return
        self._local.pending = {}
        try:
            yield self
            pending = self._local.pending
        finally:
            self._local.pending = None
        if not pending:
            return
        try:
            pipe = self.client.pipeline(transaction=True)
            for key, payload in pending.items():
                pipe.set(self._name(key), payload)
            pipe.execute()
        except redis.RedisError as exc:
            logger.exception(f"事务提交失败 keys={list(pending)}")
            raise PersistenceError("数据保存失败：事务提交失败") from exc


def build_store(cfg) -> KeyValueStore:
    backend = cfg.get("STORAGE_BACKEND", "sql")
    if backend == "sql":
        return SqlKeyValueStore()
    if backend == "redis":
        client = get_redis(cfg.get("REDIS_URL"))
        return RedisKeyValueStore(client, prefix=cfg.get("STORAGE_KEY_PREFIX", ""))
    raise ValueError(f"不支持的存储后端: {backend}")


def init_storage(app, store: Optional[KeyValueStore] = None) -> KeyValueStore:
    store = store or build_store(app.config)
    if store.backend == "sql":
        with app.app_context():
            # 只有一张键值表，直接建表即可
            StorageEntry.__table__.create(bind=db.engine, checkfirst=True)
    app.extensions[_EXTENSION_KEY] = store
    app.logger.info(f"Storage initialized backend={store.backend}")
    return store
