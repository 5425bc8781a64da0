# -*- coding: utf-8 -*-
"""分组 / 用例 id 生成器。

旧数据里的 id 是毫秒时间戳，连续快速创建时会撞号。这里保留"时间戳"
的取值形态（便于与历史数据共存），但保证同一进程内严格递增。
仓储通过构造参数注入生成器，测试里换成 SequenceIdGenerator 即可得到确定的 id。
"""

import threading
import time
from typing import Callable, Optional


class IdGenerator:
    def next_id(self) -> int:
        raise NotImplementedError

    def __call__(self) -> int:
        return self.next_id()


class MonotonicIdGenerator(IdGenerator):
    """毫秒时间戳，若与上一次相同或回拨则取 last + 1。"""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate


class SequenceIdGenerator(IdGenerator):
    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value
