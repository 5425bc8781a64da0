# -*- coding: utf-8 -*-
"""Datetime helpers.

存储中的时间统一为 UTC 的 ISO 8601 字符串（带 ``+00:00``）。
旧数据里可能混有 ``toLocaleString`` 产生的本地时间文本，解析失败时返回 ``None``，
由调用方决定如何排序/展示。
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

BEIJING_TZ = timezone(timedelta(hours=8))

_LEGACY_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def _ensure_utc(dt: datetime) -> datetime:
    """将给定 ``datetime`` 统一转换为带 UTC 时区的对象。"""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """解析存储中的时间文本，返回 UTC ``datetime``。

    - ISO 8601（含 ``Z`` 后缀）按其自带时区处理，无时区视为 UTC
    - 旧版本地时间格式按北京时间解释
    """

    if not value:
        return None
    text = str(value).strip()
    # 旧格式要先于 fromisoformat 匹配（后者也接受空格分隔）
    for fmt in _LEGACY_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=BEIJING_TZ).astimezone(timezone.utc)
        except ValueError:
            continue
    try:
        return _ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def to_beijing_time(dt: datetime) -> datetime:
    """将 ``datetime`` 转换为北京时间(东八区)。"""

    return _ensure_utc(dt).astimezone(BEIJING_TZ)


def datetime_to_beijing_iso(dt: Optional[datetime]) -> Optional[str]:
    """将 ``datetime`` 格式化为北京时间 ISO 字符串。

    :param dt: 需要转换的时间; ``None`` 时直接返回 ``None``。
    :return: 带 ``+08:00`` 时区偏移的 ISO 8601 格式字符串。
    """

    if dt is None:
        return None
    return to_beijing_time(dt).isoformat()
