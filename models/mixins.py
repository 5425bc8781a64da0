# models/mixins.py
from dataclasses import fields
from typing import Any, Dict

from sqlalchemy import func, DateTime
from extensions.database import db

COMMON_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


class TimestampMixin:
    created_at = db.Column(DateTime, nullable=False, server_default=func.now(), index=True)
    updated_at = db.Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now(), index=True)


class RecordMixin:
    """
    集合内记录（dataclass）与存储字典之间的转换。
    - 字段的存储键名写在 field metadata 的 "key" 里（camelCase，兼容旧数据）
    - metadata 带 "omit_none" 的字段为 None 时不写出
    - 不认识的键原样保存在 extra 中，写回时不丢失
    """

    extra: Dict[str, Any]

    @classmethod
    def _field_by_key(cls):
        return {f.metadata.get("key", f.name): f for f in fields(cls) if f.name != "extra"}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} 记录必须是对象，实际为 {type(data).__name__}")
        by_key = cls._field_by_key()
        known, extra = {}, {}
        for key, value in data.items():
            f = by_key.get(key)
            if f is None:
                extra[key] = value
            else:
                known[f.name] = value
        return cls(**known, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is None and f.metadata.get("omit_none"):
                continue
            data[f.metadata.get("key", f.name)] = value
        return data

    @classmethod
    def fields_from_payload(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """接口 / 导入数据 -> 属性名字典，camelCase 存储键与 snake_case 属性名都接受。"""
        by_key = cls._field_by_key()
        names = {f.name for f in by_key.values()}
        result = {}
        for key, value in data.items():
            if key in by_key:
                result[by_key[key].name] = value
            elif key in names:
                result[key] = value
        return result
