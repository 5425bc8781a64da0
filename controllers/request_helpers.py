from typing import Any, Dict

from flask import request

from utils.exceptions import NotFoundError, ValidationError
from utils.validators import parse_record_id


def require_record_id(raw, message: str = "记录不存在"):
    """路径中的 id 无法解析时按"不存在"处理。"""
    record_id = parse_record_id(raw)
    if record_id is None:
        raise NotFoundError(message)
    return record_id


def optional_record_id(raw):
    if raw in (None, ""):
        return None
    record_id = parse_record_id(raw)
    if record_id is None:
        raise ValidationError(f"id 不合法: {raw}")
    return record_id


def get_json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("请求体必须是 JSON 对象")
    return data
