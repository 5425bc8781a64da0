# -*- coding: utf-8 -*-
"""多行文本字段的编码约定。

前置条件 / 操作步骤 / 预期结果都存成单个字符串，行与行之间用字面量的
两字符转义序列 ``\\n``（反斜杠 + n）分隔，而不是真实换行符。导入与批次
快照两处都会去掉每行开头的序号前缀（``^\\d+\\.\\s*``），规则必须一致。
"""

import re
from typing import Any, Dict, Iterable, List, Optional

NEWLINE_MARKER = "\\n"
ORDINAL_PREFIX_RE = re.compile(r"^\d+\.\s*")
_REAL_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def strip_ordinal(text: str) -> str:
    return ORDINAL_PREFIX_RE.sub("", text, count=1)


def split_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return text.split(NEWLINE_MARKER)


def join_lines(lines: Iterable[str]) -> str:
    return NEWLINE_MARKER.join(lines)


def encode_multiline(text: Optional[str]) -> str:
    """把接口传入的真实换行统一转成换行标记。"""
    if text is None:
        return ""
    # 用函数替换，避免 "\\n" 被 re.sub 当作模板展开成真实换行
    return _REAL_LINE_BREAK_RE.sub(lambda _m: NEWLINE_MARKER, str(text))


def parse_steps(text: Optional[str]) -> List[Dict[str, str]]:
    """
    "1. 打开应用\\n2. 点击登录" -> [{"action": "打开应用", ...}, {"action": "点击登录", ...}]
    """
    steps = []
    for fragment in split_lines(text):
        cleaned = strip_ordinal(fragment)
        steps.append({"action": cleaned, "description": cleaned})
    return steps


def normalize_steps(value: Any) -> List[Dict[str, str]]:
    """批次用例的 steps 统一成 [{action, description}]，兼容已是数组的旧数据。"""
    if value is None:
        return []
    if isinstance(value, str):
        return parse_steps(value)
    steps = []
    for item in value:
        if isinstance(item, dict):
            action = str(item.get("action") or "")
            steps.append({"action": action, "description": str(item.get("description") or action)})
        else:
            cleaned = strip_ordinal(str(item))
            steps.append({"action": cleaned, "description": cleaned})
    return steps
