# -*- coding: utf-8 -*-
"""Parse OPML outlines into test case records.

文档结构约定::

    <opml><body>
      <outline text="模块">                  <- 顶层节点（忽略）
        <outline text="用例名称">            <- 每个二级节点是一条用例
          <outline text="前置条件">
            <outline text="1. 已注册"/>
          </outline>
          <outline text="操作步骤"> ... </outline>
          <outline text="预期结果"> ... </outline>
          <outline text="优先级"><outline text="P1"/></outline>
        </outline>
      </outline>
    </body></opml>

每个分节下的所有子孙节点去掉序号前缀后按换行标记拼接。
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List

from constants.test_case import DEFAULT_STATUS, TestCasePriority
from utils.exceptions import ValidationError
from utils.text_steps import join_lines, strip_ordinal

logger = logging.getLogger(__name__)

SECTION_FIELDS = {
    "前置条件": "precondition",
    "precondition": "precondition",
    "preconditions": "precondition",
    "操作步骤": "steps",
    "steps": "steps",
    "预期结果": "expectedResult",
    "expected result": "expectedResult",
    "expected results": "expectedResult",
    "优先级": "priority",
    "priority": "priority",
}


def priority_from_text(text: str) -> str:
    """P1 -> high，P2 -> medium，其余 -> low"""
    lowered = (text or "").lower()
    for priority in (TestCasePriority.HIGH, TestCasePriority.MEDIUM):
        if priority.label.lower() in lowered:
            return priority.value
    return TestCasePriority.LOW.value


def _section_content(section: ET.Element) -> str:
    items = []
    for item in section.iter("outline"):
        if item is section:
            continue
        text = strip_ordinal(item.get("text") or "").strip()
        if text:
            items.append(text)
    return join_lines(items)


def parse_opml(content: str | bytes) -> List[Dict[str, Any]]:
    """返回按文档顺序排列的用例记录，字段与 bulk_import 的输入一致。"""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        logger.warning(f"OPML 解析失败: {exc}")
        raise ValidationError("OPML文件解析失败") from exc

    body = root.find("body")
    if body is None:
        raise ValidationError("OPML文件缺少 body 节点")

    records = []
    for top in body.findall("outline"):
        for case_node in top.findall("outline"):
            record = {
                "name": case_node.get("text") or "",
                "description": "",
                "precondition": "",
                "steps": "",
                "expectedResult": "",
                "priority": "",
                "status": DEFAULT_STATUS,
            }
            for section in case_node.iter("outline"):
                if section is case_node:
                    continue
                field_name = SECTION_FIELDS.get((section.get("text") or "").strip().lower())
                if field_name is None:
                    continue
                content_text = _section_content(section)
                if field_name == "priority":
                    record["priority"] = priority_from_text(content_text)
                else:
                    record[field_name] = content_text
            records.append(record)

    logger.info(f"OPML 解析得到 {len(records)} 条用例")
    return records
