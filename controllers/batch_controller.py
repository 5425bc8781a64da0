# -*- coding: utf-8 -*-
"""controllers/batch_controller.py
--------------------------------------------------------------------
执行批次接口：创建（按分组 / 按多选用例）、列表、详情、删除、登记执行结果。
"""

from flask import Blueprint

from controllers.request_helpers import get_json_body, optional_record_id, require_record_id
from extensions.services import get_services
from services.batch_service import BatchService
from utils.exceptions import BizError, ValidationError
from utils.response import json_response
from utils.validators import parse_record_id

batch_bp = Blueprint("batch", __name__, url_prefix="/api/batches")


@batch_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data), e.code


@batch_bp.get("")
def list_batches():
    batches = get_services().batches.list_batches()
    return json_response(data={"items": [BatchService.describe(b, include_cases=False) for b in batches]})


@batch_bp.post("")
def create_batch():
    """
    请求体：
      {"name": "...", "group_id": 1}       按分组创建
      {"name": "...", "case_ids": [1, 2]}  按选中的用例创建
    """
    data = get_json_body()
    name = data.get("name")
    service = get_services().batches

    group_id = optional_record_id(data.get("group_id", data.get("groupId")))
    if group_id is not None:
        batch = service.create_batch_from_group(name, group_id)
    else:
        raw_ids = data.get("case_ids", data.get("caseIds"))
        if raw_ids is not None and not isinstance(raw_ids, list):
            raise ValidationError("case_ids 必须是数组")
        case_ids = [cid for cid in (parse_record_id(raw) for raw in raw_ids or []) if cid is not None]
        batch = service.create_batch_from_selection(name, case_ids)

    return json_response(message="批次创建成功", data=BatchService.describe(batch))


@batch_bp.get("/next-id")
def next_batch_id():
    return json_response(data={"id": get_services().batches.next_batch_id()})


@batch_bp.get("/<batch_id>")
def get_batch(batch_id):
    batch = get_services().batches.get(require_record_id(batch_id, "未找到该批次数据"))
    return json_response(data=BatchService.describe(batch))


@batch_bp.delete("/<batch_id>")
def delete_batch(batch_id):
    deleted = get_services().batches.delete_batch(require_record_id(batch_id, "未找到该批次数据"))
    if not deleted:
        return json_response(code=404, message="未找到该批次数据")
    return json_response(message="删除成功")


@batch_bp.put("/<batch_id>/cases/<case_id>/status")
def update_batch_case_status(batch_id, case_id):
    data = get_json_body()
    status = data.get("status")
    if not status:
        return json_response(code=400, message="状态不能为空")

    batch = get_services().batches.update_case_status(
        require_record_id(batch_id, "未找到该批次数据"),
        require_record_id(case_id, "批次中不存在该用例"),
        status,
    )
    return json_response(message="状态更新成功", data=BatchService.describe(batch))
