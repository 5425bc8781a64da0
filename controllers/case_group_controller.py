from flask import Blueprint, current_app, request
from utils.response import json_response
from utils.exceptions import BizError, ValidationError
from extensions.services import get_services
from services.opml_import_service import parse_opml
from controllers.request_helpers import get_json_body, require_record_id

case_group_bp = Blueprint("case_group", __name__, url_prefix="/api/case-groups")


@case_group_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data), e.code


@case_group_bp.get("")
def list_case_groups():
    groups = get_services().groups.list_groups()
    return json_response(data={"items": [g.to_dict() for g in groups]})


@case_group_bp.post("")
def create_case_group():
    data = get_json_body()
    name = data.get("name")
    if not name or not str(name).strip():
        return json_response(code=400, message="请输入分组名称")

    group = get_services().groups.create(name=str(name), description=data.get("description"))
    return json_response(message="分组创建成功", data=group.to_dict())


@case_group_bp.get("/<group_id>")
def get_case_group(group_id):
    group = get_services().groups.get(require_record_id(group_id, "分组不存在"))
    return json_response(data=group.to_dict())


@case_group_bp.delete("/<group_id>")
def delete_case_group(group_id):
    deleted_case_count = get_services().groups.delete(require_record_id(group_id, "分组不存在"))
    if deleted_case_count is None:
        return json_response(code=404, message="分组不存在")
    return json_response(message="删除成功", data={
        "deleted_case_count": deleted_case_count
    })


@case_group_bp.post("/<group_id>/import")
def import_test_cases(group_id):
    """导入用例到分组：上传 OPML 文件（file 字段），或 JSON {"cases": [...]}。"""
    group_id = require_record_id(group_id, "分组不存在")
    if request.files:
        records = _records_from_upload()
    else:
        records = get_json_body().get("cases")

    created = get_services().cases.bulk_import(records, group_id)
    return json_response(
        message=f"成功导入{len(created)}条用例",
        data={
            "total": len(created),
            "items": [c.to_dict() for c in created],
        }
    )


def _records_from_upload():
    file_storage = request.files.get("file")
    if not file_storage or file_storage.filename == "":
        raise ValidationError("导入文件不能为空")

    max_bytes = current_app.config.get("IMPORT_MAX_BYTES")
    file_bytes = file_storage.read(max_bytes + 1) if max_bytes else file_storage.read()
    if not file_bytes:
        raise ValidationError("导入文件不能为空")
    if max_bytes and len(file_bytes) > max_bytes:
        raise ValidationError("导入文件过大")
    return parse_opml(file_bytes)


@case_group_bp.post("/sync-counts")
def sync_case_counts():
    changed = get_services().groups.sync_case_counts()
    return json_response(message="用例数量已同步", data={
        "changed": [{"id": gid, "caseCount": count} for gid, count in changed.items()]
    })
