from flask import Blueprint, request

from controllers.request_helpers import optional_record_id
from extensions.services import get_services
from utils.exceptions import BizError
from utils.response import json_response

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data), e.code


@dashboard_bp.get("")
def get_dashboard():
    """batch_id 为空或为 all 时统计全部批次"""
    raw = request.args.get("batch_id")
    batch_id = None if raw in (None, "", "all") else optional_record_id(raw)
    return json_response(data=get_services().dashboard.overview(batch_id=batch_id))
