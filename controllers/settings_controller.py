from flask import Blueprint

from controllers.request_helpers import get_json_body
from extensions.services import get_services
from utils.exceptions import BizError
from utils.response import json_response

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data), e.code


@settings_bp.get("")
def get_settings():
    return json_response(data=get_services().settings.get_settings().to_dict())


@settings_bp.put("")
def save_settings():
    settings = get_services().settings.save_settings(get_json_body())
    return json_response(message="设置已保存", data=settings.to_dict())
