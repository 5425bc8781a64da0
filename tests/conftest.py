from typing import Any, Dict, Optional

import pytest

from app import create_app
from extensions.database import db
from utils.id_generator import SequenceIdGenerator


class APIClient:
    """统一的API客户端（基于 Flask test client，不需要启动服务）"""

    def __init__(self, flask_client):
        self.client = flask_client

    def request(self, method: str, path: str,
                params: Optional[Dict] = None,
                json_data: Optional[Any] = None,
                headers: Optional[Dict] = None,
                **kwargs) -> Dict[str, Any]:
        """统一的API请求方法，返回响应 JSON 并附带 _http_status"""
        response = self.client.open(
            path,
            method=method.upper(),
            query_string=params,
            json=json_data,
            headers=headers,
            **kwargs
        )
        result = response.get_json(silent=True) or {}
        result["_http_status"] = response.status_code
        result["_headers"] = dict(response.headers)
        return result


@pytest.fixture()
def app():
    """测试用 Flask 应用：内存 sqlite 键值表，分组 / 用例 id 从 1001 开始顺序生成。"""
    app = create_app("testing", id_generator=SequenceIdGenerator(start=1001))
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture()
def services(app):
    return app.extensions["tcm_services"]


@pytest.fixture()
def store(services):
    return services.store


@pytest.fixture()
def api_client(app):
    """API客户端实例 - 每个测试函数都会创建新实例"""
    return APIClient(app.test_client())


def case_payload(name: str, **overrides) -> Dict[str, Any]:
    payload = {
        "name": name,
        "description": "",
        "precondition": "1. 用户已注册",
        "steps": "1. 打开应用\\n2. 点击登录",
        "expectedResult": "进入首页",
        "priority": "high",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_group(api_client):
    """
    创建分组
    """
    def _create(name: str, description: str = ""):
        resp = api_client.request(
            "POST",
            "/api/case-groups",
            json_data={"name": name, "description": description}
        )
        assert resp.get("_http_status") == 200, f"创建分组失败: {resp}"
        return resp["data"]
    return _create


@pytest.fixture
def make_test_case(api_client):
    """
    在指定分组下创建测试用例
    """
    def _create(name: str, group_id: Optional[int] = None, **fields):
        body = case_payload(name, **fields)
        if group_id is not None:
            body["groupId"] = group_id
        resp = api_client.request("POST", "/api/test-cases", json_data=body)
        assert resp.get("_http_status") == 200, f"创建用例失败: {resp}"
        return resp["data"]
    return _create
