# -*- coding: utf-8 -*-
"""单元测试：测试用例服务（创建校验、批量导入、编辑、删除、筛选）。"""

import pytest

from constants.storage_keys import CASES_KEY, GROUPS_KEY
from utils.exceptions import NotFoundError, ValidationError


def _payload(name: str, **overrides):
    data = {
        "name": name,
        "precondition": "用户已注册",
        "steps": "1. 打开应用\\n2. 点击登录",
        "expectedResult": "进入首页",
    }
    data.update(overrides)
    return data


def test_create_case_defaults_priority_and_status(services):
    case = services.cases.create_case(_payload("默认值"))

    assert case.priority == "medium"
    assert case.status == "pending"
    assert case.group_id is None
    assert "groupId" not in case.to_dict()
    assert case.created_at


@pytest.mark.parametrize("missing, message", [
    ("name", "用例名称不能为空"),
    ("steps", "操作步骤不能为空"),
    ("expectedResult", "预期结果不能为空"),
])
def test_create_case_requires_text_fields(services, missing, message):
    payload = _payload("缺字段")
    payload[missing] = "  "

    with pytest.raises(ValidationError) as exc:
        services.cases.create_case(payload)

    assert exc.value.message == message
    assert services.cases.list_cases() == []


def test_create_case_rejects_unknown_priority(services):
    with pytest.raises(ValidationError):
        services.cases.create_case(_payload("坏优先级", priority="urgent"))


def test_create_case_in_unknown_group_raises(services):
    with pytest.raises(NotFoundError):
        services.cases.create_case(_payload("孤儿"), group_id=31337)
    assert services.cases.list_cases() == []


def test_create_case_encodes_real_line_breaks(services):
    case = services.cases.create_case(_payload("多行", steps="1. 打开应用\n2. 点击登录\r\n3. 退出"))
    assert case.steps == "1. 打开应用\\n2. 点击登录\\n3. 退出"


def test_create_case_records_group_name(services):
    group = services.groups.create("订单")
    case = services.cases.create_case(_payload("下单"), group_id=group.id)

    assert case.group_id == group.id
    assert case.group_name == "订单"
    assert services.cases.get(case.id).to_dict()["groupId"] == group.id


def test_bulk_import_appends_all_records(services):
    group = services.groups.create("导入")
    records = [
        {"name": "导入1", "steps": "a", "expectedResult": "b", "priority": "high"},
        {"name": "导入2"},
        {"name": "导入3", "priority": ""},
    ]

    created = services.cases.bulk_import(records, group.id)

    assert [c.name for c in created] == ["导入1", "导入2", "导入3"]
    assert [c.priority for c in created] == ["high", "medium", "medium"]
    assert len({c.id for c in created}) == 3
    assert services.groups.get(group.id).case_count == 3
    assert all(c.group_name == "导入" for c in services.cases.list_cases())


def test_bulk_import_is_all_or_nothing(services, store):
    group = services.groups.create("导入")
    services.cases.create_case(_payload("已有用例"), group_id=group.id)
    before_cases = store.read(CASES_KEY)
    before_groups = store.read(GROUPS_KEY)

    records = [
        {"name": "合法"},
        {"name": ""},
        {"name": "非法状态", "status": "unknown"},
    ]
    with pytest.raises(ValidationError) as exc:
        services.cases.bulk_import(records, group.id)

    errors = exc.value.data["errors"]
    assert [e["index"] for e in errors] == [2, 3]
    assert store.read(CASES_KEY) == before_cases
    assert store.read(GROUPS_KEY) == before_groups


@pytest.mark.parametrize("records", [None, {"name": "不是数组"}, "name"])
def test_bulk_import_rejects_bad_input(services, records):
    group = services.groups.create("导入")
    with pytest.raises(ValidationError):
        services.cases.bulk_import(records, group.id)


def test_bulk_import_into_unknown_group_raises(services):
    with pytest.raises(NotFoundError):
        services.cases.bulk_import([{"name": "x"}], 5)


def test_update_case_replaces_fields_and_keeps_identity(services):
    case = services.cases.create_case(_payload("原名称"))

    updated = services.cases.update_case(case.id, _payload("新名称", priority="low", status="passed"))

    assert updated.id == case.id
    assert updated.created_at == case.created_at
    assert updated.name == "新名称"
    assert updated.priority == "low"
    assert updated.status == "passed"
    assert updated.updated_at
    assert services.cases.get(case.id).name == "新名称"


def test_update_unknown_case_returns_none(services, store):
    services.cases.create_case(_payload("存在"))
    before = store.read(CASES_KEY)

    assert services.cases.update_case(123456, _payload("不存在")) is None
    assert store.read(CASES_KEY) == before


def test_update_case_validates_before_writing(services):
    case = services.cases.create_case(_payload("原名称"))
    with pytest.raises(ValidationError):
        services.cases.update_case(case.id, _payload("", steps=""))
    assert services.cases.get(case.id).name == "原名称"


def test_delete_unknown_case_returns_false(services):
    assert services.cases.delete_case(777) is False


def test_filter_by_group_and_search(services):
    login = services.groups.create("登录")
    pay = services.groups.create("支付")
    services.cases.create_case(_payload("密码登录"), group_id=login.id)
    services.cases.create_case(_payload("扫码登录", precondition="已安装 APP"), group_id=login.id)
    services.cases.create_case(_payload("余额支付", expectedResult="扣款成功"), group_id=pay.id)

    by_group = [c.name for c in services.cases.filter_cases(group_id=login.id)]
    assert by_group == ["密码登录", "扫码登录"]

    assert [c.name for c in services.cases.filter_cases(search="app")] == ["扫码登录"]
    assert [c.name for c in services.cases.filter_cases(search="扣款")] == ["余额支付"]
    assert [c.name for c in services.cases.filter_cases(group_id=pay.id, search="扫码")] == []
    assert len(list(services.cases.filter_cases())) == 3


def test_bulk_import_of_nothing_is_a_noop(services, store):
    group = services.groups.create("导入")
    before_cases = store.read(CASES_KEY)
    before_groups = store.read(GROUPS_KEY)

    assert services.cases.bulk_import([], group.id) == []

    assert store.read(CASES_KEY) == before_cases
    assert store.read(GROUPS_KEY) == before_groups
    assert services.groups.get(group.id).case_count == 0
