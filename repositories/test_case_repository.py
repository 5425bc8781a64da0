from typing import Any, Dict, Iterator, List, Optional, Sequence
import logging

from constants.storage_keys import CASES_KEY
from extensions.storage import KeyValueStore
from models.test_case import TestCase, EDITABLE_FIELDS
from repositories.base_repository import CollectionRepository
from utils.datetime_helpers import utc_now_iso
from utils.id_generator import IdGenerator, MonotonicIdGenerator

logger = logging.getLogger(__name__)


def matches_search(case: TestCase, search: Optional[str]) -> bool:
    """名称 / 前置条件 / 步骤 / 预期结果任一包含关键字即命中（不区分大小写）。"""
    if not search:
        return True
    needle = search.lower()
    return any(needle in (text or "").lower() for text in case.searchable_texts())


class TestCaseRepository(CollectionRepository[TestCase]):
    __test__ = False

    key = CASES_KEY
    record_cls = TestCase

    def __init__(self, store: KeyValueStore, id_generator: Optional[IdGenerator] = None):
        super().__init__(store)
        self.id_generator = id_generator or MonotonicIdGenerator()

    def create(self, case: TestCase) -> TestCase:
        return self.bulk_create([case])[0]

    def bulk_create(self, new_cases: Sequence[TestCase]) -> List[TestCase]:
        """一次写入追加全部用例：要么全部落盘，要么一条都不写。"""
        cases = self._load_for_update()
        now = utc_now_iso()
        for case in new_cases:
            case.id = self.id_generator.next_id()
            case.created_at = case.created_at or now
        cases.extend(new_cases)
        self._save(cases)
        return list(new_cases)

    def update(self, case_id, fields: Dict[str, Any]) -> Optional[TestCase]:
        """整体替换可编辑字段；id / createdAt 不可变；用例不存在时返回 None 且不写入。"""
        cases = self._load_for_update()
        target = next((c for c in cases if c.id == case_id), None)
        if target is None:
            return None
        for name in EDITABLE_FIELDS:
            if name in fields:
                setattr(target, name, fields[name])
        if "group_id" in fields:
            target.group_id = fields["group_id"]
            target.group_name = fields.get("group_name")
        target.updated_at = utc_now_iso()
        self._save(cases)
        return target

    def delete(self, case_id) -> Optional[TestCase]:
        cases = self._load_for_update()
        removed = next((c for c in cases if c.id == case_id), None)
        if removed is None:
            return None
        self._save([c for c in cases if c.id != case_id])
        return removed

    def delete_by_group(self, group_id) -> int:
        cases = self._load_for_update()
        remaining = [c for c in cases if c.group_id != group_id]
        removed = len(cases) - len(remaining)
        if removed:
            self._save(remaining)
        return removed

    def list_by_ids(self, case_ids: Sequence) -> List[TestCase]:
        """按用例库中的顺序返回选中的用例，已不存在的 id 忽略。"""
        wanted = set(case_ids)
        return [c for c in self._load() if c.id in wanted]

    def filter(self, group_id=None, search: Optional[str] = None) -> Iterator[TestCase]:
        """惰性过滤：分组匹配 AND 关键字匹配。"""
        return (
            case for case in self._load()
            if (group_id is None or case.group_id == group_id) and matches_search(case, search)
        )
