from typing import Dict, Iterable, Optional
import logging

from constants.storage_keys import GROUPS_KEY
from extensions.storage import KeyValueStore
from models.case_group import CaseGroup
from models.test_case import TestCase
from repositories.base_repository import CollectionRepository
from utils.datetime_helpers import utc_now_iso
from utils.id_generator import IdGenerator, MonotonicIdGenerator

logger = logging.getLogger(__name__)


class CaseGroupRepository(CollectionRepository[CaseGroup]):
    key = GROUPS_KEY
    record_cls = CaseGroup

    def __init__(self, store: KeyValueStore, id_generator: Optional[IdGenerator] = None):
        super().__init__(store)
        self.id_generator = id_generator or MonotonicIdGenerator()

    def create(self, name: str, description: str = "") -> CaseGroup:
        groups = self._load_for_update()
        group = CaseGroup(
            id=self.id_generator.next_id(),
            name=name,
            description=description or "",
            case_count=0,
            created_at=utc_now_iso(),
        )
        groups.append(group)
        self._save(groups)
        return group

    def delete(self, group_id) -> bool:
        groups = self._load_for_update()
        remaining = [g for g in groups if g.id != group_id]
        if len(remaining) == len(groups):
            return False
        self._save(remaining)
        return True

    def increment_case_count(self, group_id, delta: int) -> Optional[CaseGroup]:
        """caseCount += delta，下限为 0；分组不存在时不做任何写入。"""
        if group_id is None or not delta:
            return None
        groups = self._load_for_update()
        target = None
        for g in groups:
            if g.id == group_id:
                g.case_count = max(g.case_count + delta, 0)
                target = g
                break
        if target is None:
            logger.debug(f"increment_case_count: group {group_id} not found")
            return None
        self._save(groups)
        return target

    def sync_case_counts(self, cases: Iterable[TestCase]) -> Dict[int, int]:
        """按实际用例重新计算所有分组的 caseCount，返回发生变化的 {group_id: 新值}。"""
        counts: Dict[int, int] = {}
        for case in cases:
            if case.group_id is not None:
                counts[case.group_id] = counts.get(case.group_id, 0) + 1

        groups = self._load_for_update()
        changed: Dict[int, int] = {}
        for g in groups:
            actual = counts.get(g.id, 0)
            if g.case_count != actual:
                changed[g.id] = actual
                g.case_count = actual
        if changed:
            self._save(groups)
        return changed
