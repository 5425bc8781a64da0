from typing import Dict, List, Optional
import logging

from extensions.storage import KeyValueStore
from models.case_group import CaseGroup
from repositories.case_group_repository import CaseGroupRepository
from repositories.test_case_repository import TestCaseRepository
from utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CaseGroupService:

    def __init__(self, groups: CaseGroupRepository, cases: TestCaseRepository, store: KeyValueStore):
        self.groups = groups
        self.cases = cases
        self.store = store

    def get(self, group_id) -> CaseGroup:
        group = self.groups.get_by_id(group_id)
        if not group:
            raise NotFoundError("分组不存在")
        return group

    def list_groups(self) -> List[CaseGroup]:
        return self.groups.list()

    def create(self, name: Optional[str], description: Optional[str] = None) -> CaseGroup:
        name = (name or "").strip()
        if not name:
            raise ValidationError("分组名称不能为空")
        group = self.groups.create(name=name, description=description or "")
        logger.info(f"创建分组 id={group.id} name={group.name}")
        return group

    def delete(self, group_id) -> Optional[int]:
        """
        删除分组并级联删除组内全部用例，两次写入在同一个提交单元内。
        分组不存在时不做任何修改，返回 None；否则返回级联删除的用例数。
        """
        with self.store.atomic():
            if not self.groups.delete(group_id):
                logger.debug(f"delete group {group_id}: not found")
                return None
            deleted_case_count = self.cases.delete_by_group(group_id)

        logger.info(f"删除分组 id={group_id}，级联删除用例 {deleted_case_count} 条")
        return deleted_case_count

    def sync_case_counts(self) -> Dict[int, int]:
        """按用例库实际数据修复所有分组的 caseCount。"""
        with self.store.atomic():
            changed = self.groups.sync_case_counts(self.cases.list(strict=True))
        if changed:
            logger.warning(f"分组用例数与实际不符，已修正: {changed}")
        return changed
