# -*- coding: utf-8 -*-
"""extensions/services.py
--------------------------------------------------------------------
按应用组装仓储与服务：
- 每个集合只有一个仓储，仓储持有注入的 KeyValueStore
- 服务之间不互相引用，只共享仓储
接口层通过 get_services() 取用，测试可以直接调用 build_services() 注入替身。
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app

from constants.batch import BATCH_NAME_MAX_LENGTH
from extensions.storage import KeyValueStore
from repositories.batch_repository import BatchRepository
from repositories.case_group_repository import CaseGroupRepository
from repositories.settings_repository import SettingsRepository
from repositories.test_case_repository import TestCaseRepository
from services.batch_service import BatchService
from services.case_group_service import CaseGroupService
from services.dashboard_service import DashboardService
from services.settings_service import SettingsService
from services.test_case_service import TestCaseService
from utils.id_generator import IdGenerator, MonotonicIdGenerator

_EXTENSION_KEY = "tcm_services"


@dataclass
class ServiceContainer:
    store: KeyValueStore
    groups: CaseGroupService
    cases: TestCaseService
    batches: BatchService
    dashboard: DashboardService
    settings: SettingsService


def build_services(
    store: KeyValueStore,
    id_generator: Optional[IdGenerator] = None,
    batch_name_max_length: int = BATCH_NAME_MAX_LENGTH,
) -> ServiceContainer:
    id_generator = id_generator or MonotonicIdGenerator()
    group_repo = CaseGroupRepository(store, id_generator=id_generator)
    case_repo = TestCaseRepository(store, id_generator=id_generator)
    batch_repo = BatchRepository(store)

    return ServiceContainer(
        store=store,
        groups=CaseGroupService(group_repo, case_repo, store),
        cases=TestCaseService(case_repo, group_repo, store),
        batches=BatchService(batch_repo, case_repo, group_repo, name_max_length=batch_name_max_length),
        dashboard=DashboardService(batch_repo),
        settings=SettingsService(SettingsRepository(store)),
    )


def init_services(app, store: KeyValueStore, id_generator: Optional[IdGenerator] = None) -> ServiceContainer:
    container = build_services(
        store,
        id_generator=id_generator,
        batch_name_max_length=app.config.get("BATCH_NAME_MAX_LENGTH", BATCH_NAME_MAX_LENGTH),
    )
    app.extensions[_EXTENSION_KEY] = container
    return container


def get_services() -> ServiceContainer:
    return current_app.extensions[_EXTENSION_KEY]
