from typing import Any, Mapping
import logging

from models.app_settings import AppSettings, PAGE_SIZE_MAX, PAGE_SIZE_MIN
from repositories.settings_repository import SettingsRepository
from utils.exceptions import ValidationError
from utils.validators import parse_bool

logger = logging.getLogger(__name__)


class SettingsService:

    def __init__(self, settings: SettingsRepository):
        self.settings = settings

    def get_settings(self) -> AppSettings:
        return self.settings.get()

    def save_settings(self, values: Mapping[str, Any]) -> AppSettings:
        if not isinstance(values, Mapping):
            raise ValidationError("设置数据必须是对象")
        current = self.settings.get()

        default_group = str(values.get("defaultGroup", current.default_group) or "").strip()
        if not default_group:
            raise ValidationError("请输入默认分组名称")

        raw_size = values.get("batchSize", current.batch_size)
        try:
            batch_size = int(raw_size)
        except (TypeError, ValueError):
            raise ValidationError("每页显示数量必须是整数")
        if not PAGE_SIZE_MIN <= batch_size <= PAGE_SIZE_MAX:
            raise ValidationError(f"每页显示数量必须在 {PAGE_SIZE_MIN}~{PAGE_SIZE_MAX} 之间")

        auto_save = parse_bool(values.get("autoSave", current.auto_save))

        settings = AppSettings(
            default_group=default_group,
            batch_size=batch_size,
            auto_save=auto_save,
            extra=current.extra,
        )
        self.settings.save(settings)
        logger.info(f"保存设置 {settings.to_dict()}")
        return settings
