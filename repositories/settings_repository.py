import logging

from constants.storage_keys import SETTINGS_KEY
from extensions.storage import KeyValueStore
from models.app_settings import AppSettings
from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class SettingsRepository:
    key = SETTINGS_KEY

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get(self) -> AppSettings:
        try:
            raw = self.store.read(self.key)
            if raw is None:
                return AppSettings()
            return AppSettings.from_dict(raw)
        except (PersistenceError, TypeError, ValueError) as exc:
            logger.warning(f"设置读取失败，使用默认值: {exc}")
            return AppSettings()

    def save(self, settings: AppSettings) -> AppSettings:
        self.store.write(self.key, settings.to_dict())
        return settings
