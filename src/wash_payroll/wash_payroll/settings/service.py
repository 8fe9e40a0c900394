from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..core.constants import DEFAULT_SETTINGS_HISTORY_LIMIT, SYSTEM_USER
from ..core.exceptions import StorageError, ValidationError
from .defaults import default_settings
from .model import SalarySettings, parse_category
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

# Metadata a client may echo back from GET; never part of the tariff payload.
_METADATA_KEYS = {"version", "isActive", "lastModifiedBy", "createdAt", "updatedAt", "_id"}


class SalarySettingsService:
    """Use cases around the versioned tariff configuration.

    Every change stores a new version and makes it the only active one; older
    versions are kept as history and never deleted.
    """

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self) -> SalarySettings:
        current = self._settings.get_active()
        if current is not None:
            return current

        try:
            created = self._settings.create_if_absent(default_settings())
        except StorageError:
            # A concurrent first access may have inserted the defaults and won the lock.
            current = self._settings.get_active()
            if current is None:
                raise
            logger.warning("Default salary settings were created concurrently; using version %s", current.version)
            return current
        logger.info("Created default salary settings (version %s)", created.version)
        return created

    def save_settings(self, data: Mapping[str, Any], *, modified_by: str) -> SalarySettings:
        if not isinstance(data, Mapping):
            raise ValidationError("settings must be an object")

        payload = {k: v for k, v in data.items() if k not in _METADATA_KEYS}
        new_version = SalarySettings.from_payload(payload, last_modified_by=modified_by or SYSTEM_USER)
        saved = self._settings.activate(new_version)
        logger.info("Salary settings replaced by %s (version %s)", saved.last_modified_by, saved.version)
        return saved

    def get_category(self, category: str) -> dict:
        cat = parse_category(category)
        return self.get_settings().category_dict(cat.value)

    def update_category(self, category: str, partial: Mapping[str, Any], *, modified_by: str) -> SalarySettings:
        cat = parse_category(category)
        current = self.get_settings()
        updated = current.with_category(cat.value, partial, modified_by=modified_by or SYSTEM_USER)
        saved = self._settings.activate(updated)
        logger.info(
            "Salary settings category %s updated by %s (version %s -> %s)",
            cat.value,
            saved.last_modified_by,
            current.version,
            saved.version,
        )
        return saved

    def reset_to_defaults(self, *, modified_by: str) -> SalarySettings:
        saved = self._settings.activate(default_settings(modified_by or SYSTEM_USER))
        logger.info("Salary settings reset to defaults by %s (version %s)", saved.last_modified_by, saved.version)
        return saved

    def list_versions(self, *, limit: int = DEFAULT_SETTINGS_HISTORY_LIMIT) -> Sequence[SalarySettings]:
        if int(limit) <= 0:
            raise ValidationError("limit must be positive")
        return self._settings.list_versions(limit=int(limit))
