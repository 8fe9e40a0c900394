from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalarySettings


class SettingsRepository(Protocol):
    """Append-only store of settings versions with a single active one."""

    def get_active(self) -> Optional[SalarySettings]:
        """Newest active version, or None when nothing was ever saved."""

        raise NotImplementedError

    def activate(self, settings: SalarySettings) -> SalarySettings:
        """Deactivate every version and store `settings` as the active one.

        Both steps run in one transaction. Returns the stored version.
        """

        raise NotImplementedError

    def create_if_absent(self, settings: SalarySettings) -> SalarySettings:
        """Store `settings` as active only if no active version exists.

        Returns whichever version is active afterwards.
        """

        raise NotImplementedError

    def list_versions(self, *, limit: int) -> Sequence[SalarySettings]:
        raise NotImplementedError
