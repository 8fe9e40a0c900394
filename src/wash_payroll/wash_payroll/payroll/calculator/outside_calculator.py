from __future__ import annotations

from ...attendance.model import ActivityAggregate
from ...common.money import ZERO
from ...core.enums import EmployeeType
from ...core.exceptions import SettingsConfigurationError
from ...settings.model import SalarySettings
from ..model import Earnings, ManualInputs
from .base import SalaryCalculator


class OutsideCampCalculator(SalaryCalculator):
    """Outside camp: hourly pay by trade, no incentive or overtime."""

    employee_type = EmployeeType.OUTSIDE_CAMP

    def __init__(self, position: str):
        self.position = position

    @property
    def variant(self) -> str:
        return f"{self.employee_type.value}:{self.position}"

    def present_days(self, activity: ActivityAggregate, manual: ManualInputs) -> int:
        return manual.present_days or 0

    def earnings(self, *, settings: SalarySettings, activity: ActivityAggregate, manual: ManualInputs) -> Earnings:
        rate = settings.outside.get(self.position)
        if rate is None:
            raise SettingsConfigurationError(f"No hourly rate configured for position '{self.position}'")

        hours = manual.total_hours if manual.total_hours is not None else ZERO
        return Earnings(
            basic=hours * rate,
            breakdown={
                "position": self.position,
                "hourlyRate": float(rate),
                "totalHours": float(hours),
            },
        )
