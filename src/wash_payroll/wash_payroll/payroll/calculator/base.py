from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import ActivityAggregate
from ...core.enums import EmployeeType
from ...settings.model import SalarySettings
from ..model import Earnings, ManualInputs


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern, one class per employee variant)."""

    employee_type: EmployeeType

    @property
    @abstractmethod
    def variant(self) -> str:
        """Label of the variant, e.g. "carwash:dayDuty" or "camp:mason"."""

        raise NotImplementedError

    @abstractmethod
    def earnings(self, *, settings: SalarySettings, activity: ActivityAggregate, manual: ManualInputs) -> Earnings:
        raise NotImplementedError

    def present_days(self, activity: ActivityAggregate, manual: ManualInputs) -> int:
        """Wash-driven roles infer attendance from activity unless overridden."""

        if manual.present_days is not None:
            return manual.present_days
        return activity.present_days_count
