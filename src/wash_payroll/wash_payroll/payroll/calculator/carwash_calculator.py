from __future__ import annotations

from ...attendance.model import ActivityAggregate
from ...core.enums import DutyShift, EmployeeType
from ...settings.model import SalarySettings
from ..model import Earnings, ManualInputs
from .base import SalaryCalculator


class CarWashCalculator(SalaryCalculator):
    """Residential car wash: paid per car, with a two-tier monthly incentive.

    Below the threshold earns the low incentive; at or above it earns the high one.
    """

    employee_type = EmployeeType.CARWASH

    def __init__(self, shift: DutyShift):
        self.shift = shift

    @property
    def variant(self) -> str:
        return f"{self.employee_type.value}:{self.shift.value}"

    def earnings(self, *, settings: SalarySettings, activity: ActivityAggregate, manual: ManualInputs) -> Earnings:
        tariff = settings.car_wash.for_shift(self.shift)
        total = activity.total_washes

        basic = total * tariff.rate_per_car
        incentive = tariff.incentive_low if total < tariff.incentive_threshold else tariff.incentive_high

        return Earnings(
            basic=basic,
            incentive=incentive,
            breakdown={
                "type": "Day Duty (Residential)" if self.shift == DutyShift.DAY else "Night Duty (Residential)",
                "duty": self.shift.value,
                "totalCars": total,
                "ratePerCar": float(tariff.rate_per_car),
                "incentiveThreshold": tariff.incentive_threshold,
                "incentive": float(incentive),
            },
        )
