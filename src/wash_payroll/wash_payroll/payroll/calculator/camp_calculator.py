from __future__ import annotations

from decimal import Decimal

from ...attendance.model import ActivityAggregate
from ...common.money import ZERO, as_float
from ...core.enums import EmployeeType
from ...core.exceptions import SettingsConfigurationError
from ...settings.model import SalarySettings
from ..model import Earnings, ManualInputs
from .base import SalaryCalculator


class CampCalculator(SalaryCalculator):
    """Construction camp: daily-prorated base salary, overtime and a full-attendance bonus.

    Camp attendance always comes from manual input (default 0 days).
    """

    employee_type = EmployeeType.CAMP

    def __init__(self, sub_role: str):
        self.sub_role = sub_role

    @property
    def variant(self) -> str:
        return f"{self.employee_type.value}:{self.sub_role}"

    def present_days(self, activity: ActivityAggregate, manual: ManualInputs) -> int:
        return manual.present_days or 0

    def earnings(self, *, settings: SalarySettings, activity: ActivityAggregate, manual: ManualInputs) -> Earnings:
        role = settings.camp.roles.get(self.sub_role)
        if role is None:
            raise SettingsConfigurationError(f"No camp tariff configured for sub-role '{self.sub_role}'")
        camp = settings.camp.settings

        days_present = self.present_days(activity, manual)
        absent_days = manual.absent_days or 0

        daily_rate = role.base_salary / Decimal(camp.standard_days)
        if manual.ot_hours is not None:
            ot_hours = manual.ot_hours
        else:
            ot_hours = (camp.actual_hours - camp.normal_hours) * days_present

        full_attendance = days_present >= camp.standard_days and absent_days == 0
        incentive = camp.monthly_incentive if full_attendance else ZERO

        return Earnings(
            basic=daily_rate * days_present,
            overtime=ot_hours * role.overtime_rate,
            incentive=incentive,
            breakdown={
                "role": self.sub_role,
                "baseSalary": float(role.base_salary),
                "standardDays": camp.standard_days,
                "dailyRate": as_float(daily_rate),
                "daysPresent": days_present,
                "absentDays": absent_days,
                "otHours": float(ot_hours),
                "otRate": float(role.overtime_rate),
                "fullAttendance": full_attendance,
            },
        )
