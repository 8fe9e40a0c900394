from __future__ import annotations

from decimal import Decimal

from ...attendance.model import ActivityAggregate
from ...core.constants import DEFAULT_MALL_DAYS_WORKED, MALL_ALLOWANCE_MONTH_DAYS
from ...core.enums import EmployeeType
from ...settings.model import SalarySettings
from ..model import Earnings, ManualInputs
from .base import SalaryCalculator


class MallCalculator(SalaryCalculator):
    """Mall staff: commission on direct and subscription washes plus a prorated allowance.

    Without a manual `presentDays` the allowance assumes a full 30-day month.
    """

    employee_type = EmployeeType.MALL

    @property
    def variant(self) -> str:
        return self.employee_type.value

    def earnings(self, *, settings: SalarySettings, activity: ActivityAggregate, manual: ManualInputs) -> Earnings:
        tariff = settings.mall
        days_worked = manual.present_days if manual.present_days is not None else DEFAULT_MALL_DAYS_WORKED

        wash_pay = activity.one_wash_count * tariff.one_wash_rate
        monthly_pay = activity.subscription_count * tariff.monthly_rate
        daily_allowance = tariff.fixed_allowance / Decimal(MALL_ALLOWANCE_MONTH_DAYS)

        return Earnings(
            basic=wash_pay + monthly_pay,
            allowance=daily_allowance * days_worked,
            breakdown={
                "directWashes": activity.one_wash_count,
                "directRate": float(tariff.one_wash_rate),
                "monthlyCars": activity.subscription_count,
                "monthlyRate": float(tariff.monthly_rate),
                "fixedAllowance": float(tariff.fixed_allowance),
                "daysWorked": days_worked,
            },
        )
