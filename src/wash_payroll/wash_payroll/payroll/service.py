from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from ..attendance.model import ActivityAggregate
from ..common.money import ZERO, as_float, to_decimal
from ..common.validators import require_mapping
from ..core.enums import EmployeeType
from ..core.exceptions import ValidationError
from ..settings.model import SalarySettings
from ..settings.service import SalarySettingsService
from .calculator.base import SalaryCalculator
from .deductions import sim_deduction
from .factory import SalaryCalculatorFactory
from .model import Deductions, ManualInputs, SalaryComputation


def compute_salary(
    *,
    calculator: SalaryCalculator,
    settings: SalarySettings,
    activity: ActivityAggregate,
    manual: ManualInputs,
    last_month_balance: Decimal,
) -> SalaryComputation:
    """Pure salary calculation: no storage access, no rounding.

    `last_month_balance` must already be resolved (manual value or carry-forward).
    """

    earnings = calculator.earnings(settings=settings, activity=activity, manual=manual)
    deductions = Deductions(
        sim=sim_deduction(settings.etisalat, manual.sim_bill_amount),
        advance=manual.advance if manual.advance is not None else ZERO,
        other=manual.other_deduction if manual.other_deduction is not None else ZERO,
        last_month_balance=last_month_balance,
    )

    return SalaryComputation(
        employee_type=calculator.employee_type.value,
        variant=calculator.variant,
        earnings=earnings,
        deductions=deductions,
        present_days=calculator.present_days(activity, manual),
        absent_days=manual.absent_days or 0,
        sick_leave_days=manual.sick_leave_days or 0,
        no_duty_days=manual.no_duty_days or 0,
    )


class SalaryPreviewService:
    """Use case: the admin "calculator" screen.

    Computes earnings for hand-typed figures without touching any worker or slip;
    unknown employee types are rejected.
    """

    def __init__(self, settings: SalarySettingsService, *, factory: Optional[SalaryCalculatorFactory] = None):
        self._settings = settings
        self._factory = factory or SalaryCalculatorFactory()

    def calculate(self, employee_type: str, employee_data: Mapping[str, Any]) -> dict:
        data = require_mapping(employee_data, "employeeData")
        settings = self._settings.get_settings()

        calculator = self._factory.create(
            employee_type,
            settings=settings,
            location=str(data.get("location") or ""),
            sub_role=data.get("subRole") or data.get("role"),
            position=data.get("position"),
            strict=True,
        )
        activity, manual = self._inputs_for(calculator.employee_type, data)
        earnings = calculator.earnings(settings=settings, activity=activity, manual=manual)

        return {
            "employeeType": employee_type,
            "variant": calculator.variant,
            "basicSalary": as_float(earnings.basic),
            "incentive": as_float(earnings.incentive),
            "allowance": as_float(earnings.allowance),
            "overtime": as_float(earnings.overtime),
            "totalEarnings": as_float(earnings.total),
            "breakdown": earnings.breakdown,
            "settingsVersion": settings.version,
        }

    @staticmethod
    def _inputs_for(kind: EmployeeType, data: Mapping[str, Any]) -> tuple[ActivityAggregate, ManualInputs]:
        empty = ActivityAggregate.empty()

        if kind == EmployeeType.CARWASH:
            cars = _count(data.get("totalCars"), "totalCars")
            return _activity(one_wash=cars), ManualInputs()

        if kind == EmployeeType.MALL:
            activity = _activity(
                one_wash=_count(data.get("carWashCount"), "carWashCount"),
                subscriptions=_count(data.get("monthlyVehicles"), "monthlyVehicles"),
            )
            return activity, ManualInputs.from_dict({"presentDays": data.get("daysWorked")})

        if kind in (EmployeeType.CAMP, EmployeeType.CONSTRUCTION_CAMP):
            manual = ManualInputs.from_dict(
                {
                    "presentDays": data.get("daysPresent"),
                    "absentDays": data.get("absentDays"),
                    "otHours": data.get("otHours"),
                }
            )
            return empty, manual

        return empty, ManualInputs.from_dict({"totalHours": data.get("totalHours")})


def _count(raw: Any, field_name: str) -> int:
    if raw is None or raw == "":
        return 0
    value = to_decimal(raw, field_name)
    if value < 0 or value != value.to_integral_value():
        raise ValidationError(f"{field_name} must be a non-negative whole number")
    return int(value)


def _activity(*, one_wash: int = 0, subscriptions: int = 0) -> ActivityAggregate:
    base = ActivityAggregate.empty()
    return ActivityAggregate(
        one_wash_count=one_wash,
        subscription_count=subscriptions,
        days_in_month=base.days_in_month,
        daily_counts=base.daily_counts,
    )
