from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..attendance.model import ActivityAggregate
from ..common.money import round2
from ..core.enums import SlipStatus
from ..payroll.model import ManualInputs, SalaryComputation
from ..workers.model import Worker

# Money fields in storage/JSON order.
MONEY_FIELDS = (
    "basic_salary",
    "incentive",
    "allowance",
    "overtime",
    "total_earnings",
    "sim_deduction",
    "advance",
    "other_deduction",
    "last_month_balance",
    "total_deductions",
    "closing_balance",
)


@dataclass(frozen=True)
class SalarySlip:
    """Domain entity: computed payroll snapshot for one worker and month.

    Every money field carries exactly two decimal places. `slip_id` is None for
    previews that were never saved.
    """

    worker_id: int
    month: int
    year: int
    employee_name: str
    employee_code: str
    employee_type: str
    days_in_month: int
    one_wash_count: int
    subscription_count: int
    total_washes: int
    present_days: int
    absent_days: int
    sick_leave_days: int
    no_duty_days: int
    basic_salary: Decimal
    incentive: Decimal
    allowance: Decimal
    overtime: Decimal
    total_earnings: Decimal
    sim_deduction: Decimal
    advance: Decimal
    other_deduction: Decimal
    last_month_balance: Decimal
    total_deductions: Decimal
    closing_balance: Decimal
    status: SlipStatus
    daily_data: dict[int, int] = field(default_factory=dict)
    breakdown: dict = field(default_factory=dict)
    manual_inputs: dict = field(default_factory=dict)
    settings_version: Optional[int] = None
    prepared_by: Optional[str] = None
    slip_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_computation(
        cls,
        *,
        worker: Worker,
        month: int,
        year: int,
        activity: ActivityAggregate,
        computation: SalaryComputation,
        manual: ManualInputs,
        settings_version: Optional[int],
        status: SlipStatus,
        prepared_by: Optional[str] = None,
    ) -> "SalarySlip":
        earnings = computation.earnings
        deductions = computation.deductions
        breakdown = dict(earnings.breakdown)
        breakdown["variant"] = computation.variant

        return cls(
            worker_id=int(worker.worker_id),
            month=int(month),
            year=int(year),
            employee_name=worker.name,
            employee_code=worker.employee_code or "N/A",
            employee_type=computation.employee_type,
            days_in_month=activity.days_in_month,
            one_wash_count=activity.one_wash_count,
            subscription_count=activity.subscription_count,
            total_washes=activity.total_washes,
            present_days=computation.present_days,
            absent_days=computation.absent_days,
            sick_leave_days=computation.sick_leave_days,
            no_duty_days=computation.no_duty_days,
            basic_salary=round2(earnings.basic),
            incentive=round2(earnings.incentive),
            allowance=round2(earnings.allowance),
            overtime=round2(earnings.overtime),
            total_earnings=round2(computation.total_earnings),
            sim_deduction=round2(deductions.sim),
            advance=round2(deductions.advance),
            other_deduction=round2(deductions.other),
            last_month_balance=round2(deductions.last_month_balance),
            total_deductions=round2(computation.total_deductions),
            closing_balance=round2(computation.closing_balance),
            status=status,
            daily_data=dict(activity.daily_counts),
            breakdown=breakdown,
            manual_inputs=manual.to_dict(),
            settings_version=settings_version,
            prepared_by=prepared_by,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.slip_id,
            "workerId": self.worker_id,
            "month": self.month,
            "year": self.year,
            "employeeName": self.employee_name,
            "employeeCode": self.employee_code,
            "employeeType": self.employee_type,
            "daysInMonth": self.days_in_month,
            "dailyData": {str(day): count for day, count in sorted(self.daily_data.items())},
            "oneWashCount": self.one_wash_count,
            "subscriptionCount": self.subscription_count,
            "totalWashes": self.total_washes,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "sickLeaveDays": self.sick_leave_days,
            "noDutyDays": self.no_duty_days,
            "basicSalary": str(self.basic_salary),
            "incentive": str(self.incentive),
            "allowance": str(self.allowance),
            "overtime": str(self.overtime),
            "totalEarnings": str(self.total_earnings),
            "simDeduction": str(self.sim_deduction),
            "advance": str(self.advance),
            "otherDeduction": str(self.other_deduction),
            "lastMonthBalance": str(self.last_month_balance),
            "totalDeductions": str(self.total_deductions),
            "closingBalance": str(self.closing_balance),
            "breakdown": self.breakdown,
            "manualInputs": self.manual_inputs,
            "settingsVersion": self.settings_version,
            "status": self.status.value,
            "preparedBy": self.prepared_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
