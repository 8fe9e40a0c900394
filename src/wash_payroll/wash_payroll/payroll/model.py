from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import ZERO, to_decimal
from ..core.exceptions import ValidationError

# snake_case attribute -> JSON key
_INPUT_KEYS = {
    "present_days": "presentDays",
    "absent_days": "absentDays",
    "sick_leave_days": "sickLeaveDays",
    "no_duty_days": "noDutyDays",
    "ot_hours": "otHours",
    "total_hours": "totalHours",
    "position": "position",
    "sim_bill_amount": "simBillAmount",
    "advance": "advance",
    "other_deduction": "otherDeduction",
    "last_month_balance": "lastMonthBalance",
}
_DAY_FIELDS = {"present_days", "absent_days", "sick_leave_days", "no_duty_days"}
_TEXT_FIELDS = {"position"}


@dataclass(frozen=True)
class ManualInputs:
    """Values an admin types into the slip form. None means "not supplied"."""

    present_days: Optional[int] = None
    absent_days: Optional[int] = None
    sick_leave_days: Optional[int] = None
    no_duty_days: Optional[int] = None
    ot_hours: Optional[Decimal] = None
    total_hours: Optional[Decimal] = None
    position: Optional[str] = None
    sim_bill_amount: Optional[Decimal] = None
    advance: Optional[Decimal] = None
    other_deduction: Optional[Decimal] = None
    last_month_balance: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ManualInputs":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValidationError("manualInputs must be an object")

        values: dict[str, Any] = {}
        for attr, key in _INPUT_KEYS.items():
            raw = data.get(key)
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                continue
            if attr in _TEXT_FIELDS:
                values[attr] = str(raw).strip()
            elif attr in _DAY_FIELDS:
                values[attr] = _days(raw, key)
            else:
                values[attr] = to_decimal(raw, key)
        return cls(**values)

    def to_dict(self) -> dict:
        """Only the supplied values, JSON-ready."""

        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            out[_INPUT_KEYS[f.name]] = float(value) if isinstance(value, Decimal) else value
        return out


def _days(raw: Any, key: str) -> int:
    value = to_decimal(raw, key)
    if value != value.to_integral_value() or value < 0:
        raise ValidationError(f"{key} must be a non-negative whole number")
    return int(value)


@dataclass(frozen=True)
class Earnings:
    basic: Decimal = ZERO
    incentive: Decimal = ZERO
    allowance: Decimal = ZERO
    overtime: Decimal = ZERO
    breakdown: dict = field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        return self.basic + self.incentive + self.allowance + self.overtime


@dataclass(frozen=True)
class Deductions:
    sim: Decimal = ZERO
    advance: Decimal = ZERO
    other: Decimal = ZERO
    last_month_balance: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.sim + self.advance + self.other + self.last_month_balance


@dataclass(frozen=True)
class SalaryComputation:
    """Unrounded result of one salary calculation."""

    employee_type: str
    variant: str
    earnings: Earnings
    deductions: Deductions
    present_days: int
    absent_days: int
    sick_leave_days: int
    no_duty_days: int

    @property
    def total_earnings(self) -> Decimal:
        return self.earnings.total

    @property
    def total_deductions(self) -> Decimal:
        return self.deductions.total

    @property
    def closing_balance(self) -> Decimal:
        return self.total_earnings - self.total_deductions
