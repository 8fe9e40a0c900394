from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import to_decimal
from ..core.enums import DutyShift, SettingsCategory
from ..core.exceptions import InvalidCategoryError, ValidationError


def _require(data: Mapping[str, Any], key: str, path: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{path} must be an object")
    if key not in data or data[key] is None:
        raise ValidationError(f"{path}.{key} is required")
    return data[key]


def _dec(data: Mapping[str, Any], key: str, path: str) -> Decimal:
    return to_decimal(_require(data, key, path), f"{path}.{key}")


def _int(data: Mapping[str, Any], key: str, path: str) -> int:
    value = _dec(data, key, path)
    if value != value.to_integral_value():
        raise ValidationError(f"{path}.{key} must be a whole number")
    return int(value)


def _num(value: Decimal) -> float:
    return float(value)


@dataclass(frozen=True)
class DutyTariff:
    rate_per_car: Decimal
    incentive_threshold: int
    incentive_low: Decimal
    incentive_high: Decimal
    applicable_buildings: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> "DutyTariff":
        buildings = data.get("applicableBuildings") if isinstance(data, Mapping) else None
        if buildings is not None and not isinstance(buildings, (list, tuple)):
            raise ValidationError(f"{path}.applicableBuildings must be a list")
        return cls(
            rate_per_car=_dec(data, "ratePerCar", path),
            incentive_threshold=_int(data, "incentiveThreshold", path),
            incentive_low=_dec(data, "incentiveLow", path),
            incentive_high=_dec(data, "incentiveHigh", path),
            applicable_buildings=tuple(str(b).strip() for b in (buildings or []) if str(b).strip()),
        )

    def to_dict(self) -> dict:
        return {
            "applicableBuildings": list(self.applicable_buildings),
            "ratePerCar": _num(self.rate_per_car),
            "incentiveThreshold": self.incentive_threshold,
            "incentiveLow": _num(self.incentive_low),
            "incentiveHigh": _num(self.incentive_high),
        }


@dataclass(frozen=True)
class CarWashTariff:
    day_duty: DutyTariff
    night_duty: DutyTariff

    def for_shift(self, shift: DutyShift) -> DutyTariff:
        return self.day_duty if shift == DutyShift.DAY else self.night_duty

    def shift_for_location(self, location: Optional[str]) -> DutyShift:
        """Day duty when the location mentions any day-duty building (substring match)."""

        location = location or ""
        if any(building in location for building in self.day_duty.applicable_buildings):
            return DutyShift.DAY
        return DutyShift.NIGHT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CarWashTariff":
        path = SettingsCategory.CAR_WASH.value
        return cls(
            day_duty=DutyTariff.from_dict(_require(data, DutyShift.DAY.value, path), f"{path}.dayDuty"),
            night_duty=DutyTariff.from_dict(_require(data, DutyShift.NIGHT.value, path), f"{path}.nightDuty"),
        )

    def to_dict(self) -> dict:
        return {DutyShift.DAY.value: self.day_duty.to_dict(), DutyShift.NIGHT.value: self.night_duty.to_dict()}


@dataclass(frozen=True)
class EtisalatTariff:
    """SIM bill policy: the employee always pays the base share plus any overage."""

    monthly_bill_cap: Decimal
    company_pays: Decimal
    employee_base_deduction: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EtisalatTariff":
        path = SettingsCategory.ETISALAT.value
        return cls(
            monthly_bill_cap=_dec(data, "monthlyBillCap", path),
            company_pays=_dec(data, "companyPays", path),
            employee_base_deduction=_dec(data, "employeeBaseDeduction", path),
        )

    def to_dict(self) -> dict:
        return {
            "monthlyBillCap": _num(self.monthly_bill_cap),
            "companyPays": _num(self.company_pays),
            "employeeBaseDeduction": _num(self.employee_base_deduction),
        }


@dataclass(frozen=True)
class MallTariff:
    one_wash_rate: Decimal
    monthly_rate: Decimal
    fixed_allowance: Decimal
    absent_deduction: Decimal
    sunday_absent_deduction: Decimal
    sick_leave_pay: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MallTariff":
        path = SettingsCategory.MALL.value
        return cls(
            one_wash_rate=_dec(data, "oneWashRate", path),
            monthly_rate=_dec(data, "monthlyRate", path),
            fixed_allowance=_dec(data, "fixedAllowance", path),
            absent_deduction=_dec(data, "absentDeduction", path),
            sunday_absent_deduction=_dec(data, "sundayAbsentDeduction", path),
            sick_leave_pay=_dec(data, "sickLeavePay", path),
        )

    def to_dict(self) -> dict:
        return {
            "oneWashRate": _num(self.one_wash_rate),
            "monthlyRate": _num(self.monthly_rate),
            "fixedAllowance": _num(self.fixed_allowance),
            "absentDeduction": _num(self.absent_deduction),
            "sundayAbsentDeduction": _num(self.sunday_absent_deduction),
            "sickLeavePay": _num(self.sick_leave_pay),
        }


@dataclass(frozen=True)
class CampRoleTariff:
    base_salary: Decimal
    overtime_rate: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> "CampRoleTariff":
        return cls(base_salary=_dec(data, "baseSalary", path), overtime_rate=_dec(data, "overtimeRate", path))

    def to_dict(self) -> dict:
        return {"baseSalary": _num(self.base_salary), "overtimeRate": _num(self.overtime_rate)}


@dataclass(frozen=True)
class CampSettings:
    standard_days: int
    normal_hours: Decimal
    actual_hours: Decimal
    no_duty_pay: Decimal
    holiday_pay: Decimal
    sick_leave_pay: Decimal
    monthly_incentive: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> "CampSettings":
        standard_days = _int(data, "standardDays", path)
        if standard_days <= 0:
            raise ValidationError(f"{path}.standardDays must be positive")
        return cls(
            standard_days=standard_days,
            normal_hours=_dec(data, "normalHours", path),
            actual_hours=_dec(data, "actualHours", path),
            no_duty_pay=_dec(data, "noDutyPay", path),
            holiday_pay=_dec(data, "holidayPay", path),
            sick_leave_pay=_dec(data, "sickLeavePay", path),
            monthly_incentive=_dec(data, "monthlyIncentive", path),
        )

    def to_dict(self) -> dict:
        return {
            "standardDays": self.standard_days,
            "normalHours": _num(self.normal_hours),
            "actualHours": _num(self.actual_hours),
            "noDutyPay": _num(self.no_duty_pay),
            "holidayPay": _num(self.holiday_pay),
            "sickLeavePay": _num(self.sick_leave_pay),
            "monthlyIncentive": _num(self.monthly_incentive),
        }


@dataclass(frozen=True)
class CampTariff:
    """Per sub-role tariffs (`helper`, `mason`, ...) plus shared camp settings."""

    roles: Mapping[str, CampRoleTariff]
    settings: CampSettings

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CampTariff":
        path = SettingsCategory.CAMP.value
        settings = CampSettings.from_dict(_require(data, "settings", path), f"{path}.settings")
        roles = {
            str(name): CampRoleTariff.from_dict(block, f"{path}.{name}")
            for name, block in data.items()
            if name != "settings"
        }
        return cls(roles=roles, settings=settings)

    def to_dict(self) -> dict:
        out = {name: tariff.to_dict() for name, tariff in self.roles.items()}
        out["settings"] = self.settings.to_dict()
        return out


@dataclass(frozen=True)
class SalarySettings:
    """One version of the tariff configuration.

    `version` is None until the settings are persisted.
    """

    car_wash: CarWashTariff
    etisalat: EtisalatTariff
    mall: MallTariff
    camp: CampTariff
    outside: Mapping[str, Decimal] = field(default_factory=dict)
    version: Optional[int] = None
    is_active: bool = True
    last_modified_by: str = "System"
    created_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], **meta: Any) -> "SalarySettings":
        if not isinstance(payload, Mapping):
            raise ValidationError("settings must be an object")

        outside_raw = _require(payload, SettingsCategory.OUTSIDE.value, "settings")
        if not isinstance(outside_raw, Mapping):
            raise ValidationError("settings.outside must be an object")

        return cls(
            car_wash=CarWashTariff.from_dict(_require(payload, SettingsCategory.CAR_WASH.value, "settings")),
            etisalat=EtisalatTariff.from_dict(_require(payload, SettingsCategory.ETISALAT.value, "settings")),
            mall=MallTariff.from_dict(_require(payload, SettingsCategory.MALL.value, "settings")),
            camp=CampTariff.from_dict(_require(payload, SettingsCategory.CAMP.value, "settings")),
            outside={str(k): to_decimal(v, f"outside.{k}") for k, v in outside_raw.items()},
            **meta,
        )

    def to_payload(self) -> dict:
        """Tariff categories only (what gets stored as JSON)."""

        return {
            SettingsCategory.CAR_WASH.value: self.car_wash.to_dict(),
            SettingsCategory.ETISALAT.value: self.etisalat.to_dict(),
            SettingsCategory.MALL.value: self.mall.to_dict(),
            SettingsCategory.CAMP.value: self.camp.to_dict(),
            SettingsCategory.OUTSIDE.value: {k: _num(v) for k, v in self.outside.items()},
        }

    def to_dict(self) -> dict:
        out = self.to_payload()
        out.update(
            {
                "version": self.version,
                "isActive": self.is_active,
                "lastModifiedBy": self.last_modified_by,
                "createdAt": self.created_at.isoformat() if self.created_at else None,
            }
        )
        return out

    def category_dict(self, category: str) -> dict:
        return self.to_payload()[parse_category(category).value]

    def with_category(self, category: str, partial: Mapping[str, Any], *, modified_by: str) -> "SalarySettings":
        """New unsaved version with `partial` merged field-by-field into one category."""

        cat = parse_category(category)
        if not isinstance(partial, Mapping):
            raise ValidationError(f"{cat.value} update must be an object")

        payload = self.to_payload()
        payload[cat.value] = {**payload[cat.value], **partial}
        return SalarySettings.from_payload(payload, last_modified_by=modified_by)

    def stamped(self, *, version: int, created_at: Optional[datetime] = None) -> "SalarySettings":
        return replace(self, version=version, is_active=True, created_at=created_at)


def parse_category(category: str) -> SettingsCategory:
    try:
        return SettingsCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in SettingsCategory)
        raise InvalidCategoryError(f"Unknown settings category '{category}' (expected one of: {allowed})")
