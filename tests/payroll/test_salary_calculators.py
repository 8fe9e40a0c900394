from __future__ import annotations

from decimal import Decimal

import pytest

from src.wash_payroll.wash_payroll.attendance.model import ActivityAggregate
from src.wash_payroll.wash_payroll.core.enums import DutyShift, EmployeeType
from src.wash_payroll.wash_payroll.core.exceptions import SettingsConfigurationError, UnknownEmployeeTypeError
from src.wash_payroll.wash_payroll.payroll.calculator.camp_calculator import CampCalculator
from src.wash_payroll.wash_payroll.payroll.calculator.carwash_calculator import CarWashCalculator
from src.wash_payroll.wash_payroll.payroll.calculator.mall_calculator import MallCalculator
from src.wash_payroll.wash_payroll.payroll.calculator.outside_calculator import OutsideCampCalculator
from src.wash_payroll.wash_payroll.payroll.factory import SalaryCalculatorFactory
from src.wash_payroll.wash_payroll.payroll.model import ManualInputs
from src.wash_payroll.wash_payroll.settings.defaults import default_settings
from src.wash_payroll.wash_payroll.workers.model import Worker


def _activity(one_wash=0, subscriptions=0):
    return ActivityAggregate(one_wash_count=one_wash, subscription_count=subscriptions, days_in_month=30)


def test_carwash_incentive_threshold_is_inclusive_on_high_side():
    settings = default_settings()
    calc = CarWashCalculator(DutyShift.NIGHT)

    at_threshold = calc.earnings(settings=settings, activity=_activity(1000), manual=ManualInputs())
    below = calc.earnings(settings=settings, activity=_activity(999), manual=ManualInputs())

    assert at_threshold.incentive == Decimal("200")
    assert below.incentive == Decimal("100")
    assert at_threshold.basic == Decimal("1350.00")


def test_carwash_counts_both_wash_sources():
    settings = default_settings()
    calc = CarWashCalculator(DutyShift.DAY)

    earnings = calc.earnings(settings=settings, activity=_activity(10, 5), manual=ManualInputs())

    assert earnings.basic == Decimal("21.0")
    assert earnings.breakdown["totalCars"] == 15
    assert calc.variant == "carwash:dayDuty"


def test_duty_is_picked_by_building_substring():
    settings = default_settings()
    factory = SalaryCalculatorFactory()

    day = factory.create("carwash", settings=settings, location="Tower B, Marina Plaza, Dubai")
    night = factory.create("carwash", settings=settings, location="JLT Cluster D")
    nowhere = factory.create("carwash", settings=settings, location=None)

    assert day.shift == DutyShift.DAY
    assert night.shift == DutyShift.NIGHT
    assert nowhere.shift == DutyShift.NIGHT


def test_mall_allowance_is_prorated_on_manual_days():
    settings = default_settings()

    earnings = MallCalculator().earnings(
        settings=settings, activity=_activity(), manual=ManualInputs(present_days=15)
    )

    assert earnings.allowance.quantize(Decimal("0.01")) == Decimal("100.00")


def test_mall_defaults_to_full_month():
    settings = default_settings()

    earnings = MallCalculator().earnings(settings=settings, activity=_activity(10, 40), manual=ManualInputs())

    assert earnings.basic == Decimal("84.00")
    assert earnings.allowance.quantize(Decimal("0.01")) == Decimal("200.00")
    assert earnings.breakdown["daysWorked"] == 30


def test_camp_full_attendance_incentive_requires_zero_absences():
    settings = default_settings()
    calc = CampCalculator("helper")

    awarded = calc.earnings(
        settings=settings, activity=_activity(), manual=ManualInputs(present_days=30, absent_days=0)
    )
    withheld = calc.earnings(
        settings=settings, activity=_activity(), manual=ManualInputs(present_days=30, absent_days=1)
    )

    assert awarded.incentive == Decimal("100")
    assert withheld.incentive == Decimal("0")


def test_camp_basic_and_overtime():
    settings = default_settings()
    calc = CampCalculator("mason")

    derived = calc.earnings(settings=settings, activity=_activity(), manual=ManualInputs(present_days=15))
    explicit = calc.earnings(
        settings=settings, activity=_activity(), manual=ManualInputs(present_days=15, ot_hours=Decimal("12"))
    )

    assert derived.basic == Decimal("600")
    # (10 - 8) hours * 15 days * 4.5
    assert derived.overtime == Decimal("135.0")
    assert explicit.overtime == Decimal("54.0")
    assert calc.present_days(_activity(5), ManualInputs()) == 0


def test_camp_without_tariff_for_sub_role_fails():
    with pytest.raises(SettingsConfigurationError):
        CampCalculator("welder").earnings(settings=default_settings(), activity=_activity(), manual=ManualInputs())


def test_outside_camp_hourly_pay():
    settings = default_settings()

    earnings = OutsideCampCalculator("carpenter").earnings(
        settings=settings, activity=_activity(), manual=ManualInputs(total_hours=Decimal("200"))
    )

    assert earnings.basic == Decimal("1100.0")
    assert earnings.incentive == Decimal("0")

    with pytest.raises(SettingsConfigurationError):
        OutsideCampCalculator("pilot").earnings(settings=settings, activity=_activity(), manual=ManualInputs())


def test_factory_unknown_role_strict_and_lenient():
    settings = default_settings()
    factory = SalaryCalculatorFactory()

    with pytest.raises(UnknownEmployeeTypeError):
        factory.create("driver", settings=settings)

    worker = Worker(worker_id=1, name="A", role="driver", location="JLT")
    calc = factory.for_worker(worker, settings=settings, manual=ManualInputs())
    assert calc.employee_type == EmployeeType.CARWASH


def test_factory_routes_camp_and_outside_variants():
    settings = default_settings()
    factory = SalaryCalculatorFactory()

    assert factory.create("constructionCamp", settings=settings).variant == "camp:helper"
    assert factory.create("camp", settings=settings, sub_role="mason").variant == "camp:mason"
    assert factory.create("outsideCamp", settings=settings).variant == "outsideCamp:helper"
    assert factory.create("outsideCamp", settings=settings, position="painter").variant == "outsideCamp:painter"
    assert factory.create("carWashDay", settings=settings).employee_type == EmployeeType.CARWASH


def _split_carwash_settings():
    return default_settings().with_category(
        "carWash",
        {
            "dayDuty": {
                "applicableBuildings": ["Ubora Towers"],
                "ratePerCar": 2.0,
                "incentiveThreshold": 500,
                "incentiveLow": 50,
                "incentiveHigh": 300,
            },
            "nightDuty": {
                "applicableBuildings": [],
                "ratePerCar": 1.0,
                "incentiveThreshold": 800,
                "incentiveLow": 20,
                "incentiveHigh": 120,
            },
        },
        modified_by="Admin",
    )


def test_worker_location_selects_both_rate_and_incentive_tier():
    settings = _split_carwash_settings()
    factory = SalaryCalculatorFactory()
    day_worker = Worker(worker_id=7, name="Day Washer", role="carwash", location="Block 2, Ubora Towers")
    night_worker = Worker(worker_id=8, name="Night Washer", role="carwash", location="JLT Cluster D")

    day = factory.for_worker(day_worker, settings=settings, manual=ManualInputs()).earnings(
        settings=settings, activity=_activity(600), manual=ManualInputs()
    )
    night = factory.for_worker(night_worker, settings=settings, manual=ManualInputs()).earnings(
        settings=settings, activity=_activity(600), manual=ManualInputs()
    )

    assert day.basic == Decimal("1200")
    assert day.incentive == Decimal("300")
    assert day.breakdown["duty"] == "dayDuty"
    assert night.basic == Decimal("600")
    assert night.incentive == Decimal("20")
    assert night.breakdown["duty"] == "nightDuty"


def test_outside_role_uses_outside_camp_rules():
    settings = default_settings()
    factory = SalaryCalculatorFactory()
    worker = Worker(worker_id=9, name="Outside Helper", role="outside", location="Al Quoz")

    assert isinstance(factory.for_worker(worker, settings=settings, manual=ManualInputs()), OutsideCampCalculator)
    assert isinstance(factory.create("outside", settings=settings), OutsideCampCalculator)
    assert EmployeeType.parse("outside") == EmployeeType.OUTSIDE_CAMP
