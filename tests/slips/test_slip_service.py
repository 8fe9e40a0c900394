from __future__ import annotations

from decimal import Decimal

import pytest

from src.wash_payroll.wash_payroll.core.enums import SlipStatus
from src.wash_payroll.wash_payroll.core.exceptions import NotFoundError, ValidationError
from src.wash_payroll.wash_payroll.slips.model import MONEY_FIELDS


def test_mall_slip_end_to_end(slip_service, slips_repo):
    slip = slip_service.save_slip(1, 0, 2025, manual_inputs={}, prepared_by="Mariam")

    assert slip.status == SlipStatus.DRAFT
    assert slip.slip_id == 1
    assert slip.employee_type == "mall"
    assert slip.basic_salary == Decimal("84.00")
    assert slip.allowance == Decimal("200.00")
    assert slip.total_earnings == Decimal("284.00")
    assert slip.sim_deduction == Decimal("26.25")
    assert slip.last_month_balance == Decimal("0.00")
    assert slip.total_deductions == Decimal("26.25")
    assert slip.closing_balance == Decimal("257.75")
    assert slip.prepared_by == "Mariam"
    assert slip.settings_version == 1
    assert slip.total_washes == 50
    assert slip.present_days == 2

    payload = slip.to_dict()
    assert payload["basicSalary"] == "84.00"
    assert payload["closingBalance"] == "257.75"
    assert payload["dailyData"]["2"] == 20
    assert payload["employeeCode"] == "MW-001"


def test_preview_is_not_persisted(slip_service, slips_repo):
    slip = slip_service.get_slip(1, 0, 2025)

    assert slip.status == SlipStatus.NEW_PREVIEW
    assert slip.slip_id is None
    assert slips_repo.upserts == 0
    assert slips_repo.rows == {}


def test_stored_slip_is_returned_as_saved(slip_service):
    saved = slip_service.save_slip(1, 0, 2025, manual_inputs={"advance": 50}, status="finalized")

    loaded = slip_service.get_slip(1, 0, 2025)

    assert loaded == saved
    assert loaded.status == SlipStatus.FINALIZED
    assert loaded.advance == Decimal("50.00")


def test_saving_twice_overwrites_single_slip(slip_service, slips_repo):
    first = slip_service.save_slip(1, 0, 2025, manual_inputs={"advance": 10})
    second = slip_service.save_slip(1, 0, 2025, manual_inputs={"advance": 20})

    assert len(slips_repo.rows) == 1
    assert second.slip_id == first.slip_id
    assert second.created_at == first.created_at
    assert second.advance == Decimal("20.00")
    assert second.closing_balance == Decimal("237.75")


def test_negative_closing_carries_into_next_month(slip_service):
    december = slip_service.save_slip(1, 11, 2024, manual_inputs={"advance": "262.12"})
    assert december.closing_balance == Decimal("-4.37")

    january = slip_service.get_slip(1, 0, 2025)

    assert january.last_month_balance == Decimal("-0.37")
    assert january.total_deductions == Decimal("25.88")
    assert january.closing_balance == Decimal("258.12")


def test_manual_last_month_balance_wins_over_carry_forward(slip_service):
    slip_service.save_slip(1, 11, 2024, manual_inputs={"advance": "262.12"})

    january = slip_service.save_slip(1, 0, 2025, manual_inputs={"lastMonthBalance": "15"})

    assert january.last_month_balance == Decimal("15.00")
    assert january.total_deductions == Decimal("41.25")


def test_money_fields_always_carry_two_decimals(slip_service):
    slip = slip_service.save_slip(
        1, 0, 2025, manual_inputs={"advance": "10.005", "simBillAmount": "60.123", "otherDeduction": 3}
    )

    assert slip.advance == Decimal("10.01")
    assert slip.sim_deduction == Decimal("33.87")
    for name in MONEY_FIELDS:
        assert getattr(slip, name).as_tuple().exponent == -2, name


def test_unknown_worker_is_not_found(slip_service):
    with pytest.raises(NotFoundError):
        slip_service.get_slip(99, 0, 2025)


def test_unknown_role_is_paid_as_carwash(slip_service):
    slip = slip_service.get_slip(3, 0, 2025)

    assert slip.employee_type == "carwash"
    assert slip.breakdown["variant"] == "carwash:nightDuty"
    assert slip.incentive == Decimal("100.00")


def test_camp_slip_uses_manual_attendance(slip_service):
    slip = slip_service.save_slip(4, 0, 2025, manual_inputs={"presentDays": 30, "absentDays": 0, "otHours": 20})

    assert slip.basic_salary == Decimal("1200.00")
    assert slip.overtime == Decimal("90.00")
    assert slip.incentive == Decimal("100.00")
    assert slip.present_days == 30


def test_invalid_status_and_month_are_rejected(slip_service):
    with pytest.raises(ValidationError):
        slip_service.save_slip(1, 0, 2025, status="new_preview")

    with pytest.raises(ValidationError):
        slip_service.save_slip(1, 0, 2025, status="paid")

    with pytest.raises(ValidationError):
        slip_service.get_slip(1, 12, 2025)


def test_list_month_returns_saved_slips_by_name(slip_service):
    slip_service.save_slip(2, 0, 2025)
    slip_service.save_slip(1, 0, 2025)
    slip_service.save_slip(1, 1, 2025)

    slips = slip_service.list_month(0, 2025)

    assert [s.employee_name for s in slips] == ["Ahmed Khan", "Ravi Kumar"]


def test_non_finite_amounts_are_rejected_before_storage(slip_service, slips_repo):
    with pytest.raises(ValidationError):
        slip_service.save_slip(1, 0, 2025, manual_inputs={"advance": "NaN"})

    with pytest.raises(ValidationError):
        slip_service.save_slip(4, 0, 2025, manual_inputs={"presentDays": "Infinity"})

    assert slips_repo.rows == {}


def test_out_of_range_year_is_rejected(slip_service, slips_repo):
    with pytest.raises(ValidationError):
        slip_service.get_slip(1, 0, 0)

    with pytest.raises(ValidationError):
        slip_service.save_slip(1, 0, 10000)

    with pytest.raises(ValidationError):
        slip_service.list_month(0, -1)

    assert slips_repo.rows == {}


def test_saving_same_inputs_twice_is_idempotent(slip_service, slips_repo):
    inputs = {"advance": "12.50", "simBillAmount": 60, "otherDeduction": 5}

    first = slip_service.save_slip(1, 0, 2025, manual_inputs=inputs)
    second = slip_service.save_slip(1, 0, 2025, manual_inputs=dict(inputs))

    assert len(slips_repo.rows) == 1
    for name in MONEY_FIELDS:
        assert getattr(second, name) == getattr(first, name), name
    assert second.daily_data == first.daily_data
    assert second.breakdown == first.breakdown
    assert second.manual_inputs == first.manual_inputs
