from __future__ import annotations

from decimal import Decimal

from src.wash_payroll.wash_payroll.payroll.deductions import carry_forward_remainder, sim_deduction
from src.wash_payroll.wash_payroll.settings.defaults import default_settings
from src.wash_payroll.wash_payroll.slips.balance import PriorBalanceResolver


class FakeClosingBalances:
    def __init__(self, balances):
        self.balances = balances
        self.asked = []

    def get_closing_balance(self, *, worker_id, month, year):
        self.asked.append((worker_id, month, year))
        return self.balances.get((worker_id, month, year))


def test_negative_balance_carries_fractional_part_with_sign():
    assert carry_forward_remainder(Decimal("-4.37")) == Decimal("-0.37")
    assert carry_forward_remainder(Decimal("-0.05")) == Decimal("-0.05")
    assert carry_forward_remainder(Decimal("-12.00")) == Decimal("0.00")


def test_positive_or_missing_balance_does_not_carry():
    assert carry_forward_remainder(Decimal("120.00")) == Decimal("0")
    assert carry_forward_remainder(None) == Decimal("0")


def test_resolver_reads_previous_month_across_year_boundary():
    repo = FakeClosingBalances({(3, 11, 2024): Decimal("-4.37")})

    resolved = PriorBalanceResolver(repo).resolve(3, 0, 2025)

    assert repo.asked == [(3, 11, 2024)]
    assert resolved == Decimal("-0.37")


def test_resolver_without_previous_slip_is_zero():
    assert PriorBalanceResolver(FakeClosingBalances({})).resolve(3, 5, 2025) == Decimal("0")


def test_sim_deduction_adds_overage_above_cap():
    tariff = default_settings().etisalat

    assert sim_deduction(tariff, Decimal("60")) == Decimal("33.75")
    assert sim_deduction(tariff, Decimal("52.5")) == Decimal("26.25")
    assert sim_deduction(tariff, None) == Decimal("26.25")
