from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..common.money import ZERO, round2
from ..settings.model import EtisalatTariff


def sim_deduction(tariff: EtisalatTariff, bill_amount: Optional[Decimal]) -> Decimal:
    """Employee share of the SIM bill: the base deduction plus any amount over the cap."""

    bill = bill_amount if bill_amount is not None else ZERO
    deduction = tariff.employee_base_deduction
    if bill > tariff.monthly_bill_cap:
        deduction += bill - tariff.monthly_bill_cap
    return deduction


def carry_forward_remainder(previous_closing: Optional[Decimal]) -> Decimal:
    """Part of last month's net payable that rolls into this month's deductions.

    Only a negative balance carries, and only its fractional part, sign kept:
    -4.37 -> -0.37, 120.00 -> 0.
    """

    if previous_closing is None or previous_closing >= ZERO:
        return round2(ZERO)
    # Decimal % keeps the sign of the dividend.
    return round2(Decimal(previous_closing) % 1)
