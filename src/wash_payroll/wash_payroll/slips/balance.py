from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from ..common.datetime_utils import previous_month
from ..payroll.deductions import carry_forward_remainder
from .repository import SalarySlipRepository


class BalanceResolver(Protocol):
    def resolve(self, worker_id: int, month: int, year: int) -> Decimal:
        """Default `lastMonthBalance` for the slip of (worker, month, year)."""

        raise NotImplementedError


class PriorBalanceResolver(BalanceResolver):
    """Reads the preceding month's stored slip and carries its negative remainder."""

    def __init__(self, slips: SalarySlipRepository):
        self._slips = slips

    def resolve(self, worker_id: int, month: int, year: int) -> Decimal:
        prev_month, prev_year = previous_month(month, year)
        closing = self._slips.get_closing_balance(worker_id=int(worker_id), month=prev_month, year=prev_year)
        return carry_forward_remainder(closing)
