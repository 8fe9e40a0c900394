from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import SalarySlip


class SalarySlipRepository(Protocol):
    """Slip store keyed by (worker_id, month, year)."""

    def get(self, *, worker_id: int, month: int, year: int) -> Optional[SalarySlip]:
        raise NotImplementedError

    def get_closing_balance(self, *, worker_id: int, month: int, year: int) -> Optional[Decimal]:
        raise NotImplementedError

    def upsert(self, slip: SalarySlip) -> SalarySlip:
        """Insert or fully overwrite the slip for its key in one statement.

        Returns the stored slip (with slip_id and timestamps).
        """

        raise NotImplementedError

    def list_for_month(self, *, month: int, year: int, limit: int) -> Sequence[SalarySlip]:
        raise NotImplementedError
