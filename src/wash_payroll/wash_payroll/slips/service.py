from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..attendance.service import AttendanceAggregator
from ..common.datetime_utils import require_month, require_year
from ..core.constants import DEFAULT_PREPARED_BY, DEFAULT_SLIP_LIST_LIMIT
from ..core.enums import SlipStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..payroll.factory import SalaryCalculatorFactory
from ..payroll.model import ManualInputs
from ..payroll.service import compute_salary
from ..settings.service import SalarySettingsService
from ..workers.repository import WorkerRepository
from .balance import BalanceResolver, PriorBalanceResolver
from .model import SalarySlip
from .repository import SalarySlipRepository

logger = logging.getLogger(__name__)

_SAVEABLE_STATUSES = (SlipStatus.DRAFT, SlipStatus.FINALIZED)


class SalarySlipService:
    """Use case: compute, preview and save monthly salary slips.

    Flow: worker -> active settings -> wash activity -> calculator -> manual
    inputs/deductions -> prior balance -> slip. Months are 0-based.
    """

    def __init__(
        self,
        slips: SalarySlipRepository,
        workers: WorkerRepository,
        settings: SalarySettingsService,
        aggregator: AttendanceAggregator,
        *,
        balance_resolver: Optional[BalanceResolver] = None,
        factory: Optional[SalaryCalculatorFactory] = None,
    ):
        self._slips = slips
        self._workers = workers
        self._settings = settings
        self._aggregator = aggregator
        self._balances = balance_resolver or PriorBalanceResolver(slips)
        self._factory = factory or SalaryCalculatorFactory()

    def calculate(
        self,
        worker_id: int,
        month: int,
        year: int,
        manual_inputs: Optional[ManualInputs] = None,
        *,
        status: SlipStatus = SlipStatus.NEW_PREVIEW,
        prepared_by: Optional[str] = None,
    ) -> SalarySlip:
        """Compute a slip without storing it."""

        month = require_month(month)
        year = require_year(year)
        manual = manual_inputs or ManualInputs()

        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise NotFoundError(f"Worker {worker_id} not found")

        settings = self._settings.get_settings()
        activity = self._aggregator.aggregate(worker.worker_id, month, year)

        if manual.last_month_balance is not None:
            last_balance = manual.last_month_balance
        else:
            last_balance = self._balances.resolve(worker.worker_id, month, year)

        calculator = self._factory.for_worker(worker, settings=settings, manual=manual, strict=False)
        computation = compute_salary(
            calculator=calculator,
            settings=settings,
            activity=activity,
            manual=manual,
            last_month_balance=last_balance,
        )

        return SalarySlip.from_computation(
            worker=worker,
            month=month,
            year=year,
            activity=activity,
            computation=computation,
            manual=manual,
            settings_version=settings.version,
            status=status,
            prepared_by=prepared_by,
        )

    def get_slip(self, worker_id: int, month: int, year: int) -> SalarySlip:
        """Stored slip for the key, or an unsaved preview tagged `new_preview`."""

        month = require_month(month)
        year = require_year(year)
        stored = self._slips.get(worker_id=int(worker_id), month=month, year=year)
        if stored is not None:
            return stored
        return self.calculate(worker_id, month, year)

    def save_slip(
        self,
        worker_id: int,
        month: int,
        year: int,
        manual_inputs: Optional[Mapping[str, Any]] = None,
        status: Optional[str] = None,
        prepared_by: Optional[str] = None,
    ) -> SalarySlip:
        """Recompute with `manual_inputs` and overwrite the stored slip for the key."""

        slip_status = self._parse_status(status)
        manual = ManualInputs.from_dict(manual_inputs)

        slip = self.calculate(
            worker_id,
            month,
            year,
            manual,
            status=slip_status,
            prepared_by=prepared_by or DEFAULT_PREPARED_BY,
        )
        saved = self._slips.upsert(slip)

        logger.info(
            "Saved %s salary slip worker=%s period=%s/%s closing=%s by %s",
            saved.status.value,
            saved.worker_id,
            saved.month + 1,
            saved.year,
            saved.closing_balance,
            saved.prepared_by,
        )
        return saved

    def list_month(self, month: int, year: int, *, limit: int = DEFAULT_SLIP_LIST_LIMIT) -> Sequence[SalarySlip]:
        return self._slips.list_for_month(month=require_month(month), year=require_year(year), limit=int(limit))

    @staticmethod
    def _parse_status(status: Optional[str]) -> SlipStatus:
        if not status:
            return SlipStatus.DRAFT
        try:
            parsed = SlipStatus(status)
        except ValueError:
            parsed = None
        if parsed not in _SAVEABLE_STATUSES:
            raise ValidationError("status must be 'draft' or 'finalized'")
        return parsed
