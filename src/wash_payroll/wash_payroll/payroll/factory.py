from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_CAMP_ROLE, DEFAULT_OUTSIDE_POSITION
from ..core.enums import EmployeeType
from ..core.exceptions import UnknownEmployeeTypeError
from ..settings.model import SalarySettings
from ..workers.model import Worker
from .calculator.base import SalaryCalculator
from .calculator.camp_calculator import CampCalculator
from .calculator.carwash_calculator import CarWashCalculator
from .calculator.mall_calculator import MallCalculator
from .calculator.outside_calculator import OutsideCampCalculator
from .model import ManualInputs

logger = logging.getLogger(__name__)


@dataclass
class SalaryCalculatorFactory:
    """Factory Pattern: pick the calculator variant for an employee.

    With `strict=True` an unknown employee type raises UnknownEmployeeTypeError;
    otherwise it is paid as residential car wash staff.
    """

    def create(
        self,
        employee_type: Optional[str],
        *,
        settings: SalarySettings,
        location: Optional[str] = None,
        sub_role: Optional[str] = None,
        position: Optional[str] = None,
        strict: bool = True,
    ) -> SalaryCalculator:
        kind = EmployeeType.parse(employee_type)

        if kind is None:
            if strict:
                raise UnknownEmployeeTypeError(f"Unknown employee type: {employee_type}")
            logger.warning("Unknown employee type %r, falling back to carwash rules", employee_type)
            kind = EmployeeType.CARWASH

        if kind == EmployeeType.CARWASH:
            return CarWashCalculator(settings.car_wash.shift_for_location(location))
        if kind == EmployeeType.MALL:
            return MallCalculator()
        if kind in (EmployeeType.CAMP, EmployeeType.CONSTRUCTION_CAMP):
            return CampCalculator(sub_role or DEFAULT_CAMP_ROLE)
        if kind == EmployeeType.OUTSIDE_CAMP:
            return OutsideCampCalculator(position or sub_role or DEFAULT_OUTSIDE_POSITION)

        raise UnknownEmployeeTypeError(f"Unknown employee type: {employee_type}")

    def for_worker(
        self,
        worker: Worker,
        *,
        settings: SalarySettings,
        manual: ManualInputs,
        strict: bool = False,
    ) -> SalaryCalculator:
        return self.create(
            worker.role,
            settings=settings,
            location=worker.location,
            sub_role=worker.sub_role,
            position=manual.position,
            strict=strict,
        )
