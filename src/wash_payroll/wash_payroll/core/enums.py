from __future__ import annotations

from enum import Enum
from typing import Optional


class EmployeeType(str, Enum):
    """Employee classes that have their own salary rules."""

    CARWASH = "carwash"
    MALL = "mall"
    CAMP = "camp"
    CONSTRUCTION_CAMP = "constructionCamp"
    OUTSIDE_CAMP = "outsideCamp"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["EmployeeType"]:
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return _ALIASES.get(value)


# Names used by the admin calculator screen.
_ALIASES = {
    "carWash": EmployeeType.CARWASH,
    "carWashDay": EmployeeType.CARWASH,
    "carWashNight": EmployeeType.CARWASH,
    "outside": EmployeeType.OUTSIDE_CAMP,
}


class DutyShift(str, Enum):
    DAY = "dayDuty"
    NIGHT = "nightDuty"


class SlipStatus(str, Enum):
    """Lifecycle of a salary slip. NEW_PREVIEW is never persisted."""

    DRAFT = "draft"
    FINALIZED = "finalized"
    NEW_PREVIEW = "new_preview"


class SettingsCategory(str, Enum):
    CAR_WASH = "carWash"
    ETISALAT = "etisalat"
    MALL = "mall"
    CAMP = "camp"
    OUTSIDE = "outside"


class JobStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
