from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    """Domain entity: a wash/camp worker as the payroll core sees it.

    `role` is kept as the raw stored string; unknown roles are handled by the
    calculator factory, not rejected here.
    """

    worker_id: int
    name: str
    role: str
    sub_role: Optional[str] = None
    location: str = ""
    employee_code: Optional[str] = None
