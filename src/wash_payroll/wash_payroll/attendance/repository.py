from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence


class WashActivityRepository(Protocol):
    """Read access to the two wash logs the payroll counts.

    Both ranges are inclusive naive-UTC datetimes; deleted rows are never returned.
    """

    def list_onewash_times(self, *, worker_id: int, start: datetime, end: datetime) -> Sequence[datetime]:
        """`created_at` of every one-off wash in range."""

        raise NotImplementedError

    def list_completed_job_times(self, *, worker_id: int, start: datetime, end: datetime) -> Sequence[datetime]:
        """`completed_date` of every completed subscription job in range."""

        raise NotImplementedError
