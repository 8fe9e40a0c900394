from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..common.datetime_utils import local_day_of_month, month_window
from ..core.constants import DEFAULT_BUSINESS_TIMEZONE
from .model import ActivityAggregate
from .repository import WashActivityRepository


class AttendanceAggregator:
    """Use case: count a worker's washes per calendar day of a month.

    One-off washes are attributed to the day they were created, subscription jobs
    to the day they were completed, both in the business timezone.
    """

    def __init__(self, activity: WashActivityRepository, *, business_timezone: str = DEFAULT_BUSINESS_TIMEZONE):
        self._activity = activity
        self._tz = business_timezone

    def aggregate(self, worker_id: int, month: int, year: int) -> ActivityAggregate:
        window = month_window(month, year, self._tz)

        onewash_times = self._activity.list_onewash_times(
            worker_id=int(worker_id), start=window.start_utc, end=window.end_utc
        )
        job_times = self._activity.list_completed_job_times(
            worker_id=int(worker_id), start=window.start_utc, end=window.end_utc
        )

        daily = {day: 0 for day in range(1, window.days_in_month + 1)}
        self._count_into(daily, onewash_times)
        self._count_into(daily, job_times)

        return ActivityAggregate(
            one_wash_count=len(onewash_times),
            subscription_count=len(job_times),
            days_in_month=window.days_in_month,
            daily_counts=daily,
        )

    def _count_into(self, daily: dict[int, int], times: Iterable[datetime]) -> None:
        for ts in times:
            day = local_day_of_month(ts, self._tz)
            daily[day] = daily.get(day, 0) + 1
