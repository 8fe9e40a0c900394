from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ActivityAggregate:
    """Read-model: one worker's wash activity for one calendar month.

    `daily_counts` maps every day of the month (1-based) to the number of washes
    done that day, zero-filled.
    """

    one_wash_count: int
    subscription_count: int
    days_in_month: int
    daily_counts: dict[int, int] = field(default_factory=dict)

    @property
    def total_washes(self) -> int:
        return self.one_wash_count + self.subscription_count

    @property
    def present_days_count(self) -> int:
        return sum(1 for count in self.daily_counts.values() if count > 0)

    @classmethod
    def empty(cls, days_in_month: int = 30) -> "ActivityAggregate":
        return cls(
            one_wash_count=0,
            subscription_count=0,
            days_in_month=days_in_month,
            daily_counts={day: 0 for day in range(1, days_in_month + 1)},
        )
