from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.wash_payroll.wash_payroll.attendance.model import ActivityAggregate
from src.wash_payroll.wash_payroll.payroll.service import SalaryPreviewService
from src.wash_payroll.wash_payroll.settings.service import SalarySettingsService
from src.wash_payroll.wash_payroll.slips.service import SalarySlipService
from src.wash_payroll.wash_payroll.workers.model import Worker


class InMemorySettingsRepo:
    def __init__(self):
        self.versions = []

    def get_active(self):
        active = [s for s in self.versions if s.is_active]
        return active[-1] if active else None

    def activate(self, settings):
        self.versions = [replace(s, is_active=False) for s in self.versions]
        stored = settings.stamped(version=len(self.versions) + 1, created_at=datetime(2025, 1, 1, 8, 0))
        self.versions.append(stored)
        return stored

    def create_if_absent(self, settings):
        return self.get_active() or self.activate(settings)

    def list_versions(self, *, limit):
        return list(reversed(self.versions))[:limit]


class InMemoryWorkers:
    def __init__(self, workers):
        self._by_id = {w.worker_id: w for w in workers}

    def get_by_id(self, worker_id):
        return self._by_id.get(int(worker_id))


class StaticActivity:
    """Stands in for the aggregator: same activity for every month."""

    def __init__(self, by_worker=None):
        self.by_worker = by_worker or {}

    def aggregate(self, worker_id, month, year):
        return self.by_worker.get(worker_id) or ActivityAggregate.empty(31)


class InMemorySlips:
    def __init__(self):
        self.rows = {}
        self.upserts = 0

    def get(self, *, worker_id, month, year):
        return self.rows.get((worker_id, month, year))

    def get_closing_balance(self, *, worker_id, month, year):
        slip = self.rows.get((worker_id, month, year))
        return slip.closing_balance if slip else None

    def upsert(self, slip):
        self.upserts += 1
        key = (slip.worker_id, slip.month, slip.year)
        existing = self.rows.get(key)
        stored = replace(
            slip,
            slip_id=existing.slip_id if existing else len(self.rows) + 1,
            created_at=existing.created_at if existing else datetime(2025, 2, 1, 9, 0),
            updated_at=datetime(2025, 2, 1, 9, self.upserts),
        )
        self.rows[key] = stored
        return stored

    def list_for_month(self, *, month, year, limit):
        found = [s for (_, m, y), s in self.rows.items() if m == month and y == year]
        return sorted(found, key=lambda s: (s.employee_name, s.worker_id))[:limit]


def mall_activity():
    daily = {day: 0 for day in range(1, 32)}
    daily[2] = 20
    daily[3] = 30
    return ActivityAggregate(one_wash_count=10, subscription_count=40, days_in_month=31, daily_counts=daily)


@pytest.fixture
def workers():
    return InMemoryWorkers(
        [
            Worker(worker_id=1, name="Ahmed Khan", role="mall", location="Dubai Mall", employee_code="MW-001"),
            Worker(worker_id=2, name="Ravi Kumar", role="carwash", location="Ubora Towers"),
            Worker(worker_id=3, name="Joseph Mensah", role="valet", location="JLT Cluster D"),
            Worker(worker_id=4, name="Sunil Das", role="constructionCamp", sub_role="mason", location="Camp 4"),
        ]
    )


@pytest.fixture
def activity():
    return StaticActivity({1: mall_activity()})


@pytest.fixture
def slips_repo():
    return InMemorySlips()


@pytest.fixture
def settings_service():
    return SalarySettingsService(InMemorySettingsRepo())


@pytest.fixture
def slip_service(slips_repo, workers, settings_service, activity):
    return SalarySlipService(slips_repo, workers, settings_service, activity)


@pytest.fixture
def preview_service(settings_service):
    return SalaryPreviewService(settings_service)
