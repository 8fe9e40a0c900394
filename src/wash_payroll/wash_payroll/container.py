from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLWashActivityRepository
from .attendance.service import AttendanceAggregator
from .core.constants import DEFAULT_BUSINESS_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .payroll.factory import SalaryCalculatorFactory
from .payroll.service import SalaryPreviewService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SalarySettingsService
from .slips.balance import PriorBalanceResolver
from .slips.mysql_slip_repository import MySQLSalarySlipRepository
from .slips.service import SalarySlipService
from .workers.mysql_worker_repository import MySQLWorkerRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    workers_repo: MySQLWorkerRepository
    activity_repo: MySQLWashActivityRepository
    settings_repo: MySQLSettingsRepository
    slips_repo: MySQLSalarySlipRepository

    settings_service: SalarySettingsService
    aggregator: AttendanceAggregator
    preview_service: SalaryPreviewService
    slip_service: SalarySlipService


def build_container(*, db_config: dict, business_timezone: str = DEFAULT_BUSINESS_TIMEZONE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    activity_repo = MySQLWashActivityRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    slips_repo = MySQLSalarySlipRepository(conn)

    factory = SalaryCalculatorFactory()
    settings_service = SalarySettingsService(settings_repo)
    aggregator = AttendanceAggregator(activity_repo, business_timezone=business_timezone)
    preview_service = SalaryPreviewService(settings_service, factory=factory)
    slip_service = SalarySlipService(
        slips_repo,
        workers_repo,
        settings_service,
        aggregator,
        balance_resolver=PriorBalanceResolver(slips_repo),
        factory=factory,
    )

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        activity_repo=activity_repo,
        settings_repo=settings_repo,
        slips_repo=slips_repo,
        settings_service=settings_service,
        aggregator=aggregator,
        preview_service=preview_service,
        slip_service=slip_service,
    )
