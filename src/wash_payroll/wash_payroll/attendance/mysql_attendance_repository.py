from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import JobStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import WashActivityRepository


class MySQLWashActivityRepository(WashActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_onewash_times(self, *, worker_id: int, start: datetime, end: datetime) -> Sequence[datetime]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT created_at
                FROM onewash
                WHERE worker_id=%s AND is_deleted=0 AND created_at BETWEEN %s AND %s
                ORDER BY created_at
                """,
                (int(worker_id), start, end),
            )
            return [r["created_at"] for r in fetchall(cur) if r.get("created_at")]

    def list_completed_job_times(self, *, worker_id: int, start: datetime, end: datetime) -> Sequence[datetime]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT completed_date
                FROM jobs
                WHERE worker_id=%s
                  AND is_deleted=0
                  AND status=%s
                  AND completed_date BETWEEN %s AND %s
                ORDER BY completed_date
                """,
                (int(worker_id), JobStatus.COMPLETED.value, start, end),
            )
            return [r["completed_date"] for r in fetchall(cur) if r.get("completed_date")]
