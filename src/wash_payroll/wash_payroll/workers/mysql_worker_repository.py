from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Worker
from .repository import WorkerRepository


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, name, employee_code, role, sub_role, location
                FROM workers
                WHERE worker_id=%s AND is_deleted=0
                """,
                (int(worker_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Worker(
                worker_id=int(row["worker_id"]),
                name=row["name"],
                role=row.get("role") or "",
                sub_role=row.get("sub_role"),
                location=row.get("location") or "",
                employee_code=row.get("employee_code"),
            )
