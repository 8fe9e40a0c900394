from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import SalarySettings
from .repository import SettingsRepository

_COLUMNS = "settings_id, payload, is_active, last_modified_by, created_at"


def _to_settings(row: Dict[str, Any]) -> SalarySettings:
    return SalarySettings.from_payload(
        load_json(row["payload"]),
        version=int(row["settings_id"]),
        is_active=bool(row.get("is_active")),
        last_modified_by=row.get("last_modified_by") or "System",
        created_at=row.get("created_at"),
    )


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self) -> Optional[SalarySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_settings
                WHERE is_active=1
                ORDER BY settings_id DESC
                LIMIT 1
                """
            )
            row = fetchone(cur)
            return _to_settings(row) if row else None

    def activate(self, settings: SalarySettings) -> SalarySettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE salary_settings SET is_active=0 WHERE is_active=1")
            return self._insert(cur, settings)

    def create_if_absent(self, settings: SalarySettings) -> SalarySettings:
        with db_cursor(self._conn_factory) as (_, cur):
            # Locks the active-index range so a concurrent first access waits here.
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_settings
                WHERE is_active=1
                ORDER BY settings_id DESC
                LIMIT 1
                FOR UPDATE
                """
            )
            row = fetchone(cur)
            if row:
                return _to_settings(row)
            return self._insert(cur, settings)

    def list_versions(self, *, limit: int) -> Sequence[SalarySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_settings
                ORDER BY settings_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_settings(r) for r in fetchall(cur)]

    def _insert(self, cur, settings: SalarySettings) -> SalarySettings:
        cur.execute(
            """
            INSERT INTO salary_settings(payload, is_active, last_modified_by)
            VALUES(%s, 1, %s)
            """,
            (dump_json(settings.to_payload()), settings.last_modified_by),
        )
        settings_id = int(cur.lastrowid)
        cur.execute("SELECT created_at FROM salary_settings WHERE settings_id=%s", (settings_id,))
        row = fetchone(cur)
        return settings.stamped(version=settings_id, created_at=row["created_at"] if row else None)
