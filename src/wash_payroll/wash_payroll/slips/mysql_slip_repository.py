from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..common.money import round2, to_decimal
from ..core.enums import SlipStatus
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import MONEY_FIELDS, SalarySlip
from .repository import SalarySlipRepository

_KEY_COLUMNS = ("worker_id", "month", "year")
_DATA_COLUMNS = (
    "employee_name",
    "employee_code",
    "employee_type",
    "daily_data",
    "days_in_month",
    "one_wash_count",
    "subscription_count",
    "total_washes",
    "present_days",
    "absent_days",
    "sick_leave_days",
    "no_duty_days",
    *MONEY_FIELDS,
    "breakdown",
    "manual_inputs",
    "settings_version",
    "status",
    "prepared_by",
)
_JSON_COLUMNS = {"daily_data", "breakdown", "manual_inputs"}
_SELECT = "slip_id, " + ", ".join(_KEY_COLUMNS + _DATA_COLUMNS) + ", created_at, updated_at"


def _column_value(slip: SalarySlip, column: str) -> Any:
    value = getattr(slip, column)
    if column in _JSON_COLUMNS:
        if column == "daily_data":
            value = {str(day): count for day, count in sorted(value.items())}
        return dump_json(value)
    if column == "status":
        return value.value
    return value


def _to_slip(row: Dict[str, Any]) -> SalarySlip:
    daily = load_json(row["daily_data"]) or {}
    money = {name: round2(to_decimal(row[name], name)) for name in MONEY_FIELDS}
    return SalarySlip(
        slip_id=int(row["slip_id"]),
        worker_id=int(row["worker_id"]),
        month=int(row["month"]),
        year=int(row["year"]),
        employee_name=row["employee_name"],
        employee_code=row["employee_code"],
        employee_type=row["employee_type"],
        days_in_month=int(row["days_in_month"]),
        one_wash_count=int(row["one_wash_count"]),
        subscription_count=int(row["subscription_count"]),
        total_washes=int(row["total_washes"]),
        present_days=int(row["present_days"]),
        absent_days=int(row["absent_days"]),
        sick_leave_days=int(row["sick_leave_days"]),
        no_duty_days=int(row["no_duty_days"]),
        status=SlipStatus(row["status"]),
        daily_data={int(day): int(count) for day, count in daily.items()},
        breakdown=load_json(row["breakdown"]) or {},
        manual_inputs=load_json(row["manual_inputs"]) or {},
        settings_version=row.get("settings_version"),
        prepared_by=row.get("prepared_by"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        **money,
    )


class MySQLSalarySlipRepository(SalarySlipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, worker_id: int, month: int, year: int) -> Optional[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, worker_id=worker_id, month=month, year=year)

    def get_closing_balance(self, *, worker_id: int, month: int, year: int) -> Optional[Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT closing_balance
                FROM salary_slips
                WHERE worker_id=%s AND month=%s AND year=%s
                """,
                (int(worker_id), int(month), int(year)),
            )
            r = fetchone(cur)
            if not r or r.get("closing_balance") is None:
                return None
            return to_decimal(r["closing_balance"], "closing_balance")

    def upsert(self, slip: SalarySlip) -> SalarySlip:
        columns = _KEY_COLUMNS + _DATA_COLUMNS
        placeholders = ", ".join(["%s"] * len(columns))
        updates = ", ".join(f"{c}=VALUES({c})" for c in _DATA_COLUMNS)
        params = tuple(_column_value(slip, c) for c in columns)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO salary_slips({", ".join(columns)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                params,
            )
            stored = self._select_one(cur, worker_id=slip.worker_id, month=slip.month, year=slip.year)
            if stored is None:
                raise StorageError("Salary slip was not readable after upsert")
            return stored

    def list_for_month(self, *, month: int, year: int, limit: int) -> Sequence[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SELECT}
                FROM salary_slips
                WHERE month=%s AND year=%s
                ORDER BY employee_name ASC, worker_id ASC
                LIMIT %s
                """,
                (int(month), int(year), int(limit)),
            )
            return [_to_slip(r) for r in fetchall(cur)]

    def _select_one(self, cur, *, worker_id: int, month: int, year: int) -> Optional[SalarySlip]:
        cur.execute(
            f"""
            SELECT {_SELECT}
            FROM salary_slips
            WHERE worker_id=%s AND month=%s AND year=%s
            """,
            (int(worker_id), int(month), int(year)),
        )
        r = fetchone(cur)
        return _to_slip(r) if r else None
