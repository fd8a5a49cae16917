from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import month_start as first_of_month
from ..common.datetime_utils import next_month_start
from ..core.enums import ShiftStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, optional_decimal
from .model import ShiftRecord
from .repository import ShiftRepository

_SELECT = """
    SELECT shift_id, organization_id, user_id, work_date, start_time, end_time, hourly_wage,
           note, status, approved_by, approved_at, reject_reason
    FROM shifts
"""


def _to_shift(r: dict) -> ShiftRecord:
    return ShiftRecord(
        shift_id=int(r["shift_id"]),
        organization_id=int(r["organization_id"]),
        employee_id=int(r["user_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        status=ShiftStatus(r.get("status") or ShiftStatus.PENDING.value),
        hourly_wage=optional_decimal(r.get("hourly_wage")),
        note=r.get("note") or "",
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        approved_at=r.get("approved_at"),
        reject_reason=r.get("reject_reason"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        hourly_wage: Optional[Decimal],
        note: str = "",
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts (organization_id, user_id, work_date, start_time, end_time, hourly_wage, note, status)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    organization_id,
                    employee_id,
                    work_date,
                    start_time,
                    end_time,
                    hourly_wage,
                    note,
                    ShiftStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, shift_id: int) -> Optional[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE shift_id=%s", (shift_id,))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def list_for_month(
        self,
        *,
        organization_id: int,
        month_start: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[ShiftRecord]:
        start = first_of_month(month_start)
        sql = _SELECT + " WHERE organization_id=%s AND work_date >= %s AND work_date < %s"
        params: list = [organization_id, start, next_month_start(start)]
        if employee_id is not None:
            sql += " AND user_id=%s"
            params.append(employee_id)
        sql += " ORDER BY work_date, start_time, shift_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_shift(r) for r in fetchall(cur)]

    def list_for_employee_on_date(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
    ) -> Sequence[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE organization_id=%s AND user_id=%s AND work_date=%s ORDER BY start_time",
                (organization_id, employee_id, work_date),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def update_content(
        self,
        *,
        shift_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        note: str = "",
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET work_date=%s, start_time=%s, end_time=%s, note=%s
                WHERE shift_id=%s AND status=%s
                """,
                (work_date, start_time, end_time, note, shift_id, ShiftStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (shift_id,))
            return cur.rowcount > 0

    def set_status(
        self,
        *,
        shift_id: int,
        status: ShiftStatus,
        approved_by: Optional[int],
        approved_at: Optional[datetime],
        reject_reason: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET status=%s, approved_by=%s, approved_at=%s, reject_reason=%s
                WHERE shift_id=%s
                """,
                (status.value, approved_by, approved_at, reject_reason, shift_id),
            )
            return cur.rowcount > 0
