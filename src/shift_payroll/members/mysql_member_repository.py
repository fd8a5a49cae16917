from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_decimal
from .model import EmployeeOverride, Member
from .repository import MemberRepository

_SELECT = """
    SELECT m.organization_id, m.user_id, u.display_name, m.hourly_wage, m.transport_allowance_per_shift
    FROM organization_members m
    JOIN users u ON u.user_id = m.user_id
"""


def _to_member(r: dict) -> Member:
    return Member(
        organization_id=int(r["organization_id"]),
        user_id=int(r["user_id"]),
        display_name=r.get("display_name") or str(r["user_id"]),
        override=EmployeeOverride(
            hourly_wage=optional_decimal(r.get("hourly_wage")),
            transport_allowance_per_shift=optional_decimal(r.get("transport_allowance_per_shift")),
        ),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_organization(self, organization_id: int) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.organization_id=%s ORDER BY u.display_name", (organization_id,))
            return [_to_member(r) for r in fetchall(cur)]

    def get(self, *, organization_id: int, user_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.organization_id=%s AND m.user_id=%s", (organization_id, user_id))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def update_override(
        self,
        *,
        organization_id: int,
        user_id: int,
        override: EmployeeOverride,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE organization_members
                SET hourly_wage=%s, transport_allowance_per_shift=%s
                WHERE organization_id=%s AND user_id=%s
                """,
                (override.hourly_wage, override.transport_allowance_per_shift, organization_id, user_id),
            )
            return cur.rowcount > 0
