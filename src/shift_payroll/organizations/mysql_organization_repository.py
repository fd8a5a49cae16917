from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Organization, PaySettings, SubmissionPolicy
from .repository import OrganizationRepository
from .service import pay_settings_from_mapping, pay_settings_to_mapping, submission_policy_from_mapping

_SETTINGS_COLUMNS = (
    "default_hourly_wage",
    "night_premium_enabled",
    "night_premium_rate",
    "night_start",
    "night_end",
    "overtime_premium_enabled",
    "overtime_premium_rate",
    "overtime_daily_threshold_minutes",
    "holiday_premium_enabled",
    "holiday_premium_rate",
    "holiday_includes_weekend",
    "transport_allowance_enabled",
    "transport_allowance_per_shift",
    "shift_submission_enforced",
    "shift_submission_min_days_before",
)


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT organization_id, name, {", ".join(_SETTINGS_COLUMNS)}
                FROM organizations
                WHERE organization_id=%s
                """,
                (organization_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            # NULL columns fall back to the documented defaults here, before any payroll runs.
            return Organization(
                organization_id=int(r["organization_id"]),
                name=r["name"],
                pay_settings=pay_settings_from_mapping(r),
                submission=submission_policy_from_mapping(r),
            )

    def update_settings(
        self,
        *,
        organization_id: int,
        pay_settings: PaySettings,
        submission: SubmissionPolicy,
    ) -> bool:
        values = pay_settings_to_mapping(pay_settings)
        values["shift_submission_enforced"] = submission.enforced
        values["shift_submission_min_days_before"] = submission.min_days_before

        assignments = ", ".join(f"{col}=%s" for col in _SETTINGS_COLUMNS)
        params = tuple(values[col] for col in _SETTINGS_COLUMNS) + (organization_id,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE organizations SET {assignments} WHERE organization_id=%s", params)
            return cur.rowcount > 0
