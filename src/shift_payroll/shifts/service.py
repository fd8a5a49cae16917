from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, submission_deadline
from ..common.time_utils import to_minutes
from ..common.validators import require_hhmm
from ..core.enums import Role, ShiftStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from ..organizations.model import Organization
from ..organizations.service import OrganizationSettingsService
from ..payroll.calculator.premiums import resolve_hourly_wage
from .model import ShiftRecord
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    """Shift submission by part-time staff and approval by managers."""

    def __init__(
        self,
        shifts: ShiftRepository,
        members: MemberRepository,
        settings: OrganizationSettingsService,
    ):
        self._shifts = shifts
        self._members = members
        self._settings = settings

    @staticmethod
    def _check_times(start_time: str, end_time: str) -> tuple[str, str]:
        start_time = require_hhmm(start_time, "start_time")
        end_time = require_hhmm(end_time, "end_time")
        if to_minutes(start_time) >= to_minutes(end_time):
            raise ValidationError("End time must be after start time")
        return start_time, end_time

    @staticmethod
    def can_submit_for(org: Organization, work_date: date, now: datetime) -> bool:
        if not org.submission.enforced:
            return True
        return now <= submission_deadline(work_date, org.submission.min_days_before)

    def _check_deadline(self, org: Organization, work_date: date, now: datetime) -> None:
        if not self.can_submit_for(org, work_date, now):
            raise ValidationError("The submission deadline for this date has passed")

    def _check_overlap(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        exclude_shift_id: Optional[int] = None,
    ) -> None:
        start, end = to_minutes(start_time), to_minutes(end_time)
        existing = self._shifts.list_for_employee_on_date(
            organization_id=organization_id,
            employee_id=employee_id,
            work_date=work_date,
        )
        for s in existing:
            if exclude_shift_id is not None and s.shift_id == exclude_shift_id:
                continue
            if not (end <= to_minutes(s.start_time) or start >= to_minutes(s.end_time)):
                raise ValidationError("A shift already exists in this time range")

    def _get_owned_pending(self, *, current_role: Role, employee_id: int, shift_id: int) -> ShiftRecord:
        if current_role != Role.PART_TIME:
            raise AuthorizationError("Only part-time staff can change their shifts")
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift or shift.employee_id != int(employee_id):
            raise NotFoundError("Shift not found")
        if shift.status != ShiftStatus.PENDING:
            raise ValidationError("Approved or rejected shifts cannot be changed")
        return shift

    def submit(
        self,
        *,
        current_role: Role,
        organization_id: int,
        employee_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        note: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        if current_role != Role.PART_TIME:
            raise AuthorizationError("Only part-time staff can submit shifts")

        org = self._settings.get_settings(organization_id)
        member = self._members.get(organization_id=org.organization_id, user_id=int(employee_id))
        if not member:
            raise AuthorizationError("You are not a member of this organization")

        start_time, end_time = self._check_times(start_time, end_time)
        self._check_deadline(org, work_date, now or now_local())
        self._check_overlap(
            organization_id=org.organization_id,
            employee_id=member.user_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
        )

        # The wage in force at submission time is captured on the shift itself.
        wage = resolve_hourly_wage(None, member.override, org.pay_settings)
        shift_id = self._shifts.create(
            organization_id=org.organization_id,
            employee_id=member.user_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            hourly_wage=wage,
            note=(note or "").strip(),
        )
        logger.info("Shift %s submitted by user %s for %s", shift_id, member.user_id, work_date)
        return shift_id

    def update(
        self,
        *,
        current_role: Role,
        employee_id: int,
        shift_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        note: str = "",
        now: Optional[datetime] = None,
    ) -> ShiftRecord:
        shift = self._get_owned_pending(current_role=current_role, employee_id=employee_id, shift_id=shift_id)
        org = self._settings.get_settings(shift.organization_id)

        start_time, end_time = self._check_times(start_time, end_time)
        self._check_overlap(
            organization_id=shift.organization_id,
            employee_id=shift.employee_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            exclude_shift_id=shift.shift_id,
        )
        self._check_deadline(org, work_date, now or now_local())

        note = (note or "").strip()
        ok = self._shifts.update_content(
            shift_id=shift.shift_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            note=note,
        )
        if not ok:
            raise ValidationError("Updating the shift failed")
        return replace(shift, work_date=work_date, start_time=start_time, end_time=end_time, note=note)

    def delete(
        self,
        *,
        current_role: Role,
        employee_id: int,
        shift_id: int,
        now: Optional[datetime] = None,
    ) -> None:
        shift = self._get_owned_pending(current_role=current_role, employee_id=employee_id, shift_id=shift_id)
        org = self._settings.get_settings(shift.organization_id)
        self._check_deadline(org, shift.work_date, now or now_local())

        if not self._shifts.delete(shift.shift_id):
            raise ValidationError("Deleting the shift failed")
        logger.info("Shift %s deleted by user %s", shift.shift_id, shift.employee_id)

    def _get_for_manager(self, *, current_role: Role, organization_id: int, shift_id: int) -> ShiftRecord:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can approve or reject shifts")
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift or shift.organization_id != int(organization_id):
            raise NotFoundError("Shift not found")
        return shift

    def approve(
        self,
        *,
        current_role: Role,
        organization_id: int,
        manager_id: int,
        shift_id: int,
        now: Optional[datetime] = None,
    ) -> ShiftRecord:
        """Mark a shift approved.

        Allowed from any state, including overwriting an earlier rejection.
        """
        shift = self._get_for_manager(current_role=current_role, organization_id=organization_id, shift_id=shift_id)
        approved_at = now or now_local()

        ok = self._shifts.set_status(
            shift_id=shift.shift_id,
            status=ShiftStatus.APPROVED,
            approved_by=int(manager_id),
            approved_at=approved_at,
            reject_reason=None,
        )
        if not ok:
            raise ValidationError("Approving the shift failed")

        if shift.status != ShiftStatus.PENDING:
            logger.warning(
                "Shift %s re-decided by manager %s: %s -> approved", shift.shift_id, manager_id, shift.status.value
            )
        return replace(
            shift,
            status=ShiftStatus.APPROVED,
            approved_by=int(manager_id),
            approved_at=approved_at,
            reject_reason=None,
        )

    def reject(
        self,
        *,
        current_role: Role,
        organization_id: int,
        manager_id: int,
        shift_id: int,
        reason: str = "",
    ) -> ShiftRecord:
        """Mark a shift rejected, clearing any approval stamp.

        Allowed from any state, including overwriting an earlier approval.
        """
        shift = self._get_for_manager(current_role=current_role, organization_id=organization_id, shift_id=shift_id)
        reason = (reason or "").strip()

        ok = self._shifts.set_status(
            shift_id=shift.shift_id,
            status=ShiftStatus.REJECTED,
            approved_by=None,
            approved_at=None,
            reject_reason=reason,
        )
        if not ok:
            raise ValidationError("Rejecting the shift failed")

        if shift.status != ShiftStatus.PENDING:
            logger.warning(
                "Shift %s re-decided by manager %s: %s -> rejected", shift.shift_id, manager_id, shift.status.value
            )
        return replace(shift, status=ShiftStatus.REJECTED, approved_by=None, approved_at=None, reject_reason=reason)

    def list_for_month(
        self,
        *,
        organization_id: int,
        month_start: date,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[ShiftRecord]:
        rows = self._shifts.list_for_month(organization_id=int(organization_id), month_start=month_start)
        if status is None:
            return list(rows)
        return [s for s in rows if s.status == status]

    def list_mine(self, *, organization_id: int, employee_id: int, month_start: date) -> Sequence[ShiftRecord]:
        return list(
            self._shifts.list_for_month(
                organization_id=int(organization_id),
                month_start=month_start,
                employee_id=int(employee_id),
            )
        )
