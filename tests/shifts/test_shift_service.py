from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from shift_payroll.core.enums import Role, ShiftStatus
from shift_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from shift_payroll.members.model import EmployeeOverride, Member
from shift_payroll.organizations.model import Organization, PaySettings, SubmissionPolicy
from shift_payroll.organizations.service import OrganizationSettingsService
from shift_payroll.shifts.model import ShiftRecord
from shift_payroll.shifts.service import ShiftService


class FakeOrganizationsRepo:
    def __init__(self, org: Organization):
        self._org = org

    def get_by_id(self, organization_id):
        return self._org if organization_id == self._org.organization_id else None

    def update_settings(self, *, organization_id, pay_settings, submission):
        return True


class FakeMembersRepo:
    def __init__(self, members):
        self._members = {(m.organization_id, m.user_id): m for m in members}

    def list_for_organization(self, organization_id):
        return [m for (org, _), m in self._members.items() if org == organization_id]

    def get(self, *, organization_id, user_id):
        return self._members.get((organization_id, user_id))

    def update_override(self, *, organization_id, user_id, override):
        return True


class FakeShiftsRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, ShiftRecord] = {}

    def create(self, *, organization_id, employee_id, work_date, start_time, end_time, hourly_wage, note=""):
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = ShiftRecord(
            shift_id=sid,
            organization_id=organization_id,
            employee_id=employee_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            hourly_wage=hourly_wage,
            note=note,
        )
        return sid

    def get_by_id(self, shift_id):
        return self.rows.get(int(shift_id))

    def list_for_month(self, *, organization_id, month_start, employee_id=None):
        return [
            s
            for s in self.rows.values()
            if s.organization_id == organization_id
            and (s.work_date.year, s.work_date.month) == (month_start.year, month_start.month)
            and (employee_id is None or s.employee_id == employee_id)
        ]

    def list_for_employee_on_date(self, *, organization_id, employee_id, work_date):
        return [
            s
            for s in self.rows.values()
            if s.organization_id == organization_id and s.employee_id == employee_id and s.work_date == work_date
        ]

    def update_content(self, *, shift_id, work_date, start_time, end_time, note=""):
        s = self.rows.get(shift_id)
        if not s or s.status != ShiftStatus.PENDING:
            return False
        self.rows[shift_id] = replace(s, work_date=work_date, start_time=start_time, end_time=end_time, note=note)
        return True

    def delete(self, shift_id):
        return self.rows.pop(shift_id, None) is not None

    def set_status(self, *, shift_id, status, approved_by, approved_at, reject_reason):
        s = self.rows.get(shift_id)
        if not s:
            return False
        self.rows[shift_id] = replace(
            s, status=status, approved_by=approved_by, approved_at=approved_at, reject_reason=reject_reason
        )
        return True


ORG_ID = 1
STAFF = 10
OTHER_STAFF = 11
MANAGER = 99
NOW = datetime(2025, 6, 1, 12, 0)


def make_service(*, enforced=False, min_days=3, override=None):
    org = Organization(
        organization_id=ORG_ID,
        name="Cafe",
        pay_settings=PaySettings(default_hourly_wage=Decimal("1100")),
        submission=SubmissionPolicy(enforced=enforced, min_days_before=min_days),
    )
    members = FakeMembersRepo(
        [
            Member(ORG_ID, STAFF, "Sato", override or EmployeeOverride()),
            Member(ORG_ID, OTHER_STAFF, "Aoki", EmployeeOverride()),
            Member(ORG_ID, MANAGER, "Boss", EmployeeOverride()),
        ]
    )
    shifts = FakeShiftsRepo()
    service = ShiftService(shifts, members, OrganizationSettingsService(FakeOrganizationsRepo(org)))
    return service, shifts


def submit(service, *, day=date(2025, 6, 10), start="09:00", end="13:00", employee_id=STAFF, now=NOW):
    return service.submit(
        current_role=Role.PART_TIME,
        organization_id=ORG_ID,
        employee_id=employee_id,
        work_date=day,
        start_time=start,
        end_time=end,
        now=now,
    )


def test_submit_creates_pending_shift_with_captured_wage():
    service, shifts = make_service(override=EmployeeOverride(hourly_wage=Decimal("1300")))
    sid = submit(service)

    s = shifts.get_by_id(sid)
    assert s.status == ShiftStatus.PENDING
    assert s.hourly_wage == 1300
    assert (s.start_time, s.end_time) == ("09:00", "13:00")


def test_submit_uses_org_default_wage_without_override():
    service, shifts = make_service()
    sid = submit(service)
    assert shifts.get_by_id(sid).hourly_wage == 1100


def test_manager_cannot_submit():
    service, _ = make_service()
    with pytest.raises(AuthorizationError):
        service.submit(
            current_role=Role.MANAGER,
            organization_id=ORG_ID,
            employee_id=MANAGER,
            work_date=date(2025, 6, 10),
            start_time="09:00",
            end_time="10:00",
            now=NOW,
        )


def test_non_member_cannot_submit():
    service, _ = make_service()
    with pytest.raises(AuthorizationError):
        submit(service, employee_id=12345)


@pytest.mark.parametrize(
    "start,end",
    [
        ("10:00", "10:00"),
        ("18:00", "09:00"),
        ("9am", "10:00"),
        ("09:00", "24:00"),
    ],
)
def test_submit_rejects_bad_times(start, end):
    service, _ = make_service()
    with pytest.raises(ValidationError):
        submit(service, start=start, end=end)


def test_overlapping_shift_is_rejected():
    service, _ = make_service()
    submit(service, start="09:00", end="13:00")
    with pytest.raises(ValidationError):
        submit(service, start="12:00", end="15:00")


def test_adjacent_shift_is_allowed():
    service, shifts = make_service()
    submit(service, start="09:00", end="13:00")
    submit(service, start="13:00", end="17:00")
    assert len(shifts.rows) == 2


def test_overlap_is_checked_per_employee():
    service, shifts = make_service()
    submit(service, start="09:00", end="13:00")
    submit(service, start="09:00", end="13:00", employee_id=OTHER_STAFF)
    assert len(shifts.rows) == 2


def test_deadline_not_applied_when_not_enforced():
    service, _ = make_service(enforced=False)
    assert submit(service, day=date(2025, 6, 1))


def test_deadline_boundary_when_enforced():
    service, _ = make_service(enforced=True, min_days=3)
    # Deadline for 2025-06-10 is 2025-06-07 00:00.
    assert submit(service, day=date(2025, 6, 10), now=datetime(2025, 6, 7, 0, 0))
    with pytest.raises(ValidationError):
        submit(service, day=date(2025, 6, 11), start="09:00", end="10:00", now=datetime(2025, 6, 8, 0, 1))


def test_update_pending_shift():
    service, shifts = make_service()
    sid = submit(service)

    updated = service.update(
        current_role=Role.PART_TIME,
        employee_id=STAFF,
        shift_id=sid,
        work_date=date(2025, 6, 10),
        start_time="10:00",
        end_time="14:00",
        note=" swapped ",
        now=NOW,
    )
    assert (updated.start_time, updated.end_time, updated.note) == ("10:00", "14:00", "swapped")
    assert shifts.get_by_id(sid).start_time == "10:00"


def test_update_approved_shift_is_refused():
    service, _ = make_service()
    sid = submit(service)
    service.approve(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid, now=NOW)

    with pytest.raises(ValidationError):
        service.update(
            current_role=Role.PART_TIME,
            employee_id=STAFF,
            shift_id=sid,
            work_date=date(2025, 6, 10),
            start_time="10:00",
            end_time="14:00",
            now=NOW,
        )


def test_update_someone_elses_shift_is_not_found():
    service, _ = make_service()
    sid = submit(service)
    with pytest.raises(NotFoundError):
        service.update(
            current_role=Role.PART_TIME,
            employee_id=OTHER_STAFF,
            shift_id=sid,
            work_date=date(2025, 6, 10),
            start_time="10:00",
            end_time="14:00",
            now=NOW,
        )


def test_delete_pending_shift():
    service, shifts = make_service()
    sid = submit(service)
    service.delete(current_role=Role.PART_TIME, employee_id=STAFF, shift_id=sid, now=NOW)
    assert shifts.get_by_id(sid) is None


def test_delete_rejected_shift_is_refused():
    service, _ = make_service()
    sid = submit(service)
    service.reject(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid)
    with pytest.raises(ValidationError):
        service.delete(current_role=Role.PART_TIME, employee_id=STAFF, shift_id=sid, now=NOW)


def test_approve_stamps_manager_and_time():
    service, shifts = make_service()
    sid = submit(service)
    result = service.approve(
        current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid, now=NOW
    )

    assert result.status == ShiftStatus.APPROVED
    stored = shifts.get_by_id(sid)
    assert stored.approved_by == MANAGER
    assert stored.approved_at == NOW


def test_reject_clears_approval_and_keeps_reason():
    service, shifts = make_service()
    sid = submit(service)
    service.approve(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid, now=NOW)
    service.reject(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid, reason=" full ")

    stored = shifts.get_by_id(sid)
    assert stored.status == ShiftStatus.REJECTED
    assert stored.approved_by is None
    assert stored.approved_at is None
    assert stored.reject_reason == "full"


def test_rejected_shift_can_be_approved_again():
    service, shifts = make_service()
    sid = submit(service)
    service.reject(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid)
    service.approve(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=sid, now=NOW)

    stored = shifts.get_by_id(sid)
    assert stored.status == ShiftStatus.APPROVED
    assert stored.reject_reason is None


def test_part_time_cannot_approve():
    service, _ = make_service()
    sid = submit(service)
    with pytest.raises(AuthorizationError):
        service.approve(current_role=Role.PART_TIME, organization_id=ORG_ID, manager_id=STAFF, shift_id=sid)


def test_approve_shift_of_other_organization_is_not_found():
    service, _ = make_service()
    sid = submit(service)
    with pytest.raises(NotFoundError):
        service.approve(current_role=Role.MANAGER, organization_id=2, manager_id=MANAGER, shift_id=sid)


def test_list_for_month_filters_by_status():
    service, _ = make_service()
    first = submit(service, day=date(2025, 6, 10))
    submit(service, day=date(2025, 6, 11))
    service.approve(current_role=Role.MANAGER, organization_id=ORG_ID, manager_id=MANAGER, shift_id=first, now=NOW)

    june = date(2025, 6, 1)
    assert len(service.list_for_month(organization_id=ORG_ID, month_start=june)) == 2
    approved = service.list_for_month(organization_id=ORG_ID, month_start=june, status=ShiftStatus.APPROVED)
    assert [s.shift_id for s in approved] == [first]
    assert len(service.list_mine(organization_id=ORG_ID, employee_id=OTHER_STAFF, month_start=june)) == 0
