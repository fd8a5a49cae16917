from __future__ import annotations

from datetime import date
from decimal import Decimal

from shift_payroll.core.enums import ShiftStatus
from shift_payroll.members.model import EmployeeOverride, Member
from shift_payroll.organizations.model import (
    HolidayPremium,
    Organization,
    PaySettings,
    TransportAllowance,
)
from shift_payroll.organizations.service import OrganizationSettingsService
from shift_payroll.payroll.service import PayrollReportService
from shift_payroll.shifts.model import ShiftRecord


class FakeCalendar:
    def __init__(self, days):
        self._days = days

    def is_holiday(self, day):
        return day in self._days

    def holiday_name(self, day):
        return self._days.get(day)


class FakeOrganizationsRepo:
    def __init__(self, org):
        self._org = org

    def get_by_id(self, organization_id):
        return self._org if organization_id == self._org.organization_id else None

    def update_settings(self, *, organization_id, pay_settings, submission):
        return True


class FakeMembersRepo:
    def __init__(self, members):
        self._members = members

    def list_for_organization(self, organization_id):
        return [m for m in self._members if m.organization_id == organization_id]

    def get(self, *, organization_id, user_id):
        for m in self._members:
            if m.organization_id == organization_id and m.user_id == user_id:
                return m
        return None

    def update_override(self, *, organization_id, user_id, override):
        return True


class FakeShiftsRepo:
    def __init__(self, rows):
        self._rows = rows
        self.month_calls = []

    def get_by_id(self, shift_id):
        for s in self._rows:
            if s.shift_id == shift_id:
                return s
        return None

    def list_for_month(self, *, organization_id, month_start, employee_id=None):
        self.month_calls.append((organization_id, month_start, employee_id))
        return [
            s
            for s in self._rows
            if s.organization_id == organization_id
            and s.work_date.replace(day=1) == month_start
            and (employee_id is None or s.employee_id == employee_id)
        ]


def make_service():
    org = Organization(
        organization_id=1,
        name="Cafe",
        pay_settings=PaySettings(
            default_hourly_wage=Decimal("1000"),
            holiday=HolidayPremium(enabled=True, rate=Decimal("0.35"), includes_weekend=False),
            transport=TransportAllowance(enabled=True, default_per_shift=Decimal("200")),
        ),
    )
    members = [
        Member(1, 10, "Sato", EmployeeOverride(transport_allowance_per_shift=Decimal("500"))),
        Member(1, 11, "Aoki"),
    ]
    shifts = FakeShiftsRepo(
        [
            ShiftRecord(1, 1, 10, date(2025, 6, 2), "09:00", "13:00", ShiftStatus.APPROVED, Decimal("1200")),
            ShiftRecord(2, 1, 10, date(2025, 6, 3), "09:00", "13:00", ShiftStatus.PENDING, Decimal("1200")),
            ShiftRecord(3, 1, 11, date(2025, 6, 4), "09:00", "11:00", ShiftStatus.APPROVED),
            ShiftRecord(4, 1, 11, date(2025, 6, 5), "09:00", "11:00", ShiftStatus.REJECTED),
            ShiftRecord(5, 1, 11, date(2025, 7, 1), "09:00", "11:00", ShiftStatus.APPROVED),
        ]
    )
    calendar = FakeCalendar({date(2025, 6, 4): "Company Day"})
    service = PayrollReportService(
        shifts,
        FakeMembersRepo(members),
        OrganizationSettingsService(FakeOrganizationsRepo(org)),
        calendar,
    )
    return service, shifts


def test_month_report_counts_approved_only():
    service, shifts = make_service()
    report = service.build_month_report(organization_id=1, month=date(2025, 6, 17))

    assert shifts.month_calls == [(1, date(2025, 6, 1), None)]
    assert report.month_start == date(2025, 6, 1)
    assert [e.employee_name for e in report.employees] == ["Aoki", "Sato"]

    aoki, sato = report.employees
    # 2h at 1000 + 35% holiday premium + 200 transport
    assert aoki.total == 2000 + 700 + 200
    # 4h at the wage captured on the shift + 500 transport override
    assert sato.total == 4800 + 500
    assert report.summary.total == aoki.total + sato.total
    assert report.summary.count == 2


def test_my_estimate_includes_pending_for_one_employee():
    service, shifts = make_service()
    report = service.build_my_estimate(organization_id=1, employee_id=10, month=date(2025, 6, 1))

    assert shifts.month_calls == [(1, date(2025, 6, 1), 10)]
    assert report.include_pending is True
    assert report.summary.count == 2
    assert report.summary.total == 2 * 5300


def test_my_estimate_without_pending():
    service, _ = make_service()
    report = service.build_my_estimate(
        organization_id=1, employee_id=10, month=date(2025, 6, 1), include_pending=False
    )
    assert report.summary.count == 1


def test_calculate_single_shift():
    service, _ = make_service()
    bd = service.calculate_shift(organization_id=1, shift_id=3)
    assert bd.holiday_applies is True
    assert bd.total == 2900


def test_calculate_shift_of_other_organization_returns_none():
    service, _ = make_service()
    assert service.calculate_shift(organization_id=2, shift_id=3) is None
    assert service.calculate_shift(organization_id=1, shift_id=999) is None


def test_holiday_name_passthrough():
    service, _ = make_service()
    assert service.holiday_name(date(2025, 6, 4)) == "Company Day"
    assert service.holiday_name(date(2025, 6, 5)) is None
