from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_HOLIDAY_COUNTRY
from .database.connection import DBConfig, DatabaseConnection
from .holiday.calendar import CountryHolidayCalendar, HolidayCalendar
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .organizations.mysql_organization_repository import MySQLOrganizationRepository
from .organizations.repository import OrganizationRepository
from .organizations.service import OrganizationSettingsService
from .payroll.service import PayrollReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    organizations_repo: OrganizationRepository
    members_repo: MemberRepository
    shifts_repo: ShiftRepository
    holiday_calendar: HolidayCalendar

    settings_service: OrganizationSettingsService
    member_service: MemberService
    shift_service: ShiftService
    payroll_report_service: PayrollReportService


def build_services(
    *,
    organizations_repo: OrganizationRepository,
    members_repo: MemberRepository,
    shifts_repo: ShiftRepository,
    holiday_calendar: HolidayCalendar,
) -> Container:
    settings_service = OrganizationSettingsService(organizations_repo)
    member_service = MemberService(members_repo)
    shift_service = ShiftService(shifts_repo, members_repo, settings_service)
    payroll_report_service = PayrollReportService(shifts_repo, members_repo, settings_service, holiday_calendar)

    return Container(
        organizations_repo=organizations_repo,
        members_repo=members_repo,
        shifts_repo=shifts_repo,
        holiday_calendar=holiday_calendar,
        settings_service=settings_service,
        member_service=member_service,
        shift_service=shift_service,
        payroll_report_service=payroll_report_service,
    )


def build_container(*, db_config: dict, holiday_country: str = DEFAULT_HOLIDAY_COUNTRY) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        organizations_repo=MySQLOrganizationRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        holiday_calendar=CountryHolidayCalendar(holiday_country),
    )
