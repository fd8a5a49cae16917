from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_start as first_of_month
from ..holiday.calendar import HolidayCalendar
from ..members.repository import MemberRepository
from ..organizations.service import OrganizationSettingsService
from ..shifts.repository import ShiftRepository
from .aggregator import aggregate_month
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .model import MonthlyPayroll, PayBreakdown

logger = logging.getLogger(__name__)


class PayrollReportService:
    """Loads one month's snapshot from the stores and runs the payroll engine on it."""

    def __init__(
        self,
        shifts: ShiftRepository,
        members: MemberRepository,
        settings: OrganizationSettingsService,
        holiday_calendar: HolidayCalendar,
        *,
        calculator: Optional[PayCalculator] = None,
    ):
        self._shifts = shifts
        self._members = members
        self._settings = settings
        self._calendar = holiday_calendar
        self._calculator = calculator or StandardPayCalculator(holiday_calendar)

    def _build(
        self,
        *,
        organization_id: int,
        month: date,
        employee_id: Optional[int],
        include_pending: bool,
    ) -> MonthlyPayroll:
        start = first_of_month(month)
        pay_settings = self._settings.resolve_pay_settings(organization_id)
        members = self._members.list_for_organization(int(organization_id))
        shifts = self._shifts.list_for_month(
            organization_id=int(organization_id),
            month_start=start,
            employee_id=employee_id,
        )

        report = aggregate_month(
            shifts,
            settings=pay_settings,
            calculator=self._calculator,
            overrides={m.user_id: m.override for m in members},
            names={m.user_id: m.display_name for m in members},
            month_start=start,
            include_pending=include_pending,
        )
        logger.debug(
            "Payroll %s org=%s employee=%s pending=%s: %d shifts, total=%s",
            start.strftime("%Y-%m"),
            organization_id,
            employee_id,
            include_pending,
            report.summary.count,
            report.summary.total,
        )
        return report

    def build_month_report(self, *, organization_id: int, month: date) -> MonthlyPayroll:
        """Finalized payroll: approved shifts only."""
        return self._build(organization_id=organization_id, month=month, employee_id=None, include_pending=False)

    def build_my_estimate(
        self,
        *,
        organization_id: int,
        employee_id: int,
        month: date,
        include_pending: bool = True,
    ) -> MonthlyPayroll:
        """Running estimate for one employee; pending shifts count unless disabled."""
        return self._build(
            organization_id=organization_id,
            month=month,
            employee_id=int(employee_id),
            include_pending=include_pending,
        )

    def calculate_shift(self, *, organization_id: int, shift_id: int) -> Optional[PayBreakdown]:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift or shift.organization_id != int(organization_id):
            return None
        pay_settings = self._settings.resolve_pay_settings(organization_id)
        member = self._members.get(organization_id=shift.organization_id, user_id=shift.employee_id)
        return self._calculator.calculate(shift, pay_settings, member.override if member else None)

    def holiday_name(self, day: date) -> Optional[str]:
        return self._calendar.holiday_name(day)
