from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Optional

from ...common.time_utils import duration_minutes
from ...holiday.calendar import HolidayCalendar
from ...members.model import EmployeeOverride
from ...organizations.model import PaySettings
from ...shifts.model import ShiftRecord
from ..model import ZERO, PayBreakdown
from .base import PayCalculator
from .premiums import (
    holiday_applies,
    night_premium_minutes,
    night_window_minutes,
    overtime_minutes,
    resolve_hourly_wage,
    transport_allowance,
)

_SIXTY = Decimal(60)
_HALF = Decimal("0.5")


def round_currency(amount: Decimal) -> Decimal:
    """Round to a whole currency unit, ties toward +infinity (-0.5 -> 0, 0.5 -> 1)."""
    return (amount + _HALF).to_integral_value(rounding=ROUND_FLOOR)


def _rate(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class StandardPayCalculator(PayCalculator):
    """Standard rule: base pay plus additive night, overtime and holiday premiums plus transport.

    Premiums stack without capping. The holiday premium covers the whole shift.
    """

    def __init__(self, holiday_calendar: HolidayCalendar):
        self._calendar = holiday_calendar

    def calculate(
        self,
        shift: ShiftRecord,
        settings: PaySettings,
        override: Optional[EmployeeOverride] = None,
    ) -> PayBreakdown:
        hourly = resolve_hourly_wage(shift, override, settings)
        total_minutes = duration_minutes(shift.start_time, shift.end_time)
        night_minutes = night_premium_minutes(shift, settings)
        window_minutes = night_window_minutes(shift, settings)
        ot_minutes = overtime_minutes(shift, settings)
        is_holiday = holiday_applies(shift, settings, self._calendar)

        base = hourly * total_minutes / _SIXTY
        night = hourly * night_minutes / _SIXTY * _rate(settings.night.rate) if settings.night.enabled else ZERO
        overtime = hourly * ot_minutes / _SIXTY * _rate(settings.overtime.rate) if settings.overtime.enabled else ZERO
        holiday = hourly * total_minutes / _SIXTY * _rate(settings.holiday.rate) if is_holiday else ZERO
        transport = transport_allowance(settings, override)

        return PayBreakdown(
            hourly_wage=hourly,
            total_minutes=total_minutes,
            night_minutes=night_minutes,
            night_window_minutes=window_minutes,
            overtime_minutes=ot_minutes,
            holiday_applies=is_holiday,
            base=base,
            night_premium=night,
            overtime_premium=overtime,
            holiday_premium=holiday,
            transport=transport,
            total=round_currency(base + night + overtime + holiday + transport),
        )
