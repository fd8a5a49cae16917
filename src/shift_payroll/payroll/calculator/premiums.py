"""Premium rules, one pure function each.

Every function receives the policy explicitly; none of them look anything up.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.datetime_utils import is_weekend
from ...common.time_utils import duration_minutes, night_overlap_minutes
from ...holiday.calendar import HolidayCalendar
from ...members.model import EmployeeOverride
from ...organizations.model import PaySettings
from ...shifts.model import ShiftRecord
from ..model import ZERO


def _dec(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def resolve_hourly_wage(
    shift: Optional[ShiftRecord],
    override: Optional[EmployeeOverride],
    settings: PaySettings,
) -> Decimal:
    """Hourly wage for a shift.

    Precedence: the wage captured on the shift, then the employee's override, then the
    organization default.
    """
    if shift is not None and shift.hourly_wage is not None:
        return _dec(shift.hourly_wage)
    if override is not None and override.hourly_wage is not None:
        return _dec(override.hourly_wage)
    return _dec(settings.default_hourly_wage)


def night_window_minutes(shift: ShiftRecord, settings: PaySettings) -> int:
    # Reported in monthly totals even while the premium itself is off.
    return night_overlap_minutes(shift.start_time, shift.end_time, settings.night.start, settings.night.end)


def night_premium_minutes(shift: ShiftRecord, settings: PaySettings) -> int:
    if not settings.night.enabled:
        return 0
    return night_window_minutes(shift, settings)


def overtime_minutes(shift: ShiftRecord, settings: PaySettings) -> int:
    # Threshold is checked per shift; two shifts on the same day are not combined.
    if not settings.overtime.enabled:
        return 0
    worked = duration_minutes(shift.start_time, shift.end_time)
    return max(0, worked - int(settings.overtime.daily_threshold_minutes))


def holiday_applies(shift: ShiftRecord, settings: PaySettings, calendar: HolidayCalendar) -> bool:
    if not settings.holiday.enabled:
        return False
    if settings.holiday.includes_weekend and is_weekend(shift.work_date):
        return True
    return bool(calendar.is_holiday(shift.work_date))


def transport_allowance(settings: PaySettings, override: Optional[EmployeeOverride]) -> Decimal:
    if not settings.transport.enabled:
        return ZERO
    if override is not None and override.transport_allowance_per_shift is not None:
        return _dec(override.transport_allowance_per_shift)
    if settings.transport.default_per_shift is not None:
        return _dec(settings.transport.default_per_shift)
    return ZERO
