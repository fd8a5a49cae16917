from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..shifts.model import ShiftRecord

ZERO = Decimal("0")


@dataclass(frozen=True)
class PayBreakdown:
    """Gross pay of one shift, in minor currency units.

    Components stay fractional so that sums across shifts are exact; only ``total``
    is rounded to a whole unit.

    ``night_minutes`` bears the night premium and is 0 while it is disabled;
    ``night_window_minutes`` is the raw overlap with the policy window, used for totals.
    """

    hourly_wage: Decimal
    total_minutes: int
    night_minutes: int
    night_window_minutes: int
    overtime_minutes: int
    holiday_applies: bool
    base: Decimal
    night_premium: Decimal
    overtime_premium: Decimal
    holiday_premium: Decimal
    transport: Decimal
    total: Decimal


@dataclass(frozen=True)
class PayrollLine:
    """Read-model for the per-shift detail report/export."""

    shift: ShiftRecord
    employee_name: str
    breakdown: PayBreakdown


@dataclass
class PayTotals:
    count: int = 0
    total_minutes: int = 0
    night_minutes: int = 0
    base: Decimal = ZERO
    night_premium: Decimal = ZERO
    overtime_premium: Decimal = ZERO
    holiday_premium: Decimal = ZERO
    transport: Decimal = ZERO
    total: Decimal = ZERO

    def add(self, breakdown: PayBreakdown) -> None:
        self.count += 1
        self.total_minutes += breakdown.total_minutes
        self.night_minutes += breakdown.night_window_minutes
        self.base += breakdown.base
        self.night_premium += breakdown.night_premium
        self.overtime_premium += breakdown.overtime_premium
        self.holiday_premium += breakdown.holiday_premium
        self.transport += breakdown.transport
        self.total += breakdown.total

    def merge(self, other: "PayTotals") -> None:
        self.count += other.count
        self.total_minutes += other.total_minutes
        self.night_minutes += other.night_minutes
        self.base += other.base
        self.night_premium += other.night_premium
        self.overtime_premium += other.overtime_premium
        self.holiday_premium += other.holiday_premium
        self.transport += other.transport
        self.total += other.total


@dataclass
class EmployeePayroll(PayTotals):
    employee_id: int = 0
    employee_name: str = ""


@dataclass(frozen=True)
class MonthlyPayroll:
    month_start: Optional[date]
    include_pending: bool
    lines: tuple[PayrollLine, ...] = ()
    employees: tuple[EmployeePayroll, ...] = ()
    summary: PayTotals = field(default_factory=PayTotals)
