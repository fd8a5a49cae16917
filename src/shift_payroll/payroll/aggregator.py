"""Monthly payroll aggregation.

Takes a month's shifts as an immutable snapshot and folds their pay breakdowns into
per-employee rows and an organization-wide summary. Nothing here performs I/O.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional

from ..common.time_utils import to_minutes
from ..core.enums import ShiftStatus
from ..members.model import EmployeeOverride
from ..organizations.model import PaySettings
from ..shifts.model import ShiftRecord
from .calculator.base import PayCalculator
from .model import EmployeePayroll, MonthlyPayroll, PayrollLine, PayTotals


def eligible_statuses(include_pending: bool = False) -> frozenset[ShiftStatus]:
    """Statuses counted toward a payroll total. Rejected shifts never count."""
    if include_pending:
        return frozenset({ShiftStatus.APPROVED, ShiftStatus.PENDING})
    return frozenset({ShiftStatus.APPROVED})


def is_eligible(shift: ShiftRecord, *, include_pending: bool = False) -> bool:
    return shift.status in eligible_statuses(include_pending)


def aggregate_month(
    shifts: Iterable[ShiftRecord],
    *,
    settings: PaySettings,
    calculator: PayCalculator,
    overrides: Optional[Mapping[int, EmployeeOverride]] = None,
    names: Optional[Mapping[int, str]] = None,
    month_start: Optional[date] = None,
    include_pending: bool = False,
) -> MonthlyPayroll:
    overrides = overrides or {}
    names = names or {}

    lines: list[PayrollLine] = []
    by_employee: dict[int, EmployeePayroll] = {}

    for shift in shifts:
        if not is_eligible(shift, include_pending=include_pending):
            continue

        name = names.get(shift.employee_id) or str(shift.employee_id)
        breakdown = calculator.calculate(shift, settings, overrides.get(shift.employee_id))
        lines.append(PayrollLine(shift=shift, employee_name=name, breakdown=breakdown))

        row = by_employee.get(shift.employee_id)
        if not row:
            row = EmployeePayroll(employee_id=shift.employee_id, employee_name=name)
            by_employee[shift.employee_id] = row
        row.add(breakdown)

    employees = sorted(by_employee.values(), key=lambda r: (r.employee_name.casefold(), r.employee_id))

    summary = PayTotals()
    for row in employees:
        summary.merge(row)

    lines.sort(key=lambda ln: (ln.shift.work_date, to_minutes(ln.shift.start_time), ln.employee_name.casefold()))
    return MonthlyPayroll(
        month_start=month_start,
        include_pending=include_pending,
        lines=tuple(lines),
        employees=tuple(employees),
        summary=summary,
    )
