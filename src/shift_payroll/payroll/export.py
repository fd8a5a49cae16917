"""Delimited-text and dict views of payroll results.

Money components are fractional inside the engine; exports show them rounded to a
whole unit, while ``total`` already is one.
"""

from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Iterable

from ..common.time_utils import format_minutes
from .calculator.standard_calculator import round_currency
from .model import EmployeePayroll, MonthlyPayroll, PayBreakdown, PayrollLine, PayTotals

DETAIL_FIELDS = [
    "work_date",
    "employee_id",
    "employee_name",
    "start_time",
    "end_time",
    "status",
    "total_minutes",
    "night_minutes",
    "overtime_minutes",
    "holiday",
    "hourly_wage",
    "base",
    "night_premium",
    "overtime_premium",
    "holiday_premium",
    "transport",
    "total",
]

EMPLOYEE_FIELDS = [
    "employee_id",
    "employee_name",
    "count",
    "total_minutes",
    "night_minutes",
    "base",
    "night_premium",
    "overtime_premium",
    "holiday_premium",
    "transport",
    "total",
]

SUMMARY_FIELDS = [
    "month",
    "shift_count",
    "total_minutes",
    "total_hours",
    "night_minutes",
    "base",
    "night_premium",
    "overtime_premium",
    "holiday_premium",
    "transport",
    "total",
]


def _whole(amount: Decimal) -> str:
    return str(round_currency(amount))


def _cents(amount: Decimal) -> str:
    return str(amount.quantize(Decimal("0.01")))


def breakdown_to_dict(bd: PayBreakdown) -> dict:
    return {
        "hourly_wage": _cents(bd.hourly_wage),
        "total_minutes": bd.total_minutes,
        "night_minutes": bd.night_minutes,
        "overtime_minutes": bd.overtime_minutes,
        "holiday": bd.holiday_applies,
        "base": _cents(bd.base),
        "night_premium": _cents(bd.night_premium),
        "overtime_premium": _cents(bd.overtime_premium),
        "holiday_premium": _cents(bd.holiday_premium),
        "transport": _cents(bd.transport),
        "total": str(bd.total),
    }


def _totals_to_dict(t: PayTotals) -> dict:
    return {
        "count": t.count,
        "total_minutes": t.total_minutes,
        "night_minutes": t.night_minutes,
        "base": _cents(t.base),
        "night_premium": _cents(t.night_premium),
        "overtime_premium": _cents(t.overtime_premium),
        "holiday_premium": _cents(t.holiday_premium),
        "transport": _cents(t.transport),
        "total": str(t.total),
    }


def line_to_dict(line: PayrollLine) -> dict:
    s = line.shift
    return {
        "shift_id": s.shift_id,
        "work_date": s.work_date.strftime("%Y-%m-%d"),
        "employee_id": s.employee_id,
        "employee_name": line.employee_name,
        "start_time": s.start_time,
        "end_time": s.end_time,
        "status": s.status.value,
        **breakdown_to_dict(line.breakdown),
    }


def employee_to_dict(row: EmployeePayroll) -> dict:
    return {"employee_id": row.employee_id, "employee_name": row.employee_name, **_totals_to_dict(row)}


def report_to_dict(report: MonthlyPayroll) -> dict:
    summary = _totals_to_dict(report.summary)
    summary["total_hours"] = format_minutes(report.summary.total_minutes)
    summary["night_hours"] = format_minutes(report.summary.night_minutes)
    return {
        "month": report.month_start.strftime("%Y-%m") if report.month_start else None,
        "include_pending": report.include_pending,
        "summary": summary,
        "employees": [employee_to_dict(r) for r in report.employees],
        "lines": [line_to_dict(ln) for ln in report.lines],
    }


def _write(fieldnames: list[str], rows: Iterable[dict]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()


def detail_csv(report: MonthlyPayroll) -> str:
    rows = []
    for line in report.lines:
        s, bd = line.shift, line.breakdown
        rows.append(
            {
                "work_date": s.work_date.strftime("%Y-%m-%d"),
                "employee_id": s.employee_id,
                "employee_name": line.employee_name,
                "start_time": s.start_time,
                "end_time": s.end_time,
                "status": s.status.value,
                "total_minutes": bd.total_minutes,
                "night_minutes": bd.night_minutes,
                "overtime_minutes": bd.overtime_minutes,
                "holiday": int(bd.holiday_applies),
                "hourly_wage": _whole(bd.hourly_wage),
                "base": _whole(bd.base),
                "night_premium": _whole(bd.night_premium),
                "overtime_premium": _whole(bd.overtime_premium),
                "holiday_premium": _whole(bd.holiday_premium),
                "transport": _whole(bd.transport),
                "total": str(bd.total),
            }
        )
    return _write(DETAIL_FIELDS, rows)


def employees_csv(report: MonthlyPayroll) -> str:
    rows = []
    for r in report.employees:
        rows.append(
            {
                "employee_id": r.employee_id,
                "employee_name": r.employee_name,
                "count": r.count,
                "total_minutes": r.total_minutes,
                "night_minutes": r.night_minutes,
                "base": _whole(r.base),
                "night_premium": _whole(r.night_premium),
                "overtime_premium": _whole(r.overtime_premium),
                "holiday_premium": _whole(r.holiday_premium),
                "transport": _whole(r.transport),
                "total": str(r.total),
            }
        )
    return _write(EMPLOYEE_FIELDS, rows)


def summary_csv(report: MonthlyPayroll) -> str:
    t = report.summary
    row = {
        "month": report.month_start.strftime("%Y-%m") if report.month_start else "",
        "shift_count": t.count,
        "total_minutes": t.total_minutes,
        "total_hours": format_minutes(t.total_minutes),
        "night_minutes": t.night_minutes,
        "base": _whole(t.base),
        "night_premium": _whole(t.night_premium),
        "overtime_premium": _whole(t.overtime_premium),
        "holiday_premium": _whole(t.holiday_premium),
        "transport": _whole(t.transport),
        "total": str(t.total),
    }
    return _write(SUMMARY_FIELDS, [row])
