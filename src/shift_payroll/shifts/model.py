from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ShiftStatus


@dataclass(frozen=True)
class ShiftRecord:
    """Domain entity: one employee's work interval on one calendar day.

    ``start_time``/``end_time`` are "HH:MM" wall-clock strings with start < end;
    shifts never cross midnight.
    """

    shift_id: int
    organization_id: int
    employee_id: int
    work_date: date
    start_time: str
    end_time: str
    status: ShiftStatus = ShiftStatus.PENDING
    hourly_wage: Optional[Decimal] = None
    note: str = ""
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    reject_reason: Optional[str] = None
