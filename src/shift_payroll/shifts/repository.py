from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus
from .model import ShiftRecord


class ShiftRepository(Protocol):
    def create(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        hourly_wage: Optional[Decimal],
        note: str = "",
    ) -> int:
        """Insert a new shift in ``pending`` state and return its id."""

        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[ShiftRecord]:
        raise NotImplementedError

    def list_for_month(
        self,
        *,
        organization_id: int,
        month_start: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[ShiftRecord]:
        """Shifts dated within ``[month_start, next month start)``, ordered by date and start time."""

        raise NotImplementedError

    def list_for_employee_on_date(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
    ) -> Sequence[ShiftRecord]:
        raise NotImplementedError

    def update_content(
        self,
        *,
        shift_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        note: str = "",
    ) -> bool:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError

    def set_status(
        self,
        *,
        shift_id: int,
        status: ShiftStatus,
        approved_by: Optional[int],
        approved_at: Optional[datetime],
        reject_reason: Optional[str],
    ) -> bool:
        """Overwrite the approval fields regardless of the current status."""

        raise NotImplementedError
