from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...members.model import EmployeeOverride
from ...organizations.model import PaySettings
from ...shifts.model import ShiftRecord
from ..model import PayBreakdown


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        shift: ShiftRecord,
        settings: PaySettings,
        override: Optional[EmployeeOverride] = None,
    ) -> PayBreakdown:
        raise NotImplementedError
