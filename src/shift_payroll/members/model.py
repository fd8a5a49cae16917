from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class EmployeeOverride:
    """Per-employee pay overrides inside one organization.

    ``None`` means "use the organization default".
    """

    hourly_wage: Optional[Decimal] = None
    transport_allowance_per_shift: Optional[Decimal] = None


@dataclass(frozen=True)
class Member:
    """Domain entity: an employee's membership in an organization."""

    organization_id: int
    user_id: int
    display_name: str
    override: EmployeeOverride = field(default_factory=EmployeeOverride)
