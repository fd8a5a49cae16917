from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role inside an organization, used for permission checks."""

    MANAGER = "manager"
    PART_TIME = "part_time"


class ShiftStatus(str, Enum):
    """Approval state of a submitted shift."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
