from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.validators import optional_decimal, require_range
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import EmployeeOverride, Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    def __init__(self, members: MemberRepository):
        self._members = members

    def list_members(self, *, organization_id: int) -> Sequence[Member]:
        return self._members.list_for_organization(int(organization_id))

    def update_override(
        self,
        *,
        current_role: Role,
        organization_id: int,
        user_id: int,
        hourly_wage: Any = None,
        transport_allowance_per_shift: Any = None,
    ) -> Member:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can change member pay settings")

        member = self._members.get(organization_id=int(organization_id), user_id=int(user_id))
        if not member:
            raise NotFoundError("Member not found")

        wage = optional_decimal(hourly_wage, "hourly_wage")
        if wage is not None:
            require_range(wage, "hourly_wage", minimum=1)
        transport = optional_decimal(transport_allowance_per_shift, "transport_allowance_per_shift")
        if transport is not None:
            require_range(transport, "transport_allowance_per_shift", minimum=0)

        override = EmployeeOverride(hourly_wage=wage, transport_allowance_per_shift=transport)
        ok = self._members.update_override(
            organization_id=member.organization_id,
            user_id=member.user_id,
            override=override,
        )
        if not ok:
            raise ValidationError("Saving member settings failed")

        logger.info("Pay override updated for user %s in organization %s", member.user_id, member.organization_id)
        return Member(
            organization_id=member.organization_id,
            user_id=member.user_id,
            display_name=member.display_name,
            override=override,
        )
