from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeOverride, Member


class MemberRepository(Protocol):
    def list_for_organization(self, organization_id: int) -> Sequence[Member]:
        raise NotImplementedError

    def get(self, *, organization_id: int, user_id: int) -> Optional[Member]:
        raise NotImplementedError

    def update_override(
        self,
        *,
        organization_id: int,
        user_id: int,
        override: EmployeeOverride,
    ) -> bool:
        raise NotImplementedError
