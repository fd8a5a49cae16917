from __future__ import annotations

from typing import Optional, Protocol

from .model import Organization, PaySettings, SubmissionPolicy


class OrganizationRepository(Protocol):
    """Organization-settings store.

    Implementations return settings with stored values only; fallback defaults for
    absent columns are applied by ``OrganizationSettingsService``.
    """

    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        raise NotImplementedError

    def update_settings(
        self,
        *,
        organization_id: int,
        pay_settings: PaySettings,
        submission: SubmissionPolicy,
    ) -> bool:
        raise NotImplementedError
