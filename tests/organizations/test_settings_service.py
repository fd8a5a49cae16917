from __future__ import annotations

from decimal import Decimal

import pytest

from shift_payroll.core.enums import Role
from shift_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from shift_payroll.organizations.model import Organization, PaySettings, SubmissionPolicy
from shift_payroll.organizations.service import (
    OrganizationSettingsService,
    pay_settings_from_mapping,
    pay_settings_to_mapping,
    submission_policy_from_mapping,
)


class FakeOrganizationsRepo:
    def __init__(self):
        self.orgs = {1: Organization(organization_id=1, name="Cafe")}
        self.saved = None

    def get_by_id(self, organization_id):
        return self.orgs.get(organization_id)

    def update_settings(self, *, organization_id, pay_settings, submission):
        self.saved = (organization_id, pay_settings, submission)
        org = self.orgs[organization_id]
        self.orgs[organization_id] = Organization(org.organization_id, org.name, pay_settings, submission)
        return True


def test_defaults_fill_missing_keys():
    settings = pay_settings_from_mapping({})
    assert settings == PaySettings()
    assert settings.default_hourly_wage == 1100
    assert settings.night.start == "22:00"
    assert settings.night.end == "05:00"
    assert settings.overtime.daily_threshold_minutes == 480
    assert settings.holiday.includes_weekend is True

    policy = submission_policy_from_mapping({"shift_submission_min_days_before": ""})
    assert policy == SubmissionPolicy(enforced=False, min_days_before=3)


def test_mapping_round_trip_of_form_values():
    data = {
        "default_hourly_wage": "1250",
        "night_premium_enabled": "on",
        "night_premium_rate": "0.3",
        "night_start": "23:00",
        "night_end": "04:00",
        "overtime_premium_enabled": "false",
        "transport_allowance_enabled": True,
        "transport_allowance_per_shift": 480,
    }
    settings = pay_settings_from_mapping(data)

    assert settings.default_hourly_wage == Decimal("1250")
    assert settings.night.enabled is True
    assert settings.night.rate == Decimal("0.3")
    assert settings.overtime.enabled is False
    assert settings.transport.default_per_shift == 480
    assert pay_settings_from_mapping(pay_settings_to_mapping(settings)) == settings


def test_get_settings_unknown_organization():
    service = OrganizationSettingsService(FakeOrganizationsRepo())
    with pytest.raises(NotFoundError):
        service.get_settings(404)


def test_update_settings_by_manager():
    repo = FakeOrganizationsRepo()
    service = OrganizationSettingsService(repo)

    org = service.update_settings(
        current_role=Role.MANAGER,
        organization_id=1,
        data={
            "default_hourly_wage": "1200",
            "holiday_premium_enabled": "1",
            "holiday_premium_rate": "0.35",
            "shift_submission_enforced": "1",
            "shift_submission_min_days_before": "5",
        },
    )

    assert org.pay_settings.default_hourly_wage == 1200
    assert org.pay_settings.holiday.enabled is True
    assert org.submission == SubmissionPolicy(enforced=True, min_days_before=5)
    assert service.resolve_pay_settings(1) == org.pay_settings


def test_update_settings_requires_manager():
    service = OrganizationSettingsService(FakeOrganizationsRepo())
    with pytest.raises(AuthorizationError):
        service.update_settings(current_role=Role.PART_TIME, organization_id=1, data={})


@pytest.mark.parametrize(
    "data",
    [
        {"default_hourly_wage": "0"},
        {"default_hourly_wage": "abc"},
        {"night_premium_enabled": "1", "night_premium_rate": "2.5"},
        {"night_premium_enabled": "1", "night_start": "25:00"},
        {"overtime_premium_enabled": "1", "overtime_daily_threshold_minutes": "2000"},
        {"overtime_premium_enabled": "1", "overtime_daily_threshold_minutes": "eight"},
        {"holiday_premium_enabled": "1", "holiday_premium_rate": "-0.1"},
        {"transport_allowance_enabled": "1", "transport_allowance_per_shift": "-1"},
        {"shift_submission_enforced": "1", "shift_submission_min_days_before": "-1"},
    ],
)
def test_update_settings_rejects_invalid_values(data):
    repo = FakeOrganizationsRepo()
    service = OrganizationSettingsService(repo)
    with pytest.raises(ValidationError):
        service.update_settings(current_role=Role.MANAGER, organization_id=1, data=data)
    assert repo.saved is None


def test_disabled_sections_are_not_validated():
    service = OrganizationSettingsService(FakeOrganizationsRepo())
    org = service.update_settings(
        current_role=Role.MANAGER,
        organization_id=1,
        data={"night_premium_enabled": "0", "night_premium_rate": "9"},
    )
    assert org.pay_settings.night.rate == 9
