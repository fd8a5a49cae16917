from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import require_decimal, require_hhmm, require_range
from ..core import constants as c
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import (
    HolidayPremium,
    NightPremium,
    Organization,
    OvertimePremium,
    PaySettings,
    SubmissionPolicy,
    TransportAllowance,
)
from .repository import OrganizationRepository

logger = logging.getLogger(__name__)


def _get(data: Mapping[str, Any], key: str, default):
    value = data.get(key)
    return default if value is None or value == "" else value


def _flag(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def pay_settings_from_mapping(data: Mapping[str, Any]) -> PaySettings:
    """Build ``PaySettings`` from flat storage/form keys, filling absent keys with defaults."""

    threshold = _get(data, "overtime_daily_threshold_minutes", c.DEFAULT_OVERTIME_THRESHOLD_MINUTES)
    try:
        threshold = int(threshold)
    except (TypeError, ValueError):
        raise ValidationError("overtime_daily_threshold_minutes must be an integer")

    return PaySettings(
        default_hourly_wage=require_decimal(
            _get(data, "default_hourly_wage", c.DEFAULT_HOURLY_WAGE), "default_hourly_wage"
        ),
        night=NightPremium(
            enabled=_flag(data, "night_premium_enabled", False),
            rate=require_decimal(_get(data, "night_premium_rate", c.DEFAULT_NIGHT_PREMIUM_RATE), "night_premium_rate"),
            start=str(_get(data, "night_start", c.DEFAULT_NIGHT_START)),
            end=str(_get(data, "night_end", c.DEFAULT_NIGHT_END)),
        ),
        overtime=OvertimePremium(
            enabled=_flag(data, "overtime_premium_enabled", False),
            rate=require_decimal(
                _get(data, "overtime_premium_rate", c.DEFAULT_OVERTIME_PREMIUM_RATE), "overtime_premium_rate"
            ),
            daily_threshold_minutes=threshold,
        ),
        holiday=HolidayPremium(
            enabled=_flag(data, "holiday_premium_enabled", False),
            rate=require_decimal(
                _get(data, "holiday_premium_rate", c.DEFAULT_HOLIDAY_PREMIUM_RATE), "holiday_premium_rate"
            ),
            includes_weekend=_flag(data, "holiday_includes_weekend", c.DEFAULT_HOLIDAY_INCLUDES_WEEKEND),
        ),
        transport=TransportAllowance(
            enabled=_flag(data, "transport_allowance_enabled", False),
            default_per_shift=require_decimal(
                _get(data, "transport_allowance_per_shift", c.DEFAULT_TRANSPORT_PER_SHIFT),
                "transport_allowance_per_shift",
            ),
        ),
    )


def submission_policy_from_mapping(data: Mapping[str, Any]) -> SubmissionPolicy:
    days = _get(data, "shift_submission_min_days_before", c.DEFAULT_SUBMISSION_MIN_DAYS_BEFORE)
    try:
        days = int(days)
    except (TypeError, ValueError):
        raise ValidationError("shift_submission_min_days_before must be an integer")
    return SubmissionPolicy(
        enforced=_flag(data, "shift_submission_enforced", False),
        min_days_before=days,
    )


def pay_settings_to_mapping(settings: PaySettings) -> dict:
    return {
        "default_hourly_wage": settings.default_hourly_wage,
        "night_premium_enabled": settings.night.enabled,
        "night_premium_rate": settings.night.rate,
        "night_start": settings.night.start,
        "night_end": settings.night.end,
        "overtime_premium_enabled": settings.overtime.enabled,
        "overtime_premium_rate": settings.overtime.rate,
        "overtime_daily_threshold_minutes": settings.overtime.daily_threshold_minutes,
        "holiday_premium_enabled": settings.holiday.enabled,
        "holiday_premium_rate": settings.holiday.rate,
        "holiday_includes_weekend": settings.holiday.includes_weekend,
        "transport_allowance_enabled": settings.transport.enabled,
        "transport_allowance_per_shift": settings.transport.default_per_shift,
    }


def validate_pay_settings(settings: PaySettings) -> PaySettings:
    """Write-time checks. Sections that are disabled are stored as-is."""

    if settings.default_hourly_wage < 1:
        raise ValidationError("default_hourly_wage must be at least 1")

    if settings.night.enabled:
        require_range(settings.night.rate, "night_premium_rate", minimum=0, maximum=c.MAX_PREMIUM_RATE)
        require_hhmm(settings.night.start, "night_start")
        require_hhmm(settings.night.end, "night_end")

    if settings.overtime.enabled:
        require_range(settings.overtime.rate, "overtime_premium_rate", minimum=0, maximum=c.MAX_PREMIUM_RATE)
        require_range(
            settings.overtime.daily_threshold_minutes,
            "overtime_daily_threshold_minutes",
            minimum=0,
            maximum=c.MINUTES_PER_DAY,
        )

    if settings.holiday.enabled:
        require_range(settings.holiday.rate, "holiday_premium_rate", minimum=0, maximum=c.MAX_PREMIUM_RATE)

    if settings.transport.enabled:
        require_range(settings.transport.default_per_shift, "transport_allowance_per_shift", minimum=0)

    return settings


def validate_submission_policy(policy: SubmissionPolicy) -> SubmissionPolicy:
    if policy.enforced:
        require_range(
            policy.min_days_before,
            "shift_submission_min_days_before",
            minimum=0,
            maximum=c.MAX_SUBMISSION_MIN_DAYS_BEFORE,
        )
    return policy


class OrganizationSettingsService:
    def __init__(self, organizations: OrganizationRepository):
        self._organizations = organizations

    def get_settings(self, organization_id: int) -> Organization:
        org = self._organizations.get_by_id(int(organization_id))
        if not org:
            raise NotFoundError("Organization not found")
        return org

    def resolve_pay_settings(self, organization_id: int) -> PaySettings:
        return self.get_settings(organization_id).pay_settings

    def update_settings(
        self,
        *,
        current_role: Role,
        organization_id: int,
        data: Mapping[str, Any],
    ) -> Organization:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can change pay settings")

        org = self.get_settings(organization_id)
        pay_settings = validate_pay_settings(pay_settings_from_mapping(data))
        submission = validate_submission_policy(submission_policy_from_mapping(data))

        ok = self._organizations.update_settings(
            organization_id=org.organization_id,
            pay_settings=pay_settings,
            submission=submission,
        )
        if not ok:
            raise ValidationError("Saving settings failed")

        logger.info("Pay settings updated for organization %s", org.organization_id)
        return Organization(
            organization_id=org.organization_id,
            name=org.name,
            pay_settings=pay_settings,
            submission=submission,
        )
