from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ..core import constants as c


@dataclass(frozen=True)
class NightPremium:
    enabled: bool = False
    rate: Decimal = c.DEFAULT_NIGHT_PREMIUM_RATE
    start: str = c.DEFAULT_NIGHT_START
    end: str = c.DEFAULT_NIGHT_END


@dataclass(frozen=True)
class OvertimePremium:
    enabled: bool = False
    rate: Decimal = c.DEFAULT_OVERTIME_PREMIUM_RATE
    daily_threshold_minutes: int = c.DEFAULT_OVERTIME_THRESHOLD_MINUTES


@dataclass(frozen=True)
class HolidayPremium:
    enabled: bool = False
    rate: Decimal = c.DEFAULT_HOLIDAY_PREMIUM_RATE
    includes_weekend: bool = c.DEFAULT_HOLIDAY_INCLUDES_WEEKEND


@dataclass(frozen=True)
class TransportAllowance:
    enabled: bool = False
    default_per_shift: Decimal = c.DEFAULT_TRANSPORT_PER_SHIFT


@dataclass(frozen=True)
class PaySettings:
    """Pay policy of one organization.

    Rates are multipliers on the base hourly rate (0.25 = +25%), not absolute amounts.
    """

    default_hourly_wage: Decimal = c.DEFAULT_HOURLY_WAGE
    night: NightPremium = field(default_factory=NightPremium)
    overtime: OvertimePremium = field(default_factory=OvertimePremium)
    holiday: HolidayPremium = field(default_factory=HolidayPremium)
    transport: TransportAllowance = field(default_factory=TransportAllowance)


@dataclass(frozen=True)
class SubmissionPolicy:
    """Shift submission deadline: shifts lock ``min_days_before`` days ahead at 00:00."""

    enforced: bool = False
    min_days_before: int = c.DEFAULT_SUBMISSION_MIN_DAYS_BEFORE


@dataclass(frozen=True)
class Organization:
    """Domain entity: a company/workplace tenant."""

    organization_id: int
    name: str
    pay_settings: PaySettings = field(default_factory=PaySettings)
    submission: SubmissionPolicy = field(default_factory=SubmissionPolicy)
