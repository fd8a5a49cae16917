"""Holiday calendar oracle.

The payroll engine only asks "is this date a public holiday?"; which calendar answers
is decided at wiring time. The default implementation delegates to the ``holidays``
package for a configured country.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

import holidays

from ..core.constants import DEFAULT_HOLIDAY_COUNTRY


class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError

    def holiday_name(self, day: date) -> Optional[str]:
        raise NotImplementedError


class CountryHolidayCalendar(HolidayCalendar):
    def __init__(self, country: str = DEFAULT_HOLIDAY_COUNTRY, *, language: Optional[str] = None):
        self._country = country
        self._language = language
        self._by_year: dict[int, holidays.HolidayBase] = {}

    def _for_year(self, year: int) -> holidays.HolidayBase:
        table = self._by_year.get(year)
        if table is None:
            table = holidays.country_holidays(self._country, years=year, language=self._language)
            self._by_year[year] = table
        return table

    def is_holiday(self, day: date) -> bool:
        return day in self._for_year(day.year)

    def holiday_name(self, day: date) -> Optional[str]:
        return self._for_year(day.year).get(day)
