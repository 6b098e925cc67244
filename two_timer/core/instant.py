# Copyright (c) 2025 Ming Yu (yuming@oppo.com)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Proleptic Gregorian calendar primitives with signed years.

``datetime`` stops at year 1, but phrases such as "the ides of March, 44 BCE"
or "the beginning of time" need instants far outside that window, so the
engine works on its own zoneless ``Instant`` and only converts to ``datetime``
at the edges.
"""

import re
from dataclasses import dataclass, replace as dataclass_replace
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta


# date(1970, 1, 1).toordinal()
EPOCH_ORDINAL = 719163
MICROS_PER_SECOND = 1000000
MICROS_PER_DAY = 86400 * MICROS_PER_SECOND

_ISO_PATTERN = re.compile(
    r"^([+-]?\d{4,})-(\d{1,2})-(\d{1,2})"
    r"(?:[T ](\d{1,2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?)?Z?$"
)


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule, extended to year 0 and negative years"""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month

    Args:
        year (int): signed year
        month (int): month number, 1-12

    Returns:
        int: 28-31
    """
    if month in [1, 3, 5, 7, 8, 10, 12]:
        return 31
    elif month in [4, 6, 9, 11]:
        return 30
    elif is_leap_year(year):
        return 29
    return 28


def is_valid_date(year: int, month: int, day: int) -> bool:
    return 1 <= month <= 12 and 1 <= day <= days_in_month(year, month)


def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Days between 1970-01-01 and the given date (negative before it)

    Uses Howard Hinnant's era-based algorithm; floor division keeps it
    correct for years before 0.
    """
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    # March is month 0 so that leap days fall at the end of the year
    shifted_month = (month + 9) % 12
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - 719468


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil"""
    days += 719468
    era = days // 146097
    day_of_era = days - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400
    if month <= 2:
        year += 1
    return year, month, day


def _delta_micros(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * MICROS_PER_SECOND + delta.microseconds


@dataclass(frozen=True, order=True)
class Instant:
    """
    A zoneless point on the proleptic Gregorian calendar

    Field order doubles as chronological order, so instances compare like
    datetimes. Supports ``+``/``-`` with ``timedelta`` (exact durations) and
    ``relativedelta`` (calendar months and years, clamping the day).
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, not {self.month}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ValueError(f"day {self.day} is out of range for {self.year}-{self.month:02d}")
        if not 0 <= self.hour < 24:
            raise ValueError(f"hour must be in 0..23, not {self.hour}")
        if not 0 <= self.minute < 60:
            raise ValueError(f"minute must be in 0..59, not {self.minute}")
        if not 0 <= self.second < 60:
            raise ValueError(f"second must be in 0..59, not {self.second}")
        if not 0 <= self.microsecond < MICROS_PER_SECOND:
            raise ValueError(f"microsecond must be in 0..999999, not {self.microsecond}")

    @classmethod
    def from_datetime(cls, value: Union[datetime, date]) -> "Instant":
        """Convert a datetime (or date); any tzinfo is ignored"""
        return cls(
            value.year,
            value.month,
            value.day,
            getattr(value, "hour", 0),
            getattr(value, "minute", 0),
            getattr(value, "second", 0),
            getattr(value, "microsecond", 0),
        )

    @classmethod
    def now(cls) -> "Instant":
        """Wall-clock time; only front ends building a Config should call this"""
        return cls.from_datetime(datetime.now())

    @classmethod
    def fromordinal(cls, ordinal: int) -> "Instant":
        """Midnight of the day with the given ordinal (0001-01-01 is 1, as for date)"""
        year, month, day = civil_from_days(ordinal - EPOCH_ORDINAL)
        return cls(year, month, day)

    @classmethod
    def fromisoformat(cls, text: str) -> "Instant":
        """
        Parse ``[-]YYYY-MM-DD[THH:MM[:SS[.ffffff]]][Z]``

        Raises:
            ValueError: if the text is not in that form or names an impossible instant
        """
        match = _ISO_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Invalid isoformat string: {text!r}")
        year, month, day, hour, minute, second, fraction = match.groups()
        microsecond = int(fraction.ljust(6, "0")) if fraction else 0
        return cls(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            microsecond,
        )

    def to_datetime(self) -> datetime:
        """Naive datetime; raises ValueError outside datetime's year range"""
        return datetime(
            self.year, self.month, self.day, self.hour, self.minute, self.second, self.microsecond
        )

    def isoformat(self) -> str:
        sign = "-" if self.year < 0 else ""
        text = (
            f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )
        if self.microsecond:
            text += f".{self.microsecond:06d}"
        return text

    def __str__(self) -> str:
        return self.isoformat()

    def toordinal(self) -> int:
        return days_from_civil(self.year, self.month, self.day) + EPOCH_ORDINAL

    def weekday(self) -> int:
        """Monday is 0 and Sunday is 6"""
        return (self.toordinal() + 6) % 7

    def replace(self, **changes) -> "Instant":
        return dataclass_replace(self, **changes)

    def start_of_day(self) -> "Instant":
        return self.replace(hour=0, minute=0, second=0, microsecond=0)

    def same_day(self, other: "Instant") -> bool:
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)

    def _micros(self) -> int:
        seconds = self.hour * 3600 + self.minute * 60 + self.second
        days = days_from_civil(self.year, self.month, self.day)
        return days * MICROS_PER_DAY + seconds * MICROS_PER_SECOND + self.microsecond

    @classmethod
    def _from_micros(cls, micros: int) -> "Instant":
        days, rest = divmod(micros, MICROS_PER_DAY)
        year, month, day = civil_from_days(days)
        seconds, microsecond = divmod(rest, MICROS_PER_SECOND)
        hour, seconds = divmod(seconds, 3600)
        minute, second = divmod(seconds, 60)
        return cls(year, month, day, hour, minute, second, microsecond)

    def _add_relativedelta(self, delta: relativedelta) -> "Instant":
        if delta.weekday is not None:
            raise TypeError("weekday-relative deltas are not supported by Instant")
        # absolute fields first, then relative months/years, then exact durations
        year = self.year if delta.year is None else delta.year
        month = self.month if delta.month is None else delta.month
        day = self.day if delta.day is None else delta.day
        hour = self.hour if delta.hour is None else delta.hour
        minute = self.minute if delta.minute is None else delta.minute
        second = self.second if delta.second is None else delta.second
        microsecond = self.microsecond if delta.microsecond is None else delta.microsecond

        year, month = divmod(year * 12 + month - 1 + delta.years * 12 + delta.months, 12)
        month += 1
        day = min(day, days_in_month(year, month))

        shifted = Instant(year, month, day, hour, minute, second, microsecond)
        return shifted + timedelta(
            days=delta.days,
            hours=delta.hours,
            minutes=delta.minutes,
            seconds=delta.seconds,
            microseconds=delta.microseconds,
        )

    def __add__(self, other):
        if isinstance(other, timedelta):
            return Instant._from_micros(self._micros() + _delta_micros(other))
        if isinstance(other, relativedelta):
            return self._add_relativedelta(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Instant):
            return timedelta(microseconds=self._micros() - other._micros())
        if isinstance(other, (timedelta, relativedelta)):
            return self + (-other)
        return NotImplemented


# Sentinels for "always", "the beginning of time" and "the end of time"
MIN_INSTANT = Instant(-262144, 1, 1)
MAX_INSTANT = Instant(262143, 12, 31, 23, 59, 59, 999999)
