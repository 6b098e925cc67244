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
Calendar granularities and expansion of an instant to the unit enclosing it.
"""

from datetime import timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta

from .errors import NoPayPeriodError
from .instant import Instant


class Period(Enum):
    """Granularity an instant can be expanded to"""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    PAY_PERIOD = "pay period"


# fixed-length periods
DURATIONS = {
    Period.SECOND: timedelta(seconds=1),
    Period.MINUTE: timedelta(minutes=1),
    Period.HOUR: timedelta(hours=1),
    Period.DAY: timedelta(days=1),
    Period.WEEK: timedelta(weeks=1),
}


def get_year_range(instant, config=None):
    start = Instant(instant.year)
    return start, start + relativedelta(years=1)


def get_month_range(instant, config=None):
    start = Instant(instant.year, instant.month)
    return start, start + relativedelta(months=1)


def get_week_range(instant, config):
    """
    Week containing the instant

    The week starts on Monday when config.monday_starts_week, else on Sunday.
    """
    days_since_start = instant.weekday()
    if not config.monday_starts_week:
        days_since_start = (days_since_start + 1) % 7
    start = instant.start_of_day() - timedelta(days=days_since_start)
    return start, start + timedelta(days=7)


def get_day_range(instant, config=None):
    start = instant.start_of_day()
    return start, start + timedelta(days=1)


def get_hour_range(instant, config=None):
    start = instant.replace(minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=1)


def get_minute_range(instant, config=None):
    start = instant.replace(second=0, microsecond=0)
    return start, start + timedelta(minutes=1)


def get_second_range(instant, config=None):
    start = instant.replace(microsecond=0)
    return start, start + timedelta(seconds=1)


def get_pay_period_range(instant, config):
    """
    Pay period containing the instant

    Pay periods tile the timeline in blocks of config.pay_period_length days
    starting at config.pay_period_start, in both directions.

    Raises:
        NoPayPeriodError: if no pay period start is configured
    """
    if config.pay_period_start is None:
        raise NoPayPeriodError("no pay period start date provided")
    length = config.pay_period_length
    offset = (instant.toordinal() - config.pay_period_start.toordinal()) % length
    start = instant.start_of_day() - timedelta(days=offset)
    return start, start + timedelta(days=length)


_RANGE_GETTERS = {
    Period.YEAR: get_year_range,
    Period.MONTH: get_month_range,
    Period.WEEK: get_week_range,
    Period.DAY: get_day_range,
    Period.HOUR: get_hour_range,
    Period.MINUTE: get_minute_range,
    Period.SECOND: get_second_range,
    Period.PAY_PERIOD: get_pay_period_range,
}


def expand(instant, period, config):
    """
    Expand an instant to the half-open interval of the period containing it

    Args:
        instant (Instant): any instant
        period (Period): granularity
        config (Config): supplies the week start and the pay period tiling

    Returns:
        tuple: (start, end) with start <= instant < end
    """
    return _RANGE_GETTERS[period](instant, config)
