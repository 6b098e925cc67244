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
Tests for expanding instants to the periods containing them
"""

import os
import sys

import pytest

# Add the project root to the Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(current_dir, "../../..")
sys.path.insert(0, os.path.abspath(project_root))

from two_timer.core.config import Config  # noqa: E402
from two_timer.core.errors import NoPayPeriodError  # noqa: E402
from two_timer.core.instant import Instant  # noqa: E402
from two_timer.core.period import Period, expand  # noqa: E402

# a Tuesday
MOMENT = Instant(1969, 5, 6, 15, 30, 1, 250)
CONFIG = Config(now=MOMENT)


@pytest.mark.parametrize(
    "period, start, end",
    [
        (Period.SECOND, Instant(1969, 5, 6, 15, 30, 1), Instant(1969, 5, 6, 15, 30, 2)),
        (Period.MINUTE, Instant(1969, 5, 6, 15, 30), Instant(1969, 5, 6, 15, 31)),
        (Period.HOUR, Instant(1969, 5, 6, 15), Instant(1969, 5, 6, 16)),
        (Period.DAY, Instant(1969, 5, 6), Instant(1969, 5, 7)),
        (Period.WEEK, Instant(1969, 5, 5), Instant(1969, 5, 12)),
        (Period.MONTH, Instant(1969, 5, 1), Instant(1969, 6, 1)),
        (Period.YEAR, Instant(1969, 1, 1), Instant(1970, 1, 1)),
    ],
)
def test_expand(period, start, end):
    assert expand(MOMENT, period, CONFIG) == (start, end)


def test_week_starting_on_sunday():
    config = CONFIG.replace(monday_starts_week=False)
    assert expand(MOMENT, Period.WEEK, config) == (Instant(1969, 5, 4), Instant(1969, 5, 11))
    sunday = Instant(1969, 5, 4, 9)
    assert expand(sunday, Period.WEEK, config) == (Instant(1969, 5, 4), Instant(1969, 5, 11))
    assert expand(sunday, Period.WEEK, CONFIG) == (Instant(1969, 4, 28), Instant(1969, 5, 5))


def test_month_and_year_rollover():
    december = Instant(1969, 12, 31, 23, 59)
    assert expand(december, Period.MONTH, CONFIG) == (Instant(1969, 12, 1), Instant(1970, 1, 1))
    february = Instant(2020, 2, 10)
    assert expand(february, Period.MONTH, CONFIG) == (Instant(2020, 2, 1), Instant(2020, 3, 1))


def test_bce_expansion():
    ides = Instant(-43, 3, 15, 12)
    assert expand(ides, Period.YEAR, CONFIG) == (Instant(-43, 1, 1), Instant(-42, 1, 1))
    assert expand(ides, Period.DAY, CONFIG) == (Instant(-43, 3, 15), Instant(-43, 3, 16))


def test_pay_period():
    config = CONFIG.replace(pay_period_start=Instant(1968, 5, 5), pay_period_length=14)
    assert expand(Instant(1969, 5, 6), Period.PAY_PERIOD, config) == (
        Instant(1969, 5, 4),
        Instant(1969, 5, 18),
    )
    # periods tile backwards from the start date too
    assert expand(Instant(1968, 5, 1), Period.PAY_PERIOD, config) == (
        Instant(1968, 4, 21),
        Instant(1968, 5, 5),
    )
    # the first day of a period starts it
    assert expand(Instant(1968, 5, 5, 8), Period.PAY_PERIOD, config) == (
        Instant(1968, 5, 5),
        Instant(1968, 5, 19),
    )


def test_pay_period_requires_start():
    with pytest.raises(NoPayPeriodError) as excinfo:
        expand(MOMENT, Period.PAY_PERIOD, CONFIG)
    assert excinfo.value.kind == "NoPayPeriod"
