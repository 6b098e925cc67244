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
Tests for two-part ranges and since clauses
"""

import os
import sys

import pytest

# Add the project root to the Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(current_dir, "../../..")
sys.path.insert(0, os.path.abspath(project_root))

import two_timer  # noqa: E402
from two_timer.core.config import Config  # noqa: E402
from two_timer.core.errors import MisorderedError, ParseError  # noqa: E402
from two_timer.core.instant import MIN_INSTANT, Instant  # noqa: E402
from two_timer.english import Span, TimeParser  # noqa: E402
from two_timer.english.parser import pick_terminus  # noqa: E402

# a Tuesday, at noon
NOW = Instant(1969, 5, 6, 12)
CONFIG = Config(now=NOW)
PARSER = TimeParser()

THROUGH = 'to { through: "through" }'
TO = 'to { up_to: "to" }'


def weekday(name, time=None):
    at_time = f" at_time {{ {time} }}" if time else ""
    return (
        f'moment_or_period {{ moment {{ point_in_time {{ some_day {{ relative_day {{ a_day: "{name}" }} }}'
        f"{at_time} }} }} }}"
    )


def date(month, day, year):
    return (
        f"moment_or_period {{ moment {{ point_in_time {{ some_day {{ specific_day {{ date_with_year {{ "
        f'a_date {{ a_month: "{month}" o_n_day {{ n_day: "{day}" }} year {{ n_year: "{year}" }} }} '
        f"}} }} }} }} }} }}"
    )


def today():
    return 'moment_or_period { moment { point_in_time { some_day { specific_day { adverb: "today" } } } } }'


def yesterday():
    return 'moment_or_period { moment { point_in_time { some_day { specific_day { adverb: "yesterday" } } } } }'


def tomorrow():
    return 'moment_or_period { moment { point_in_time { some_day { specific_day { adverb: "tomorrow" } } } } }'


def three_pm(day=None):
    time = 'time { hour_12 { h12: "3" } am_pm: "PM" }'
    if day is None:
        return f"moment_or_period {{ moment {{ point_in_time {{ {time} }} }} }}"
    return weekday(day, time)


def two_times(first, to, last):
    return f"particular {{ two_times {{ {first} {to} {last} }} }}"


def since(moment, clusivity=None, word="since"):
    marker = f" clusivity {{ {clusivity} }}" if clusivity else ""
    return f'particular {{ since_time {{ since: "{word}"{marker} {moment} }} }}'


def test_pick_terminus():
    friday = Instant(1969, 5, 9)
    saturday = Instant(1969, 5, 10)
    assert pick_terminus(friday, saturday, True) == saturday
    assert pick_terminus(friday, saturday, False) == friday
    three, four = Instant(1969, 5, 9, 15), Instant(1969, 5, 9, 16)
    assert pick_terminus(three, four, True) == three
    assert pick_terminus(three, four, False) == three


def test_monday_through_friday():
    span = PARSER.parse(two_times(weekday("Monday"), THROUGH, weekday("Friday")), CONFIG)
    assert span == Span(Instant(1969, 5, 5), Instant(1969, 5, 10), True)


def test_monday_to_friday():
    span = PARSER.parse(two_times(weekday("Monday"), TO, weekday("Friday")), CONFIG)
    assert span == Span(Instant(1969, 5, 5), Instant(1969, 5, 9), True)


def test_dash_is_inclusive():
    span = PARSER.parse(two_times(weekday("Mon"), 'to: "--"', weekday("Fri")), CONFIG)
    assert span == Span(Instant(1969, 5, 5), Instant(1969, 5, 10), True)
    span = PARSER.parse(two_times(weekday("Mon"), 'to: "until"', weekday("Fri")), CONFIG)
    assert span == Span(Instant(1969, 5, 5), Instant(1969, 5, 9), True)


def test_through_a_clock_time_ends_at_that_time():
    span = PARSER.parse(two_times(weekday("Tuesday"), THROUGH, three_pm("Friday")), CONFIG)
    assert span == Span(Instant(1969, 4, 29), Instant(1969, 5, 2, 15), True)


def test_both_relative_follow_default_to_past():
    future = CONFIG.replace(default_to_past=False)
    span = PARSER.parse(two_times(weekday("Monday"), THROUGH, weekday("Friday")), future)
    assert span == Span(Instant(1969, 5, 12), Instant(1969, 5, 17), True)


def test_both_specific():
    span = PARSER.parse(two_times(date("May", 6, 1969), THROUGH, date("May", 8, 1969)), CONFIG)
    assert span == Span(Instant(1969, 5, 6), Instant(1969, 5, 9), True)
    span = PARSER.parse(two_times(date("May", 6, 1969), TO, date("May", 8, 1969)), CONFIG)
    assert span == Span(Instant(1969, 5, 6), Instant(1969, 5, 8), True)


def test_misordered():
    with pytest.raises(MisorderedError) as excinfo:
        PARSER.parse(two_times(date("May", 8, 1969), TO, date("May", 6, 1969)), CONFIG)
    assert excinfo.value.kind == "Misordered"
    with pytest.raises(MisorderedError):
        PARSER.parse(two_times(tomorrow(), TO, yesterday()), CONFIG)


def test_specific_then_relative():
    # May 1, 1969 was a Thursday
    span = PARSER.parse(two_times(date("May", 1, 1969), THROUGH, weekday("Friday")), CONFIG)
    assert span == Span(Instant(1969, 5, 1), Instant(1969, 5, 3), True)
    span = PARSER.parse(two_times(today(), TO, three_pm()), CONFIG)
    assert span == Span(Instant(1969, 5, 6), Instant(1969, 5, 6, 15), True)


def test_relative_then_specific():
    # May 8, 1969 was a Thursday
    span = PARSER.parse(two_times(weekday("Monday"), THROUGH, date("May", 8, 1969)), CONFIG)
    assert span == Span(Instant(1969, 5, 5), Instant(1969, 5, 9), True)


def test_from_the_beginning():
    beginning = 'moment_or_period { moment { point_in_time { specific_time { first_time: "the beginning" } } } }'
    span = PARSER.parse(two_times(beginning, THROUGH, date("May", 6, 1969)), CONFIG)
    assert span == Span(MIN_INSTANT, Instant(1969, 5, 7), True)


def adjusted(count, unit, direction, name):
    return (
        f'moment_or_period {{ moment {{ adjustment {{ amount {{ count: "{count}" unit: "{unit}" }} '
        f'direction: "{direction}" }} point_in_time {{ some_day {{ relative_day {{ a_day: "{name}" }} }} }} }} }}'
    )


def test_adjusted_relative_end_before_specific_start():
    # the Friday after May 7 is May 9, three days before that is May 6
    with pytest.raises(MisorderedError):
        PARSER.parse(two_times(date("May", 7, 1969), TO, adjusted(3, "days", "before", "Friday")), CONFIG)


def test_adjusted_relative_start_after_specific_end():
    # the Friday before May 6 is May 2, five days after its end is May 8
    with pytest.raises(MisorderedError):
        PARSER.parse(two_times(adjusted(5, "days", "after", "Friday"), TO, date("May", 6, 1969)), CONFIG)


def test_adjusted_relative_sides_misordered():
    # Wednesday April 30, then Friday May 2 less three days is April 29
    with pytest.raises(MisorderedError):
        PARSER.parse(two_times(weekday("Wednesday"), TO, adjusted(3, "days", "before", "Friday")), CONFIG)


def test_adjusted_relative_sides_in_order():
    span = PARSER.parse(two_times(weekday("Wednesday"), TO, adjusted(1, "day", "before", "Friday")), CONFIG)
    assert span == Span(Instant(1969, 4, 30), Instant(1969, 5, 1), True)


def test_malformed_tree_is_a_parse_error():
    with pytest.raises(ParseError) as excinfo:
        PARSER.parse('particular { two_times { a_day: "Monday" ', CONFIG)
    assert excinfo.value.kind == "Parse"
    with pytest.raises(ParseError):
        two_timer.resolve("particular { one_time: }", CONFIG)


def test_range_needs_three_parts():
    with pytest.raises(ParseError):
        PARSER.parse(f"particular {{ two_times {{ {weekday('Monday')} {THROUGH} }} }}", CONFIG)


# since


def test_since_defaults_to_exclusive():
    assert PARSER.parse(since(yesterday()), CONFIG) == Span(Instant(1969, 5, 6), NOW, False)
    # "since Friday" starts when Friday is over
    assert PARSER.parse(since(weekday("Friday")), CONFIG) == Span(Instant(1969, 5, 3), NOW, False)


def test_since_flips_to_inclusive_rather_than_misorder():
    assert PARSER.parse(since(today()), CONFIG) == Span(Instant(1969, 5, 6), NOW, False)
    this_year = (
        "moment_or_period { period { specific_period { modified_period { "
        'modifier: "this" modifiable_period: "year" } } } }'
    )
    assert PARSER.parse(since(this_year), CONFIG) == Span(Instant(1969, 1, 1), NOW, False)


def test_since_with_clusivity():
    inclusive = 'inclusive: "the beginning of"'
    exclusive = 'exclusive: "the end of"'
    assert PARSER.parse(since(yesterday(), inclusive), CONFIG) == Span(Instant(1969, 5, 5), NOW, False)
    assert PARSER.parse(since(yesterday(), exclusive), CONFIG) == Span(Instant(1969, 5, 6), NOW, False)
    with pytest.raises(MisorderedError):
        PARSER.parse(since(today(), exclusive), CONFIG)


def test_since_bare_time_is_inclusive():
    ten_am = 'moment_or_period { moment { point_in_time { time { hour_12 { h12: "10" } am_pm: "AM" } } } }'
    assert PARSER.parse(since(ten_am), CONFIG) == Span(Instant(1969, 5, 6, 10), NOW, False)
    # a clock time later than now is taken from yesterday
    assert PARSER.parse(since(three_pm(), word="after"), CONFIG) == Span(Instant(1969, 5, 5, 15), NOW, False)


def test_since_the_future_is_misordered():
    with pytest.raises(MisorderedError):
        PARSER.parse(since(tomorrow()), CONFIG)
    with pytest.raises(MisorderedError):
        PARSER.parse(since(date("May", 8, 1969)), CONFIG)
