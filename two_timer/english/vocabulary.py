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
Fixed English vocabulary of the resolver.

Every table maps normalized matched text (case-folded, whitespace collapsed,
trailing period dropped) onto a number or an enum member. The tables are built
once at import and never mutated.
"""

import re
from enum import Enum
from typing import Union

import inflect

from ..core.errors import ParseError
from ..core.period import Period

_inflect = inflect.engine()


def normalize(text: str) -> str:
    """Case-fold, collapse whitespace and drop one trailing period"""
    text = " ".join(text.lower().split())
    if text.endswith("."):
        text = text[:-1]
    return text


def num_to_word(x: Union[str, int]):
    """
    converts integer to spoken representation

    Args
        x: integer

    Returns: spoken representation
    """
    if isinstance(x, int):
        x = _inflect.number_to_words(str(x))
    return x


def lookup(table, text, what):
    """
    Look matched text up in one of the tables below

    Raises:
        ParseError: naming the text when it is not in the table
    """
    try:
        return table[normalize(text)]
    except KeyError:
        raise ParseError(f'"{text}" is not a known {what}') from None


class PeriodModifier(Enum):
    """this/last/next; the value is the step away from the current period"""

    THIS = 0
    LAST = -1
    NEXT = 1


class ModifiablePeriod(Enum):
    WEEK = "week"
    WEEKEND = "weekend"
    MONTH = "month"
    YEAR = "year"
    PAY_PERIOD = "pay period"


class Adverb(Enum):
    NOW = "now"
    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"


class Direction(Enum):
    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"
    BEFORE_AND_AFTER = "before and after"


# weekdays: Monday is 0, as for datetime.weekday()
WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
WEEKDAYS = {}
for number, name in enumerate(WEEKDAY_NAMES):
    for form in (name, name[:2], name[:3]):
        WEEKDAYS[form] = number
WEEKDAYS.update(
    {
        "tues": 1,
        "weds": 2,
        "thur": 3,
        "thurs": 3,
        # single letters
        "m": 0,
        "t": 1,
        "w": 2,
        "r": 3,
        "f": 4,
        "s": 5,
        "u": 6,
    }
)

MONTH_NAMES = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]
MONTHS = {}
for number, name in enumerate(MONTH_NAMES, 1):
    MONTHS[name] = number
    MONTHS[name[:3]] = number
MONTHS["sept"] = 9

# one..ten, plus the indefinite article
CARDINALS = {num_to_word(n): n for n in range(1, 11)}
CARDINALS.update({"a": 1, "an": 1})

# first..thirty-first and 1st..31st
ORDINALS = {}
for n in range(1, 32):
    word = _inflect.ordinal(num_to_word(n))
    ORDINALS[word] = n
    ORDINALS[word.replace("-", " ")] = n
    ORDINALS[_inflect.ordinal(n)] = n

ROMAN_DAYS = {"kalends": "kalends", "calends": "kalends", "nones": "nones", "ides": "ides"}
# months whose nones and ides fall two days late
LATE_ROMAN_MONTHS = (3, 5, 7, 10)

MODIFIERS = {"this": PeriodModifier.THIS, "last": PeriodModifier.LAST, "next": PeriodModifier.NEXT}

MODIFIABLE_PERIODS = {
    "week": ModifiablePeriod.WEEK,
    "weekend": ModifiablePeriod.WEEKEND,
    "month": ModifiablePeriod.MONTH,
    "year": ModifiablePeriod.YEAR,
    "pay period": ModifiablePeriod.PAY_PERIOD,
    "payperiod": ModifiablePeriod.PAY_PERIOD,
    "pp": ModifiablePeriod.PAY_PERIOD,
}

ADVERBS = {adverb.value: adverb for adverb in Adverb}

DIRECTIONS = {direction.value: direction for direction in Direction}
DIRECTIONS["before or after"] = Direction.BEFORE_AND_AFTER

UNITS = {}
for period, words in (
    (Period.SECOND, ["second", "sec", "secs", "s"]),
    (Period.MINUTE, ["minute", "min", "mins", "m"]),
    (Period.HOUR, ["hour", "hr", "hrs", "h"]),
    (Period.DAY, ["day", "d"]),
    (Period.WEEK, ["week", "wk", "wks", "w"]),
    (Period.MONTH, ["month", "mo", "mos"]),
    (Period.YEAR, ["year", "yr", "yrs", "y"]),
    (Period.PAY_PERIOD, ["pay period", "pay periods", "payperiod", "payperiods", "pp", "pps"]),
):
    for word in words:
        UNITS[word] = period
    if " " not in words[0]:
        UNITS[_inflect.plural_noun(words[0])] = period

AM_PM = {"am": False, "a.m": False, "pm": True, "p.m": True}

NAMED_TIMES = {"noon": 12, "midday": 12, "midnight": 0}

# prepositions joining the two halves of a range; True for the inclusive ones
PREPOSITIONS = {
    "to": False,
    "until": False,
    "till": False,
    "til": False,
    "up to": False,
    "up until": False,
    "through": True,
    "thru": True,
    "throughout": True,
}
DASH_RUN = re.compile(r"^-+$")

SHORT_YEAR = re.compile(r"^(?:'0?|0)?(\d{1,2})$")


def weekday_number(text: str) -> int:
    return lookup(WEEKDAYS, text, "weekday")


def month_number(text: str) -> int:
    return lookup(MONTHS, text, "month")


def lookup_unit(text: str) -> Period:
    """Map a unit word ("days", "hr", "pay period") onto its Period"""
    return lookup(UNITS, text, "unit of time")


def parse_count(text: str) -> int:
    """Digits, one..ten, or a/an"""
    text = normalize(text)
    if text.isdigit():
        return int(text)
    return lookup(CARDINALS, text, "count")


def parse_ordinal(text: str) -> int:
    """Day of month named by an ordinal: "first", "twenty first", "21st" """
    return lookup(ORDINALS, text, "ordinal")


def roman_day(text: str, month: int) -> int:
    """
    Day of month of the kalends, nones or ides

    Args:
        text (str): kalends, calends, nones or ides
        month (int): month number, 1-12

    Returns:
        int: 1 for the kalends; 7 or 5 for the nones; 15 or 13 for the ides
    """
    name = lookup(ROMAN_DAYS, text, "Roman day")
    if name == "kalends":
        return 1
    late = month in LATE_ROMAN_MONTHS
    if name == "nones":
        return 7 if late else 5
    return 15 if late else 13


def is_through(text: str) -> bool:
    """True for inclusive range prepositions and dash runs, False for to/until"""
    if DASH_RUN.match(text.strip()):
        return True
    return lookup(PREPOSITIONS, text, "range preposition")


def short_year(year: int, now_year: int, default_to_past: bool) -> int:
    """
    Place a two-digit year in a century

    Looking back, a short year after the current one lands in the previous
    century; looking forward, one before the current year lands in the next.

    Args:
        year (int): 0-99
        now_year (int): the current full year
        default_to_past (bool): which way ambiguity is resolved

    Returns:
        int: the full year
    """
    this_year = now_year % 100
    century = now_year - this_year
    if default_to_past:
        if year > this_year:
            return century - 100 + year
        return century + year
    if year < this_year:
        return century + 100 + year
    return century + year
