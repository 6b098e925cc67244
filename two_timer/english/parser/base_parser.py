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

from abc import ABC, abstractmethod
from datetime import timedelta

from ...core.errors import ImpossibleDateError, ParseError
from ...core.instant import Instant, is_valid_date
from ...core.logger import get_logger
from ...core.period import Period, expand
from ..vocabulary import (
    AM_PM,
    NAMED_TIMES,
    SHORT_YEAR,
    lookup,
    month_number,
    parse_ordinal,
    roman_day,
    short_year,
    weekday_number,
)


class BaseParser(ABC):
    """
    Base class for the parsers resolving one shape of tagged phrase

    All parsers inherit from this class and share its leaf readers: years,
    months, days of the month, weekdays and clock times.
    """

    def __init__(self):
        """Initialize parser"""
        self.logger = get_logger(self.__class__.__module__)

    @abstractmethod
    def parse(self, node, config):
        """
        Abstract method for resolving a tagged phrase

        Args:
            node (ParseNode): the node carrying the shape this parser handles
            config (Config): resolution policy

        Returns:
            tuple: (start, end) instants
        """
        pass

    def _required(self, node, tag):
        """First node named tag under node; ParseError if there is none"""
        found = node.first_named(tag)
        if found is None:
            raise ParseError(f'expected {tag} in "{node.text()}"')
        return found

    def _int(self, node):
        text = node.text().strip()
        try:
            return int(text)
        except ValueError:
            raise ParseError(f'"{text}" is not a number') from None

    def _make_date(self, year, month, day):
        """
        Midnight of the given day

        Raises:
            ImpossibleDateError: if the day does not exist
        """
        if not is_valid_date(year, month, day):
            raise ImpossibleDateError(
                f"cannot construct a date with year {year}, month {month}, and day {day}"
            )
        return Instant(year, month, day)

    def _year(self, node, config):  # noqa: C901
        """
        Full year named under node

        Two-digit years are placed in a century according to
        config.default_to_past, BCE years map to astronomical numbering
        (1 BCE is year 0) and signed years are taken literally.

        Args:
            node (ParseNode): node containing a year
            config (Config): supplies now and default_to_past

        Returns:
            int: signed year
        """
        year_node = self._required(node, "year")

        suffix_year = year_node.first_named("suffix_year")
        if suffix_year is not None:
            year = self._int(suffix_year)
            if year_node.has("bce"):
                return 1 - year
            return year

        n_year = year_node.first_named("n_year")
        if n_year is not None:
            return self._int(n_year)

        # short_year or an untyped leaf
        short = year_node.first_named("short_year")
        text = (short or year_node).text().strip()
        match = SHORT_YEAR.match(text)
        if match:
            return short_year(int(match.group(1)), config.now.year, config.default_to_past)
        try:
            return int(text)
        except ValueError:
            raise ParseError(f'"{text}" is not a year') from None

    def _month(self, node):
        """Month number from an a_month or n_month under node"""
        a_month = node.first_named("a_month")
        if a_month is not None:
            return month_number(a_month.text())
        return self._int(self._required(node, "n_month"))

    def _day_of_month(self, node, month):
        """
        Day of the month named under node

        Args:
            node (ParseNode): node containing an o_day or n_day
            month (int): the month, for the Roman nones and ides

        Returns:
            int: day number (not yet validated against the month)
        """
        o_day = node.first_named("o_day")
        if o_day is not None:
            roman = o_day.first_named("roman")
            if roman is not None:
                return roman_day(roman.text(), month)
            return parse_ordinal(o_day.text())
        return self._int(self._required(node, "n_day"))

    def _n_date(self, node, config):
        """Numeric date; the matcher has already decided which field is which"""
        year = self._year(node, config)
        month = self._month(node)
        day = self._int(self._required(node, "n_day"))
        return self._make_date(year, month, day)

    def _weekday(self, node):
        """Weekday number (Monday is 0) of the first a_day under node, None if there is none"""
        a_day = node.first_named("a_day")
        if a_day is None:
            return None
        return weekday_number(a_day.text())

    def _single_time(self, node):
        """
        The clock time of a moment, if any

        Raises:
            ParseError: if the moment names more than one clock time
        """
        times = node.all_named("time")
        if len(times) > 1:
            raise ParseError(f"more than one daytime specified in {node.text()}")
        return times[0] if times else None

    def _clock(self, node):  # noqa: C901
        """
        Read a clock time

        Args:
            node (ParseNode): a time node, or any node holding hour_12/hour_24 leaves

        Returns:
            tuple: (hour, minute, second, precision); hour is 24 only for 24:00:00

        Raises:
            ImpossibleDateError: if a field is out of range
        """
        named = node.first_named("named_time")
        if named is not None:
            return lookup(NAMED_TIMES, named.text(), "time of day"), 0, 0, Period.HOUR

        minute_node = node.first_named("minute")
        second_node = node.first_named("second")
        minute = self._int(minute_node) if minute_node is not None else None
        second = self._int(second_node) if second_node is not None else None

        if node.has("hour_24"):
            hour = self._int(self._required(node, "h24"))
            midnight_after = hour == 24 and not minute and not second
            if not (0 <= hour <= 23 or midnight_after):
                raise ImpossibleDateError(f"{hour} is not a valid hour in {node.text()}")
        elif node.has("hour_12"):
            hour = self._int(self._required(node, "h12"))
            if not 1 <= hour <= 12:
                raise ImpossibleDateError(f"{hour} is not a valid hour in {node.text()}")
            am_pm = node.first_named("am_pm")
            if am_pm is not None:
                pm = lookup(AM_PM, am_pm.text(), "am/pm marker")
                hour = hour % 12 + (12 if pm else 0)
        else:
            raise ParseError(f'no hour in "{node.text()}"')

        if minute is not None and not 0 <= minute <= 59:
            raise ImpossibleDateError(f"{minute} is not a valid minute in {node.text()}")
        if second is not None and not 0 <= second <= 59:
            raise ImpossibleDateError(f"{second} is not a valid second in {node.text()}")

        if second is not None:
            precision = Period.SECOND
        elif minute is not None:
            precision = Period.MINUTE
        else:
            precision = Period.HOUR
        return hour, minute or 0, second or 0, precision

    def _at_clock(self, day, node):
        """
        Put the clock time read from node on day

        Returns:
            tuple: (instant, precision)
        """
        hour, minute, second, precision = self._clock(node)
        moment = day.start_of_day() + timedelta(hours=hour, minutes=minute, seconds=second)
        return moment, precision

    def _moment_and_time(self, instant, period, time, config):
        """
        Expand instant to period, or to the precision of time on instant's day when a time is given

        Returns:
            tuple: (start, end)
        """
        if time is not None:
            moment, precision = self._at_clock(instant, time)
            return expand(moment, precision, config)
        return expand(instant, period, config)
