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

from datetime import timedelta

from ...core.errors import ParseError, WeekdayError
from ...core.period import Period
from ..vocabulary import ADVERBS, Adverb, WEEKDAY_NAMES, lookup
from .base_parser import BaseParser


class DayParser(BaseParser):
    """
    Specific day parser for English

    Handles days that need no context beyond now:
    - now, today, tomorrow, yesterday
    - numeric dates with a year: 1969-05-06, 5/6/69
    - alphabetic dates with a year: May 6, 1969; Tuesday, May 6, 1969; the ides of March, 44 BCE
    each optionally with a clock time: 3:30 PM on May 6, 1969
    """

    ADVERB_DAYS = {Adverb.TODAY: 0, Adverb.TOMORROW: 1, Adverb.YESTERDAY: -1}

    def parse(self, node, config):
        """
        Resolve a specific day

        Args:
            node (ParseNode): a moment containing specific_day
            config (Config): resolution policy

        Returns:
            tuple: (start, end), the whole day or the clock time's precision on it
        """
        time = self._single_time(node)

        adverb = node.first_named("adverb")
        if adverb is not None:
            kind = lookup(ADVERBS, adverb.text(), "adverb")
            self.logger.debug(f"adverb {kind.value}")
            if kind is Adverb.NOW:
                return self._moment_and_time(config.now, config.default_period, time, config)
            day = config.now + timedelta(days=self.ADVERB_DAYS[kind])
            return self._moment_and_time(day, Period.DAY, time, config)

        n_date = node.first_named("n_date")
        if n_date is not None:
            day = self._n_date(n_date, config)
            return self._moment_and_time(day, Period.DAY, time, config)

        a_date = node.first_named("a_date")
        if a_date is not None:
            day = self._a_date(a_date, config)
            return self._moment_and_time(day, Period.DAY, time, config)

        raise ParseError(f'cannot interpret "{node.text()}" as a specific day')

    def _a_date(self, node, config):
        """
        Alphabetic date, checking the weekday when one is given

        Raises:
            WeekdayError: if the weekday does not match the date
        """
        year = self._year(node, config)
        month = self._month(node)
        date = self._make_date(year, month, self._day_of_month(node, month))
        weekday = self._weekday(node)
        if weekday is not None and weekday != date.weekday():
            raise WeekdayError(
                f"the weekday of year {year}, month {month}, day {date.day} "
                f"is not {WEEKDAY_NAMES[weekday].capitalize()}"
            )
        return date
