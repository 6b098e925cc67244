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

from ...core.errors import ImpossibleDateError, ParseError
from ...core.instant import Instant, is_valid_date
from ...core.period import Period, expand
from .base_parser import BaseParser


class RelativeParser(BaseParser):
    """
    Relative time parser for English

    Resolves phrases that only make sense next to another time, the anchor,
    looking either before or after it:
    - Friday, Fri (nearest Friday strictly before or after the anchor)
    - 3 PM, noon (on the anchor's day, or the day before or after)
    - May (the nearest May)
    - the 5th, Friday the 13th, the ides (searching month by month)
    - June 5, the fifth of June, 6/5 (searching year by year)
    each optionally with a clock time: 3 PM on Friday
    """

    # 28 years of months
    MAX_MONTH_SEARCH = 336
    MAX_YEAR_SEARCH = 400

    def parse(self, node, config, anchor=None, before=None):  # noqa: C901
        """
        Resolve a relative moment

        Args:
            node (ParseNode): moment or period without specific parts
            config (Config): resolution policy
            anchor (Instant, optional): reference time, defaults to config.now
            before (bool, optional): look before the anchor rather than after it,
                defaults to config.default_to_past

        Returns:
            tuple: (start, end)
        """
        if anchor is None:
            anchor = config.now
        if before is None:
            before = config.default_to_past
        time = self._single_time(node)

        day_in_month = node.first_named("a_day_in_month")
        if day_in_month is not None:
            if day_in_month.has("a_month") or day_in_month.has("n_month"):
                day = self._day_and_month(day_in_month, anchor, before)
            else:
                day = self._day_in_some_month(day_in_month, anchor, before)
            return self._moment_and_time(day, Period.DAY, time, config)

        weekday = self._weekday(node)
        if weekday is not None:
            day = self._nearest_weekday(weekday, anchor, before)
            return self._moment_and_time(day, Period.DAY, time, config)

        if node.has("a_month"):
            return self._nearest_month(self._month(node), anchor, before, config)

        if time is not None:
            return self._nearest_time(time, anchor, before, config)

        raise ParseError(f'cannot interpret "{node.text()}" as a time')

    def _on_correct_side(self, day, anchor, before):
        """A day qualifies if it is the anchor's day or lies on the requested side of it"""
        if before:
            return day <= anchor
        return day >= anchor.start_of_day()

    def _nearest_weekday(self, weekday, anchor, before):
        """Closest day with that weekday strictly before or after the anchor's day"""
        if before:
            distance = (anchor.weekday() - weekday) % 7 or 7
            return anchor.start_of_day() - timedelta(days=distance)
        distance = (weekday - anchor.weekday()) % 7 or 7
        return anchor.start_of_day() + timedelta(days=distance)

    def _nearest_time(self, time, anchor, before, config):
        moment, precision = self._at_clock(anchor, time)
        if before and moment > anchor:
            moment -= timedelta(days=1)
        elif not before and moment < anchor:
            moment += timedelta(days=1)
        return expand(moment, precision, config)

    def _nearest_month(self, month, anchor, before, config):
        start, end = expand(Instant(anchor.year, month), Period.MONTH, config)
        if before and start >= anchor:
            start, end = expand(Instant(anchor.year - 1, month), Period.MONTH, config)
        elif not before and end <= anchor:
            start, end = expand(Instant(anchor.year + 1, month), Period.MONTH, config)
        return start, end

    def _day_in_some_month(self, node, anchor, before):
        """
        "the 5th", "Friday the 13th", "the ides": walk month by month from the anchor's month

        Raises:
            ImpossibleDateError: if no month within 28 years has a matching day
        """
        weekday = self._weekday(node)
        step = -1 if before else 1
        months = anchor.year * 12 + anchor.month - 1
        for _ in range(self.MAX_MONTH_SEARCH):
            year, month = divmod(months, 12)
            month += 1
            day = self._day_of_month(node, month)
            if is_valid_date(year, month, day):
                candidate = Instant(year, month, day)
                if self._on_correct_side(candidate, anchor, before) and (
                    weekday is None or candidate.weekday() == weekday
                ):
                    return candidate
            months += step
        raise ImpossibleDateError(f'could not find a date matching "{node.text()}" near {anchor}')

    def _day_and_month(self, node, anchor, before):
        """
        "June 5", "the fifth of June": the nearest year where the date exists on the correct side

        Raises:
            ImpossibleDateError: if no such year is found
        """
        weekday = self._weekday(node)
        month = self._month(node)
        day = self._day_of_month(node, month)
        year = anchor.year
        for _ in range(self.MAX_YEAR_SEARCH):
            if is_valid_date(year, month, day):
                candidate = Instant(year, month, day)
                if self._on_correct_side(candidate, anchor, before) and (
                    weekday is None or candidate.weekday() == weekday
                ):
                    return candidate
            year += -1 if before else 1
        raise ImpossibleDateError(f'could not find a date matching "{node.text()}" near {anchor}')
