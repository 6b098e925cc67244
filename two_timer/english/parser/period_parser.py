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

from dateutil.relativedelta import relativedelta

from ...core.errors import NoPayPeriodError, ParseError
from ...core.instant import Instant
from ...core.period import DURATIONS, Period, expand
from ..vocabulary import (
    MODIFIABLE_PERIODS,
    MODIFIERS,
    ModifiablePeriod,
    PeriodModifier,
    lookup,
    lookup_unit,
    parse_count,
)
from .base_parser import BaseParser


class PeriodParser(BaseParser):
    """
    Specific period parser for English

    Handles periods such as:
    - three days ago, a week from now
    - May 1969
    - this week, last weekend, next month, this pay period
    - next May, last Friday
    - 1969, 44 BCE
    """

    def parse(self, node, config):  # noqa: C901
        """
        Resolve a specific period

        Args:
            node (ParseNode): node containing specific_period
            config (Config): resolution policy

        Returns:
            tuple: (start, end)
        """
        relative_period = node.first_named("relative_period")
        if relative_period is not None:
            return self._relative_period(relative_period, config)

        month_and_year = node.first_named("month_and_year")
        if month_and_year is not None:
            start = self._make_date(self._year(month_and_year, config), self._month(month_and_year), 1)
            return expand(start, Period.MONTH, config)

        modified_period = node.first_named("modified_period")
        if modified_period is not None:
            return self._modified_period(modified_period, config)

        if node.has("year"):
            return expand(Instant(self._year(node, config)), Period.YEAR, config)

        raise ParseError(f'cannot interpret "{node.text()}" as a period')

    def _shift(self, instant, unit, count, config):
        """Move instant by count units; calendar units move by calendar months and years"""
        if unit is Period.MONTH:
            return instant + relativedelta(months=count)
        if unit is Period.YEAR:
            return instant + relativedelta(years=count)
        if unit is Period.PAY_PERIOD:
            if config.pay_period_start is None:
                raise NoPayPeriodError("no pay period start date provided")
            return instant + timedelta(days=count * config.pay_period_length)
        return instant + DURATIONS[unit] * count

    def _relative_period(self, node, config):
        """
        "N units ago" or "N units from now"

        The shifted instant is expanded to the unit containing it, except that
        weeks are the seven days starting at the shifted instant.
        """
        count = parse_count(self._required(node, "count").text())
        unit = lookup_unit(self._required(node, "displacement").text())
        if node.has("ago"):
            count = -count
        elif not node.has("from_now"):
            raise ParseError(f'expected "ago" or "from now" in "{node.text()}"')

        shifted = self._shift(config.now, unit, count, config)
        self.logger.debug(f"{node.text()} shifts now to {shifted}")
        if unit is Period.WEEK:
            return shifted, shifted + timedelta(days=7)
        return expand(shifted, unit, config)

    def _modified_period(self, node, config):  # noqa: C901
        """
        this/last/next followed by a period; no modifier means this

        Args:
            node (ParseNode): modified_period node
            config (Config): resolution policy

        Returns:
            tuple: (start, end)
        """
        modifier_node = node.first_named("modifier")
        if modifier_node is None:
            modifier = PeriodModifier.THIS
        else:
            modifier = lookup(MODIFIERS, modifier_node.text(), "period modifier")
        step = modifier.value
        now = config.now

        if node.has("a_month"):
            start = Instant(now.year, self._month(node)) + relativedelta(years=step)
            return expand(start, Period.MONTH, config)

        weekday = self._weekday(node)
        if weekday is not None:
            week_start, _ = expand(now, Period.WEEK, config)
            day = week_start + timedelta(days=(weekday - week_start.weekday()) % 7 + 7 * step)
            return expand(day, Period.DAY, config)

        period = lookup(MODIFIABLE_PERIODS, self._required(node, "modifiable_period").text(), "period")
        self.logger.debug(f"{modifier.name.lower()} {period.value}")

        if period is ModifiablePeriod.WEEK:
            start, _ = expand(now, Period.WEEK, config)
            start += timedelta(days=7 * step)
            return start, start + timedelta(days=7)

        if period is ModifiablePeriod.WEEKEND:
            # Saturday and Sunday closing the Monday-started week
            monday = now.start_of_day() - timedelta(days=now.weekday())
            end = monday + timedelta(days=7 + 7 * step)
            return end - timedelta(days=2), end

        if period is ModifiablePeriod.MONTH:
            start, _ = expand(now, Period.MONTH, config)
            return expand(start + relativedelta(months=step), Period.MONTH, config)

        if period is ModifiablePeriod.YEAR:
            return expand(Instant(now.year + step), Period.YEAR, config)

        start, _ = expand(now, Period.PAY_PERIOD, config)
        start += timedelta(days=step * config.pay_period_length)
        return start, start + timedelta(days=config.pay_period_length)
