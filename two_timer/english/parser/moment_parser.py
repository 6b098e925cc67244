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

from ...core.errors import ParseError
from ...core.period import DURATIONS
from ..vocabulary import DIRECTIONS, Direction, lookup, lookup_unit, parse_count
from .base_parser import BaseParser
from .day_parser import DayParser
from .period_parser import PeriodParser
from .relative_parser import RelativeParser
from .specific_time_parser import SpecificTimeParser


def specific(node):
    """True if node can be resolved without an anchor"""
    return node.has("specific_day") or node.has("specific_period") or node.has("specific_time")


class MomentParser(BaseParser):
    """
    Moment parser for English

    Resolves one side of a phrase (a moment or a period), handing specific
    shapes to the day, period and time parsers and the rest to the relative
    parser, then applies any adjustment such as "two hours before".
    """

    def __init__(self):
        """Initialize moment parser"""
        super().__init__()
        self.day_parser = DayParser()
        self.period_parser = PeriodParser()
        self.specific_time_parser = SpecificTimeParser()
        self.relative_parser = RelativeParser()

    def parse(self, node, config):
        """
        Resolve a moment on its own, relative moments against now

        Args:
            node (ParseNode): one_time or moment_or_period node
            config (Config): resolution policy

        Returns:
            tuple: (start, end)
        """
        if specific(node):
            return self.parse_specific(node, config)
        return self.parse_relative(node, config, config.now, config.default_to_past)

    def parse_specific(self, node, config):
        if node.has("specific_day"):
            interval = self.day_parser.parse(node, config)
        elif node.has("specific_period"):
            interval = self.period_parser.parse(self._required(node, "specific_period"), config)
        elif node.has("specific_time"):
            interval = self.specific_time_parser.parse(self._required(node, "specific_time"), config)
        else:
            raise ParseError(f'"{node.text()}" is not a specific time')
        return self._adjust(node, interval)

    def parse_relative(self, node, config, anchor, before):
        interval = self.relative_parser.parse(node, config, anchor, before)
        return self._adjust(node, interval)

    def _adjust(self, node, interval):
        """
        Apply "N units before/after/around" to a resolved interval

        before gives the point N units before the start, after the point N
        units after the end, before and after the span of N units either side
        of the start, around the span of N units centred on the start.
        """
        adjustment = node.first_named("adjustment")
        if adjustment is None:
            return interval

        count = parse_count(self._required(adjustment, "count").text())
        unit_node = self._required(adjustment, "unit")
        unit = lookup_unit(unit_node.text())
        if unit not in DURATIONS:
            raise ParseError(f'"{unit_node.text()}" has no fixed length in "{adjustment.text()}"')
        duration = DURATIONS[unit] * count
        direction = lookup(DIRECTIONS, self._required(adjustment, "direction").text(), "direction")
        self.logger.debug(f"adjusting {interval[0]} by {direction.value} {duration}")

        start, end = interval
        if direction is Direction.BEFORE:
            point = start - duration
            return point, point
        if direction is Direction.AFTER:
            point = end + duration
            return point, point
        if direction is Direction.BEFORE_AND_AFTER:
            return start - duration, start + duration
        half = duration / 2
        return start - half, start + half
