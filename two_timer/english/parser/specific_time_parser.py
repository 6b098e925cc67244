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
from ...core.instant import MAX_INSTANT, MIN_INSTANT
from ...core.period import Period, expand
from .base_parser import BaseParser


class SpecificTimeParser(BaseParser):
    """
    Specific time parser for English

    Handles:
    - the beginning of time, the big bang
    - the end of time, eternity
    - a numeric date with a 24 hour clock time: 1969-05-06 15:30:01
    """

    def parse(self, node, config):
        if node.has("first_time"):
            return expand(MIN_INSTANT, config.default_period, config)
        if node.has("last_time"):
            return MAX_INSTANT, MAX_INSTANT

        precise_time = node.first_named("precise_time")
        if precise_time is None:
            raise ParseError(f'cannot interpret "{node.text()}" as a specific time')
        n_date = self._required(precise_time, "n_date")
        day = self._n_date(n_date, config)
        moment, _ = self._at_clock(day, precise_time)
        return expand(moment, Period.SECOND, config)
