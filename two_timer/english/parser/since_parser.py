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

from ...core.errors import MisorderedError
from .base_parser import BaseParser
from .moment_parser import specific


class SinceParser(BaseParser):
    """
    Since parser for English

    Handles open ranges running up to now:
    - since Friday, after May 1969
    - since the beginning of the year (inclusive)
    - since the end of last week (exclusive)
    - since noon
    """

    def __init__(self, moment_parser):
        super().__init__()
        self.moment_parser = moment_parser

    def parse(self, node, config):
        """
        Resolve a since clause

        "the beginning of" starts the range at the anchor's start, "the end
        of" at its end, and a bare clock time at its start. Otherwise the end
        is used unless that lies after now, in which case the start is.

        Args:
            node (ParseNode): since_time node
            config (Config): resolution policy

        Returns:
            tuple: (bound, now)

        Raises:
            MisorderedError: if the range would start after now
        """
        moment = self._required(node, "moment_or_period")
        if specific(moment):
            start, end = self.moment_parser.parse_specific(moment, config)
        else:
            start, end = self.moment_parser.parse_relative(moment, config, config.now, True)

        now = config.now
        clusivity = node.first_named("clusivity")
        if clusivity is not None and clusivity.has("inclusive"):
            bound = start
        elif clusivity is not None and clusivity.has("exclusive"):
            bound = end
        elif self._bare_time(moment):
            bound = start
        else:
            bound = end if end <= now else start
        self.logger.debug(f"since {moment.text()!r} starts at {bound}")

        if bound > now:
            raise MisorderedError(f"{moment.text()} is after now")
        return bound, now

    def _bare_time(self, moment):
        return moment.has("time") and not moment.has("some_day") and not specific(moment)
