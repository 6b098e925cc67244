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

from ...core.errors import MisorderedError, ParseError
from ..vocabulary import is_through
from .base_parser import BaseParser
from .moment_parser import specific


def pick_terminus(d1, d2, through):
    """
    End of a range given the interval of its second half

    Within a single calendar day the range ends where that interval starts;
    otherwise inclusive prepositions take the end of the interval and
    exclusive ones its start.
    """
    if d1.same_day(d2):
        return d1
    return d2 if through else d1


class RangeParser(BaseParser):
    """
    Range parser for English

    Handles two moments joined by a preposition:
    - Monday through Friday, Monday to Friday, Monday - Friday
    - May 6, 1969 until next Tuesday
    - Tuesday through 3 PM on Friday
    Whichever sides are specific are resolved first and anchor the others.
    """

    def __init__(self, moment_parser):
        """
        Initialize range parser

        Args:
            moment_parser (MomentParser): resolves each side of the range
        """
        super().__init__()
        self.moment_parser = moment_parser

    def _through(self, preposition):
        if preposition.has("through"):
            return True
        if preposition.has("up_to"):
            return False
        return is_through(preposition.text())

    def parse(self, node, config):  # noqa: C901
        """
        Resolve a two-part range

        Args:
            node (ParseNode): two_times node with children (first, preposition, last)
            config (Config): resolution policy

        Returns:
            tuple: (start, end)

        Raises:
            MisorderedError: if the first side comes after the end of the range
        """
        children = node.children()
        if len(children) != 3:
            raise ParseError(f'expected "time to time" in "{node.text()}"')
        first, preposition, last = children
        through = self._through(preposition)
        first_specific, last_specific = specific(first), specific(last)
        self.logger.debug(
            f"range {first.text()!r} ({'specific' if first_specific else 'relative'}) "
            f"{'through' if through else 'to'} "
            f"{last.text()!r} ({'specific' if last_specific else 'relative'})"
        )

        moments = self.moment_parser
        if first_specific and last_specific:
            d1, _ = moments.parse_specific(first, config)
            d2 = pick_terminus(*moments.parse_specific(last, config), through)
        elif first_specific:
            d1, _ = moments.parse_specific(first, config)
            d2 = pick_terminus(*moments.parse_relative(last, config, d1, False), through)
        elif last_specific:
            d2 = pick_terminus(*moments.parse_specific(last, config), through)
            d1, _ = moments.parse_relative(first, config, d2, True)
        else:
            d1, _ = moments.parse_relative(first, config, config.now, config.default_to_past)
            d2 = pick_terminus(*moments.parse_relative(last, config, d1, False), through)

        # an adjusted side can land before the other whatever the resolution order
        if d1 > d2:
            raise MisorderedError(f"{first.text()} is after {last.text()}")
        return d1, d2
