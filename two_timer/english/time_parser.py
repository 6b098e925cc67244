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

from typing import NamedTuple

from .parser import MomentParser, RangeParser, SinceParser
from ..core.config import Config
from ..core.errors import ParseError
from ..core.instant import MAX_INSTANT, MIN_INSTANT, Instant
from ..core.tree_parser import TreeParser
from ..core.logger import get_logger


class Span(NamedTuple):
    """Resolved phrase: the half-open interval and whether it was written as a range"""

    start: Instant
    end: Instant
    is_range: bool


class TimeParser:
    """Convert tagged English time phrases to instant intervals"""

    # top-level shapes whose result is an explicit two-part range
    RANGE_TAGS = {"two_times"}

    def __init__(self):
        """
        Initialize English time parser
        """
        self.logger = get_logger(__name__)
        moment_parser = MomentParser()
        # Initialize all parsers, keyed by the tag they resolve
        self.parsers = {
            "two_times": RangeParser(moment_parser),
            "since_time": SinceParser(moment_parser),
            "one_time": moment_parser,
        }

    def _parse_tree(self, tree):
        """
        Accept serialized trees as well as ParseNode instances

        Raises:
            ParseError: if the serialization is malformed
        """
        if isinstance(tree, str):
            try:
                return TreeParser().parse(tree)
            except ValueError as e:
                raise ParseError(str(e)) from e
        return tree

    def parse(self, tree, config=None):
        """
        Resolve a tagged phrase

        Args:
            tree (ParseNode or str): the tagged parse, or its serialization
            config (Config, optional): resolution policy, Config() when omitted

        Returns:
            Span: (start, end, is_range)

        Raises:
            TimeError: the subclass naming what went wrong
        """
        tree = self._parse_tree(tree)
        if config is None:
            config = Config()

        if tree.has("universal"):
            self.logger.debug(f"{tree.text()!r} is universal")
            return Span(MIN_INSTANT, MAX_INSTANT, False)

        particular = tree.first_named("particular") or tree
        for tag, parser in self.parsers.items():
            node = particular.first_named(tag)
            if node is None:
                continue
            self.logger.debug(f"resolving {tag} {node.text()!r} with {parser.__class__.__name__}")
            start, end = parser.parse(node, config)
            return Span(start, end, tag in self.RANGE_TAGS)

        raise ParseError(f'could not parse "{tree.text()}" as a time expression')
