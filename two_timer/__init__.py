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
two_timer: resolve tagged English time phrases to instant intervals.

Usage::

    from two_timer import Config, resolve

    span = resolve(
        'particular { one_time { moment_or_period { moment { point_in_time {'
        ' some_day { specific_day { adverb: "today" } } } } } } }',
        Config(now="1969-05-06T12:00:00"),
    )
    # span.start == Instant(1969, 5, 6), span.end == Instant(1969, 5, 7)
"""

from .core import (
    MAX_INSTANT,
    MIN_INSTANT,
    Config,
    ImpossibleDateError,
    Instant,
    MisorderedError,
    Node,
    NoPayPeriodError,
    ParseError,
    ParseNode,
    Period,
    TimeError,
    TreeParser,
    WeekdayError,
)
from .english import Span, TimeParser

__version__ = "1.0.0"

_parser = None


def resolve(tree, config=None):
    """
    Resolve a tagged phrase

    Args:
        tree (ParseNode or str): tagged parse or its serialization
        config (Config, optional): resolution policy, Config() when omitted

    Returns:
        Span: (start, end, is_range)
    """
    global _parser
    if _parser is None:
        _parser = TimeParser()
    return _parser.parse(tree, config)


__all__ = [
    "MAX_INSTANT",
    "MIN_INSTANT",
    "Config",
    "ImpossibleDateError",
    "Instant",
    "MisorderedError",
    "Node",
    "NoPayPeriodError",
    "ParseError",
    "ParseNode",
    "Period",
    "Span",
    "TimeError",
    "TimeParser",
    "TreeParser",
    "WeekdayError",
    "resolve",
]
