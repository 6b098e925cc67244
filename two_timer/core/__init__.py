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
Language-independent building blocks of the resolver.

Main components:
- Instant: signed-year calendar instant with timedelta/relativedelta arithmetic
- Period, expand: calendar granularities and interval expansion
- Config: immutable resolution policy
- ParseNode, Node, TreeParser: the tagged parse tree contract and its serialization
- TimeError and subclasses: typed resolution failures
"""

from .config import Config
from .errors import (
    ERROR_KINDS,
    ImpossibleDateError,
    MisorderedError,
    NoPayPeriodError,
    ParseError,
    TimeError,
    WeekdayError,
)
from .instant import MAX_INSTANT, MIN_INSTANT, Instant, days_in_month, is_leap_year, is_valid_date
from .logger import auto_setup, get_logger, setup_logging
from .period import Period, expand
from .tree_parser import Node, ParseNode, TreeParser, parse_tree

__all__ = [
    "Config",
    "ERROR_KINDS",
    "ImpossibleDateError",
    "MisorderedError",
    "NoPayPeriodError",
    "ParseError",
    "TimeError",
    "WeekdayError",
    "MAX_INSTANT",
    "MIN_INSTANT",
    "Instant",
    "days_in_month",
    "is_leap_year",
    "is_valid_date",
    "auto_setup",
    "get_logger",
    "setup_logging",
    "Period",
    "expand",
    "Node",
    "ParseNode",
    "TreeParser",
    "parse_tree",
]
