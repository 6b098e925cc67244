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
English time phrase resolution.

TimeParser dispatches a tagged phrase to the parser for its shape:
- MomentParser: one moment or period (specific days, periods and times, or relative ones)
- RangeParser: two moments joined by to/through
- SinceParser: since/after clauses
"""

from .time_parser import Span, TimeParser

__all__ = ["Span", "TimeParser"]
