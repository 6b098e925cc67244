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
Errors raised while resolving a tagged time phrase.

Every failure reachable from a well-formed tree is one of the TimeError
subclasses below; callers can branch on the class or on ``kind``.
"""


class TimeError(Exception):
    """Base class of all resolution failures"""

    kind = "TimeError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(TimeError):
    """The phrase was not recognized, or its tree has a shape the resolver cannot use"""

    kind = "Parse"


class MisorderedError(TimeError):
    """A range ends before it starts, or a since-anchor lies after now"""

    kind = "Misordered"


class ImpossibleDateError(TimeError):
    """A year/month/day (or clock) combination that does not exist"""

    kind = "ImpossibleDate"


class WeekdayError(TimeError):
    """An explicit weekday disagrees with the date it accompanies"""

    kind = "Weekday"


class NoPayPeriodError(TimeError):
    """Pay-period vocabulary used without a configured pay period start"""

    kind = "NoPayPeriod"


ERROR_KINDS = {
    cls.kind: cls
    for cls in (ParseError, MisorderedError, ImpossibleDateError, WeekdayError, NoPayPeriodError)
}
