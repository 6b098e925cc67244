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
Immutable resolution policy threaded through every parser call.
"""

from dataclasses import dataclass, field, replace as dataclass_replace
from datetime import date
from typing import Any, Dict, Optional

from .instant import Instant
from .period import Period


def _to_instant(value) -> Optional[Instant]:
    if value is None or isinstance(value, Instant):
        return value
    if isinstance(value, date):
        return Instant.from_datetime(value)
    if isinstance(value, str):
        return Instant.fromisoformat(value)
    raise TypeError(f"cannot use {value!r} as an instant")


@dataclass(frozen=True)
class Config:
    """
    Disambiguation context for one resolution

    Attributes:
        now: the instant relative expressions are resolved against
        monday_starts_week: weeks start on Monday when True, on Sunday otherwise
        default_period: precision of "now" and of "the beginning" when no clock time is given
        pay_period_length: pay period length in days
        pay_period_start: any day on which a pay period starts, None if pay periods are unknown
        default_to_past: lean towards the past when a phrase is ambiguous
    """

    now: Instant = field(default_factory=Instant.now)
    monday_starts_week: bool = True
    default_period: Period = Period.MINUTE
    pay_period_length: int = 7
    pay_period_start: Optional[Instant] = None
    default_to_past: bool = True

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "now", _to_instant(self.now))
        object.__setattr__(self, "pay_period_start", _to_instant(self.pay_period_start))
        if isinstance(self.default_period, str):
            object.__setattr__(self, "default_period", Period(self.default_period))
        if self.pay_period_length < 1:
            raise ValueError(f"pay_period_length must be positive, not {self.pay_period_length}")

    def replace(self, **changes) -> "Config":
        """Copy with some fields changed"""
        return dataclass_replace(self, **changes)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "Config":
        """
        Build a Config from plain values, e.g. a JSON object

        Instants may be ISO strings and default_period a period name ("day").
        Unknown keys raise TypeError.
        """
        return cls(**values)
