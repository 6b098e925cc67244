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

from .day_parser import DayParser
from .period_parser import PeriodParser
from .specific_time_parser import SpecificTimeParser
from .relative_parser import RelativeParser
from .moment_parser import MomentParser, specific
from .range_parser import RangeParser, pick_terminus
from .since_parser import SinceParser
