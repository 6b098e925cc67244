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
Tests for tagged trees and their serialization
"""

import os
import sys

import pytest

# Add the project root to the Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(current_dir, "../../..")
sys.path.insert(0, os.path.abspath(project_root))

from two_timer.core.config import Config  # noqa: E402
from two_timer.core.instant import Instant  # noqa: E402
from two_timer.core.tree_parser import Node, ParseNode, TreeParser, parse_tree  # noqa: E402
from two_timer.english import Span, TimeParser  # noqa: E402

TREE = (
    'two_times { moment_or_period { a_day: "Monday" } '
    'to { through: "through" } '
    'moment_or_period { a_day: "Friday" } }'
)


def test_parse_nested():
    root = TreeParser().parse(TREE)
    assert isinstance(root, ParseNode)
    assert root.tag == "two_times"
    first, to, last = root.children()
    assert first.tag == "moment_or_period"
    assert to.first_named("through").text() == "through"
    assert last.text() == "Friday"
    assert root.text() == "Monday through Friday"


def test_search_includes_self_and_descendants():
    root = parse_tree(TREE)
    assert root.has("two_times")
    assert root.has("through")
    assert not root.has("up_to")
    assert root.first_named("a_day").text() == "Monday"
    assert [node.text() for node in root.all_named("a_day")] == ["Monday", "Friday"]
    assert root.first_named("up_to") is None
    assert root.all_named("up_to") == []


def test_string_round_trip():
    root = parse_tree(TREE)
    assert root.string() == TREE
    assert parse_tree(root.string()).string() == TREE


def test_quotes_and_escapes():
    node = Node("time", children=[Node("named_time", 'the "noon" \\ hour')])
    text = node.string()
    assert text == 'time { named_time: "the \\"noon\\" \\\\ hour" }'
    assert parse_tree(text).first_named("named_time").text() == 'the "noon" \\ hour'


def test_bare_numbers_and_whitespace():
    root = parse_tree('\n  hour_24 {\n    h24: 15\n    minute:"30"\n  }\n')
    assert root.first_named("h24").text() == "15"
    assert root.first_named("minute").text() == "30"
    assert root.text() == "15 30"


def test_several_roots_are_wrapped():
    root = parse_tree('a_day: "Monday" a_month: "May"')
    assert root.tag == "TOP"
    assert [child.tag for child in root.children()] == ["a_day", "a_month"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "year",
        'year { n_year: "1969" ',
        'year: "1969',
        "year: 1969 }",
        'year = "1969"',
        '{ n_year: "1969" }',
    ],
)
def test_malformed(text):
    with pytest.raises(ValueError):
        parse_tree(text)


def test_error_names_position():
    with pytest.raises(ValueError) as excinfo:
        parse_tree('year { n_year: "1969" } }')
    assert "position" in str(excinfo.value)


class ForeignNode:
    """A matcher's own node type, registered rather than subclassed"""

    def __init__(self, tag, text="", kids=()):
        self.tag = tag
        self.leaf_text = text
        self.kids = list(kids)

    def has(self, tag):
        return self.first_named(tag) is not None

    def first_named(self, tag):
        found = self.all_named(tag)
        return found[0] if found else None

    def all_named(self, tag):
        found = [self] if self.tag == tag else []
        for kid in self.kids:
            found.extend(kid.all_named(tag))
        return found

    def children(self):
        return list(self.kids)

    def text(self):
        return self.leaf_text or " ".join(kid.text() for kid in self.kids)


ParseNode.register(ForeignNode)


def test_foreign_children_are_searched():
    friday = ForeignNode("a_day", "Friday")
    root = Node("moment_or_period", children=[Node("relative_day", children=[friday])])
    assert isinstance(friday, ParseNode)
    assert root.has("a_day")
    assert root.first_named("a_day") is friday
    assert root.all_named("a_day") == [friday]
    assert not root.has("a_month")
    assert root.text() == "Friday"


def test_foreign_subtree_resolves():
    tree = parse_tree("particular { one_time { moment_or_period { moment { point_in_time { } } } } }")
    day = ForeignNode("some_day", kids=[ForeignNode("relative_day", kids=[ForeignNode("a_day", "Friday")])])
    tree.first_named("point_in_time").append(day)
    span = TimeParser().parse(tree, Config(now=Instant(1969, 5, 6, 12)))
    assert span == Span(Instant(1969, 5, 2), Instant(1969, 5, 3), False)
