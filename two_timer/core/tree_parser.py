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
Tagged parse trees.

The resolver reads phrases through the small ParseNode interface only, so any
matcher can feed it. Node is the bundled implementation, and TreeParser reads
the bracketed serialization the tagging stage emits, for example::

    two_times { moment_or_period { a_day: "Monday" } to { through: "through" }
                moment_or_period { a_day: "Friday" } }
"""

import string
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence


EOS = "<EOS>"

KEY_CHARS = string.ascii_letters + "_" + string.digits
BARE_VALUE_CHARS = string.digits + "-"


class ParseNode(ABC):
    """
    Read-only view of one node of a tagged parse

    has, first_named and all_named look at the node itself and all of its
    descendants, depth first, in document order.
    """

    @abstractmethod
    def has(self, tag: str) -> bool:
        pass

    @abstractmethod
    def first_named(self, tag: str) -> Optional["ParseNode"]:
        pass

    @abstractmethod
    def all_named(self, tag: str) -> List["ParseNode"]:
        pass

    @abstractmethod
    def children(self) -> List["ParseNode"]:
        pass

    @abstractmethod
    def text(self) -> str:
        pass


class Node(ParseNode):
    """
    A tagged node holding either matched text (a leaf) or child nodes.

    The text of an inner node is the text of its children joined by spaces.
    """

    def __init__(self, tag: str, text: Optional[str] = None, children: Sequence[ParseNode] = ()):
        self.tag = tag
        self._text = text
        self._children: List[ParseNode] = list(children)

    def append(self, child: ParseNode) -> None:
        self._children.append(child)

    # children may be any ParseNode, so only the interface methods are used on them
    def has(self, tag: str) -> bool:
        return self.tag == tag or any(child.has(tag) for child in self._children)

    def first_named(self, tag: str) -> Optional[ParseNode]:
        if self.tag == tag:
            return self
        for child in self._children:
            found = child.first_named(tag)
            if found is not None:
                return found
        return None

    def all_named(self, tag: str) -> List[ParseNode]:
        found = [self] if self.tag == tag else []
        for child in self._children:
            found.extend(child.all_named(tag))
        return found

    def children(self) -> List[ParseNode]:
        return list(self._children)

    def text(self) -> str:
        if self._text is not None:
            return self._text
        return " ".join(child.text() for child in self._children if child.text())

    def string(self) -> str:
        """Serialize in the format TreeParser reads"""
        if not self._children:
            escaped = (self._text or "").replace("\\", "\\\\").replace('"', '\\"')
            return f'{self.tag}: "{escaped}"'
        inner = " ".join(child.string() for child in self._children)
        return f"{self.tag} {{ {inner} }}"

    def __repr__(self) -> str:
        return f"Node({self.string()})"


class TreeParser:
    """
    Reads serialized tag trees.

    Grammar::

        node  := tag ":" value | tag "{" node* "}"
        value := "quoted text" | bare digits

    Several top-level nodes are wrapped in a TOP node.
    """

    def __init__(self) -> None:
        self.index: int = 0
        self.text: str = ""
        self.char: str = ""

    def load(self, input_text: str) -> None:
        """
        Load the text to parse

        Raises:
            ValueError: if the text is empty
        """
        if not input_text or not input_text.strip():
            raise ValueError("input text is empty")

        self.index = 0
        self.text = input_text
        self.char = input_text[0]

    def read(self) -> bool:
        if self.index < len(self.text) - 1:
            self.index += 1
            self.char = self.text[self.index]
            return True
        self.char = EOS
        return False

    def parse_ws(self) -> bool:
        """Skip whitespace; False once the end of the text is reached"""
        not_eos = self.char != EOS
        while not_eos and self.char in string.whitespace:
            not_eos = self.read()
        return not_eos

    def parse_char(self, expected_char: str) -> bool:
        if self.char == expected_char:
            self.read()
            return True
        return False

    def parse_key(self) -> str:
        if self.char == EOS:
            raise ValueError("unexpected end of text")

        key = ""
        while self.char != EOS and self.char in KEY_CHARS:
            key += self.char
            if not self.read():
                break

        if not key:
            raise ValueError(f"invalid tag character: {self.char!r}")
        return key

    def parse_value(self) -> str:
        if self.char == EOS:
            raise ValueError("unexpected end of text")

        value = ""

        # unquoted numbers
        if self.char in BARE_VALUE_CHARS:
            while self.char != EOS and self.char in BARE_VALUE_CHARS:
                value += self.char
                if not self.read():
                    break
            return value

        if self.char != '"':
            raise ValueError(f"value must start with a quote: {self.char!r}")
        self.read()

        escape = False
        while escape or self.char != '"':
            if self.char == EOS:
                raise ValueError("unclosed quote")
            if escape:
                escape = False
                value += self.char
            elif self.char == "\\":
                escape = True
            else:
                value += self.char
            if not self.read():
                raise ValueError("unclosed quote")

        # closing quote
        self.read()
        return value.strip()

    def parse_node(self) -> Node:
        tag = self.parse_key()
        self.parse_ws()

        if self.parse_char(":"):
            self.parse_ws()
            return Node(tag, text=self.parse_value())

        if not self.parse_char("{"):
            raise ValueError(f"expected ':' or '{{' after {tag!r} but found {self.char!r}")

        node = Node(tag)
        while self.parse_ws():
            if self.parse_char("}"):
                return node
            node.append(self.parse_node())
        raise ValueError(f"unclosed block {tag!r}")

    def parse(self, input_text: str) -> Node:
        """
        Parse a serialized tree

        Returns:
            Node: the root node

        Raises:
            ValueError: with the failing position if the text is malformed
        """
        self.load(input_text)
        roots = []
        try:
            while self.parse_ws():
                roots.append(self.parse_node())
        except ValueError as e:
            raise ValueError(f"tree parse error at position {self.index}: {e}") from e

        if len(roots) == 1:
            return roots[0]
        return Node("TOP", children=roots)


def parse_tree(text: str) -> Node:
    """Shortcut for TreeParser().parse(text)"""
    return TreeParser().parse(text)
