#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Read-only view over a parsed HTML element.

Rules never touch BeautifulSoup objects directly. They receive a ``Node``,
which exposes the tag name, attributes, text content and the sibling/parent
context the rules need, plus the derived properties used for dispatch
(block, void, blank and flanking whitespace).
"""

from __future__ import annotations

import re
from functools import cached_property
from typing import NamedTuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, PageElement, ProcessingInstruction

from govspeak_paste.constants import BLANK_EXEMPT_ELEMENTS, BLOCK_ELEMENTS, VOID_ELEMENTS

_WHITESPACE_ONLY = re.compile(r"^\s*$")
_NON_CONTENT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


class FlankingWhitespace(NamedTuple):
    """Whitespace to re-insert before and after a node's replacement."""

    leading: str
    trailing: str

    def __bool__(self) -> bool:
        return bool(self.leading or self.trailing)


class Node:
    """Immutable view over one element (or text node) of the parsed tree.

    Parameters
    ----------
    element : bs4.element.PageElement
        The underlying BeautifulSoup element.

    """

    def __init__(self, element: PageElement):
        self._element = element

    def __repr__(self) -> str:
        return f"Node({self.name!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Node) and other._element is self._element

    def __hash__(self) -> int:
        return id(self._element)

    @property
    def element(self) -> PageElement:
        """Return the wrapped BeautifulSoup element."""
        return self._element

    @property
    def is_text(self) -> bool:
        return isinstance(self._element, NavigableString) and not isinstance(self._element, _NON_CONTENT_STRINGS)

    @property
    def is_element(self) -> bool:
        return isinstance(self._element, Tag) and not isinstance(self._element, BeautifulSoup)

    @cached_property
    def name(self) -> str:
        """Lower-cased tag name, ``#text`` for text nodes, ``#document`` for the root."""
        if isinstance(self._element, BeautifulSoup):
            return "#document"
        if isinstance(self._element, Tag):
            return self._element.name.lower()
        return "#text"

    def get_attribute(self, name: str) -> str | None:
        """Return an attribute value as a string, or None when absent.

        Multi-valued attributes such as ``class`` are joined with spaces.
        """
        if not isinstance(self._element, Tag):
            return None
        value = self._element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def attributes(self) -> dict[str, str]:
        if not isinstance(self._element, Tag):
            return {}
        return {key: self.get_attribute(key) or "" for key in self._element.attrs}

    @cached_property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        if isinstance(self._element, NavigableString):
            return str(self._element)
        if isinstance(self._element, Tag):
            return self._element.get_text()
        return ""

    @property
    def children(self) -> tuple[Node, ...]:
        if not isinstance(self._element, Tag):
            return ()
        return tuple(Node(child) for child in self._element.children)

    @property
    def element_children(self) -> tuple[Node, ...]:
        if not isinstance(self._element, Tag):
            return ()
        return tuple(Node(child) for child in self._element.children if isinstance(child, Tag))

    @property
    def parent(self) -> Node | None:
        parent = self._element.parent
        return Node(parent) if parent is not None else None

    @property
    def previous_sibling(self) -> Node | None:
        sibling = self._element.previous_sibling
        return Node(sibling) if sibling is not None else None

    @property
    def next_sibling(self) -> Node | None:
        sibling = self._element.next_sibling
        return Node(sibling) if sibling is not None else None

    @property
    def previous_element_sibling(self) -> Node | None:
        sibling = self._element.previous_sibling
        while sibling is not None and not isinstance(sibling, Tag):
            sibling = sibling.previous_sibling
        return Node(sibling) if sibling is not None else None

    @property
    def last_element_child(self) -> Node | None:
        element_children = self.element_children
        return element_children[-1] if element_children else None

    @property
    def is_block(self) -> bool:
        return self.name in BLOCK_ELEMENTS

    @property
    def is_void(self) -> bool:
        return self.name in VOID_ELEMENTS

    @property
    def has_void(self) -> bool:
        """Whether any descendant is a void element such as ``img`` or ``br``."""
        if not isinstance(self._element, Tag):
            return False
        return self._element.find(list(VOID_ELEMENTS)) is not None

    @cached_property
    def is_blank(self) -> bool:
        """Whether the node carries no content: whitespace-only text and no void elements."""
        return (
            self.name not in BLANK_EXEMPT_ELEMENTS
            and _WHITESPACE_ONLY.match(self.text_content) is not None
            and not self.is_void
            and not self.has_void
        )

    @cached_property
    def flanking_whitespace(self) -> FlankingWhitespace:
        """Whitespace that conversion would otherwise lose at the node's edges.

        Block nodes never have flanking whitespace. For inline nodes a leading
        (trailing) space is reported when the text content starts (ends) with
        whitespace that the previous (next) sibling does not already provide.
        """
        if self.is_block:
            return FlankingWhitespace("", "")

        text = self.text_content
        has_leading = bool(text) and text[0].isspace()
        has_trailing = bool(text) and text[-1].isspace()
        blank_with_spaces = self.is_blank and has_leading and has_trailing

        leading = " " if has_leading and not self._is_flanked_by_whitespace("left") else ""
        trailing = ""
        if not blank_with_spaces and has_trailing and not self._is_flanked_by_whitespace("right"):
            trailing = " "
        return FlankingWhitespace(leading, trailing)

    def _is_flanked_by_whitespace(self, side: str) -> bool:
        if side == "left":
            sibling = self.previous_sibling
            pattern = re.compile(r" $")
        else:
            sibling = self.next_sibling
            pattern = re.compile(r"^ ")

        if sibling is None:
            return False
        if sibling.is_text:
            return pattern.search(sibling.text_content) is not None
        if sibling.is_element and not sibling.is_block:
            return pattern.search(sibling.text_content) is not None
        return False
